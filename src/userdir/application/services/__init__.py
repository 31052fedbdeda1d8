from userdir.application.services.user_change_notifier import UserChangeNotifier
from userdir.application.services.user_directory_service import UserDirectoryService

__all__ = [
    "UserChangeNotifier",
    "UserDirectoryService",
]
