"""User management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, Request, Response, status

from userdir.domain.user import User
from userdir.presentation.api.dependencies import DBSession, DirectoryService
from userdir.presentation.api.schemas.common import ErrorResponse
from userdir.presentation.api.schemas.users import Link, UserRequest, UserResource

router = APIRouter(prefix="/users")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid user data"},
    404: {"model": ErrorResponse, "description": "User not found"},
    409: {"model": ErrorResponse, "description": "Email already registered"},
}


def _link(request: Request, route: str, **params: object) -> Link:
    return Link(href=str(request.url_for(route, **params)))


def _to_resource(request: Request, user: User, *, full: bool = True) -> UserResource:
    """Map a user to its resource representation.

    ``full=False`` keeps only the self link (used for search results).
    """
    links = {"self": _link(request, "get_user", user_id=user.id)}
    if full:
        links["update"] = _link(request, "update_user", user_id=user.id)
        links["delete"] = _link(request, "delete_user", user_id=user.id)
        links["users"] = _link(request, "list_users")
        links["by-email"] = _link(request, "get_user_by_email", email=user.email)

    return UserResource(
        id=user.id,
        name=user.name,
        email=user.email,
        age=user.age,
        created_at=user.created_at,
        links=links,
    )


@router.post(
    "",
    name="create_user",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
    responses={
        201: {"description": "User created successfully"},
        400: ERROR_RESPONSES[400],
        409: ERROR_RESPONSES[409],
    },
)
async def create_user(
    payload: UserRequest,
    request: Request,
    response: Response,
    session: DBSession,
    service: DirectoryService,
) -> UserResource:
    """Create a new user with a unique email address."""
    user = await service.create(
        name=payload.name,
        email=payload.email,
        age=payload.age,
    )
    await session.commit()

    resource = _to_resource(request, user)
    response.headers["Location"] = resource.links["self"].href
    return resource


@router.get(
    "",
    name="list_users",
    summary="List all users",
)
async def list_users(
    request: Request,
    service: DirectoryService,
) -> list[UserResource]:
    """Return every user in creation order."""
    users = await service.list_all()
    return [_to_resource(request, u) for u in users]


@router.get(
    "/search",
    name="search_users",
    summary="Search users by name",
    responses={400: {"model": ErrorResponse, "description": "Missing name parameter"}},
)
async def search_users(
    request: Request,
    service: DirectoryService,
    name: Annotated[
        str,
        Query(description="Name or part of a name, case-insensitive"),
    ],
) -> list[UserResource]:
    """Find users whose name contains the given fragment."""
    users = await service.search_by_name(name)
    return [_to_resource(request, u, full=False) for u in users]


@router.get(
    "/email/{email}",
    name="get_user_by_email",
    summary="Get a user by email",
    responses={404: ERROR_RESPONSES[404]},
)
async def get_user_by_email(
    email: str,
    request: Request,
    service: DirectoryService,
) -> UserResource:
    """Return the user registered with the given email."""
    user = await service.get_by_email(email)
    return _to_resource(request, user)


@router.get(
    "/{user_id}",
    name="get_user",
    summary="Get a user by ID",
    responses={404: ERROR_RESPONSES[404]},
)
async def get_user(
    user_id: int,
    request: Request,
    service: DirectoryService,
) -> UserResource:
    """Return a single user."""
    user = await service.get_by_id(user_id)
    return _to_resource(request, user)


@router.put(
    "/{user_id}",
    name="update_user",
    summary="Update a user",
    responses=ERROR_RESPONSES,
)
async def update_user(
    user_id: int,
    payload: UserRequest,
    request: Request,
    session: DBSession,
    service: DirectoryService,
) -> UserResource:
    """Replace a user's name, email and age."""
    user = await service.update(
        user_id,
        name=payload.name,
        email=payload.email,
        age=payload.age,
    )
    await session.commit()
    return _to_resource(request, user)


@router.delete(
    "/{user_id}",
    name="delete_user",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    responses={
        204: {"description": "User deleted successfully"},
        404: ERROR_RESPONSES[404],
    },
)
async def delete_user(
    user_id: int,
    session: DBSession,
    service: DirectoryService,
) -> None:
    """Delete a user."""
    await service.delete(user_id)
    await session.commit()
