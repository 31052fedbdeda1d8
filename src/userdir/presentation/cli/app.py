"""User Directory CLI application using Typer.

This module provides command-line utilities for the user directory
service: running the API server, managing the database schema and
inspecting stored users.
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from userdir.application.services import UserChangeNotifier, UserDirectoryService
from userdir.domain.user import User
from userdir_config.settings import get_settings

app = typer.Typer(
    name="userdir",
    help="User Directory - user record service CLI",
    no_args_is_help=True,
)
console = Console()

T = TypeVar("T")


# Database subcommand group
db_app = typer.Typer(
    name="db",
    help="Database schema management",
    no_args_is_help=True,
)
app.add_typer(db_app)

# Users subcommand group
users_app = typer.Typer(
    name="users",
    help="Inspect stored users",
    no_args_is_help=True,
)
app.add_typer(users_app)


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: int | None = typer.Option(None, help="Port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(
        f"[bold green]{settings.app_name}[/bold green] listening on "
        f"[cyan]http://{host}:{port}[/cyan] ({settings.database_type})"
    )
    uvicorn.run(
        "userdir.presentation.api.app:app",
        host=host,
        port=port,
        reload=reload,
        log_config=None,  # keep the application's logging setup
    )


@db_app.command("init")
def db_init() -> None:
    """Create missing tables. Existing tables and rows are left untouched."""
    from userdir.presentation.api.dependencies import create_tables, get_engine

    async def _run() -> None:
        try:
            await create_tables()
        finally:
            await get_engine().dispose()

    asyncio.run(_run())
    console.print("[green]✓[/green] Database schema is up to date")


@db_app.command("drop")
def db_drop(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Drop all tables, deleting every stored user."""
    from userdir.presentation.api.dependencies import drop_tables, get_engine

    if not yes:
        typer.confirm("This deletes all users. Continue?", abort=True)

    async def _run() -> None:
        try:
            await drop_tables()
        finally:
            await get_engine().dispose()

    asyncio.run(_run())
    console.print("[yellow]All tables dropped[/yellow]")


async def _with_directory(action: Callable[[UserDirectoryService], Awaitable[T]]) -> T:
    """Run ``action`` against a read-only directory service, then release the pool."""
    from userdir.infrastructure.messaging import NullEventPublisher
    from userdir.infrastructure.persistence.sqlalchemy import (
        UserRepositorySQLAlchemy,
    )
    from userdir.presentation.api.dependencies import get_engine, get_session_maker

    try:
        async with get_session_maker()() as session:
            service = UserDirectoryService(
                user_repository=UserRepositorySQLAlchemy(session),
                notifier=UserChangeNotifier(NullEventPublisher()),
            )
            return await action(service)
    finally:
        await get_engine().dispose()


def _user_table(title: str, users: list[User]) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Name")
    table.add_column("Email", style="green")
    table.add_column("Age", justify="right")
    table.add_column("Created")

    for user in users:
        table.add_row(
            str(user.id),
            user.name,
            user.email,
            "" if user.age is None else str(user.age),
            user.created_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    return table


@users_app.command("list")
def users_list() -> None:
    """Print all users as a table."""

    async def _fetch(service: UserDirectoryService) -> tuple[int, list[User]]:
        return await service.count(), await service.list_all()

    total, users = asyncio.run(_with_directory(_fetch))
    if not total:
        console.print("[dim]No users stored.[/dim]")
        return

    console.print(_user_table(f"Users ({total})", users))


@users_app.command("show")
def users_show(user_id: int = typer.Argument(..., help="User ID")) -> None:
    """Print a single user."""

    async def _fetch(service: UserDirectoryService) -> User | None:
        if not await service.exists(user_id):
            return None
        return await service.get_by_id(user_id)

    user = asyncio.run(_with_directory(_fetch))
    if user is None:
        console.print(f"[red]No user with id {user_id}[/red]")
        raise typer.Exit(code=1)

    console.print(_user_table(f"User {user_id}", [user]))


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
