"""Tests for the userdir CLI against a temporary SQLite database."""

import asyncio

import pytest
from typer.testing import CliRunner

from userdir.domain.user import User
from userdir.infrastructure.persistence.sqlalchemy import UserRepositorySQLAlchemy
from userdir.presentation.api import dependencies
from userdir.presentation.cli.app import app
from userdir_config import clear_settings_cache
from tests.shared.fixtures.database import sqlite_file_url

runner = CliRunner()


def _clear_caches() -> None:
    clear_settings_cache()
    dependencies.get_database_url.cache_clear()
    dependencies.get_engine.cache_clear()
    dependencies.get_session_maker.cache_clear()


@pytest.fixture(autouse=True)
def sqlite_database(tmp_path, monkeypatch):
    """Point the CLI at a SQLite file for the duration of a test."""
    monkeypatch.setenv("DATABASE_URL", sqlite_file_url(tmp_path))
    _clear_caches()
    yield
    _clear_caches()


def _add_user(name: str, email: str, age: int | None = None) -> None:
    async def _run():
        try:
            async with dependencies.get_session_maker()() as session:
                await UserRepositorySQLAlchemy(session).save(
                    User.create(name, email, age)
                )
                await session.commit()
        finally:
            await dependencies.get_engine().dispose()

    asyncio.run(_run())


class TestDbCommands:
    def test_init_creates_schema(self):
        result = runner.invoke(app, ["db", "init"])

        assert result.exit_code == 0, result.output
        assert "Database schema is up to date" in result.output

    def test_init_is_idempotent(self):
        runner.invoke(app, ["db", "init"])
        _add_user("Ivan Petrov", "ivan@example.com")

        result = runner.invoke(app, ["db", "init"])

        assert result.exit_code == 0
        assert "ivan@example.com" in runner.invoke(app, ["users", "list"]).output

    def test_drop_asks_for_confirmation(self):
        runner.invoke(app, ["db", "init"])

        result = runner.invoke(app, ["db", "drop"], input="n\n")

        assert result.exit_code != 0
        assert "All tables dropped" not in result.output

    def test_drop_with_yes(self):
        runner.invoke(app, ["db", "init"])

        result = runner.invoke(app, ["db", "drop", "--yes"])

        assert result.exit_code == 0
        assert "All tables dropped" in result.output


class TestUsersList:
    def test_empty_directory(self):
        runner.invoke(app, ["db", "init"])

        result = runner.invoke(app, ["users", "list"])

        assert result.exit_code == 0
        assert "No users stored" in result.output

    def test_lists_users(self):
        runner.invoke(app, ["db", "init"])
        _add_user("Ivan Petrov", "ivan@example.com", 30)
        _add_user("Maria Ivanova", "maria@example.com")

        result = runner.invoke(app, ["users", "list"])

        assert result.exit_code == 0
        assert "Users (2)" in result.output
        assert "Ivan Petrov" in result.output
        assert "maria@example.com" in result.output


class TestUsersShow:
    def test_shows_existing_user(self):
        runner.invoke(app, ["db", "init"])
        _add_user("Ivan Petrov", "ivan@example.com", 30)

        result = runner.invoke(app, ["users", "show", "1"])

        assert result.exit_code == 0, result.output
        assert "User 1" in result.output
        assert "ivan@example.com" in result.output

    def test_missing_user_exits_with_error(self):
        runner.invoke(app, ["db", "init"])

        result = runner.invoke(app, ["users", "show", "42"])

        assert result.exit_code == 1
        assert "No user with id 42" in result.output
