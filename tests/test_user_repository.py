from __future__ import annotations

import asyncio
import sqlite3

import pytest

from user_api.app.core.db import Database
from user_api.app.core.exceptions import StorageError, UserNotFoundError
from user_api.app.models.user import CreateUserParams, UpdateUserParams, UserRecord
from user_api.app.repositories.user_repository import SQLiteUserRepository


@pytest.fixture()
def repository(database: Database) -> SQLiteUserRepository:
    return SQLiteUserRepository(database)


def test_create_assigns_ids(repository: SQLiteUserRepository) -> None:
    first = asyncio.run(repository.create(CreateUserParams(name="Alice", dob="1990-05-10")))
    second = asyncio.run(repository.create(CreateUserParams(name="Bob", dob="1985-11-15")))

    assert first == UserRecord(id=1, name="Alice", dob="1990-05-10")
    assert second.id == 2


def test_get_by_id(repository: SQLiteUserRepository) -> None:
    created = asyncio.run(repository.create(CreateUserParams(name="Alice", dob="1990-05-10")))
    assert asyncio.run(repository.get_by_id(created.id)) == created


def test_get_missing_user(repository: SQLiteUserRepository) -> None:
    with pytest.raises(UserNotFoundError) as excinfo:
        asyncio.run(repository.get_by_id(999999))
    assert excinfo.value.user_id == 999999


def test_list_is_ordered_and_may_be_empty(repository: SQLiteUserRepository) -> None:
    assert asyncio.run(repository.list()) == []

    asyncio.run(repository.create(CreateUserParams(name="Alice", dob="1990-05-10")))
    asyncio.run(repository.create(CreateUserParams(name="Bob", dob="1985-11-15")))

    assert [record.name for record in asyncio.run(repository.list())] == ["Alice", "Bob"]


def test_update_replaces_fields(repository: SQLiteUserRepository) -> None:
    created = asyncio.run(repository.create(CreateUserParams(name="Alice", dob="1990-05-10")))
    updated = asyncio.run(repository.update(UpdateUserParams(id=created.id, name="Alicia", dob="1991-06-11")))

    assert updated == UserRecord(id=created.id, name="Alicia", dob="1991-06-11")
    assert asyncio.run(repository.get_by_id(created.id)) == updated


def test_update_missing_user(repository: SQLiteUserRepository) -> None:
    with pytest.raises(UserNotFoundError):
        asyncio.run(repository.update(UpdateUserParams(id=42, name="Nobody", dob="2000-01-01")))
    assert asyncio.run(repository.list()) == []


def test_delete_twice(repository: SQLiteUserRepository) -> None:
    created = asyncio.run(repository.create(CreateUserParams(name="Alice", dob="1990-05-10")))

    asyncio.run(repository.delete(created.id))
    with pytest.raises(UserNotFoundError):
        asyncio.run(repository.delete(created.id))
    with pytest.raises(UserNotFoundError):
        asyncio.run(repository.get_by_id(created.id))


def test_driver_errors_become_storage_errors(database: Database, repository: SQLiteUserRepository) -> None:
    database.connection.execute("DROP TABLE users")

    with pytest.raises(StorageError) as excinfo:
        asyncio.run(repository.create(CreateUserParams(name="Alice", dob="1990-05-10")))
    assert excinfo.value.operation == "create"
    assert isinstance(excinfo.value.__cause__, sqlite3.Error)

    with pytest.raises(StorageError):
        asyncio.run(repository.list())
    with pytest.raises(StorageError):
        asyncio.run(repository.delete(1))
