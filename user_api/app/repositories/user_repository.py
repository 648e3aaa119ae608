"""
Data access for users.

``UserRepository`` is the narrow interface the service depends on;
``SQLiteUserRepository`` implements it on top of the shared
``Database`` handle.  Each operation issues exactly one parameterised
statement.  Missing rows raise ``UserNotFoundError``; any driver error
is re-raised as ``StorageError`` with the original exception chained.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional, Protocol

from user_api.app.core.db import Database
from user_api.app.core.exceptions import StorageError, UserNotFoundError
from user_api.app.models.user import CreateUserParams, UpdateUserParams, UserRecord


class UserRepository(Protocol):
    async def create(self, params: CreateUserParams) -> UserRecord: ...

    async def get_by_id(self, user_id: int) -> UserRecord: ...

    async def list(self) -> List[UserRecord]: ...

    async def update(self, params: UpdateUserParams) -> UserRecord: ...

    async def delete(self, user_id: int) -> None: ...


class SQLiteUserRepository:
    """``UserRepository`` backed by the ``users`` table."""

    def __init__(self, database: Database, logger: Optional[logging.Logger] = None) -> None:
        self._database = database
        self._logger = logger or logging.getLogger("user_api.repository")

    async def create(self, params: CreateUserParams) -> UserRecord:
        row = self._fetch_one(
            "create",
            "INSERT INTO users (name, dob) VALUES (?, ?) RETURNING id, name, dob",
            (params.name, params.dob),
        )
        return self._row_to_record(row)

    async def get_by_id(self, user_id: int) -> UserRecord:
        row = self._fetch_one(
            "get",
            "SELECT id, name, dob FROM users WHERE id = ?",
            (user_id,),
        )
        if row is None:
            raise UserNotFoundError(user_id)
        return self._row_to_record(row)

    async def list(self) -> List[UserRecord]:
        try:
            with self._database.cursor() as cursor:
                rows = cursor.execute("SELECT id, name, dob FROM users ORDER BY id").fetchall()
        except sqlite3.Error as exc:
            raise StorageError(str(exc), operation="list") from exc
        return [self._row_to_record(row) for row in rows]

    async def update(self, params: UpdateUserParams) -> UserRecord:
        row = self._fetch_one(
            "update",
            "UPDATE users SET name = ?, dob = ? WHERE id = ? RETURNING id, name, dob",
            (params.name, params.dob, params.id),
        )
        if row is None:
            raise UserNotFoundError(params.id)
        return self._row_to_record(row)

    async def delete(self, user_id: int) -> None:
        try:
            with self._database.cursor() as cursor:
                cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
                affected = cursor.rowcount
        except sqlite3.Error as exc:
            raise StorageError(str(exc), operation="delete") from exc
        if not affected:
            raise UserNotFoundError(user_id)

    def _fetch_one(self, operation: str, sql: str, params: tuple) -> Optional[sqlite3.Row]:
        self._logger.debug("Executing %s query", operation)
        try:
            with self._database.cursor() as cursor:
                # Rows produced by RETURNING must be consumed before commit.
                return cursor.execute(sql, params).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(str(exc), operation=operation) from exc

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> UserRecord:
        return UserRecord(id=row["id"], name=row["name"], dob=row["dob"])
