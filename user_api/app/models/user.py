"""Stored user records and the parameters used to write them."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """A row of the ``users`` table as returned by the repository.

    ``dob`` is kept in its storage representation; ``core.dates``
    converts it back to a ``date``.
    """

    id: int
    name: str
    dob: str


@dataclass(frozen=True)
class CreateUserParams:
    name: str
    dob: str


@dataclass(frozen=True)
class UpdateUserParams:
    id: int
    name: str
    dob: str


__all__ = ["UserRecord", "CreateUserParams", "UpdateUserParams"]
