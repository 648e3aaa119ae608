"""
Business logic for users.

``UserService`` sits between the HTTP endpoints and the repository.
It converts dates of birth between their in-memory and storage
representations and enriches reads with the age computed at request
time.  Validation happens upstream in the request schemas; repository
errors (``UserNotFoundError``, ``StorageError``) propagate unchanged.
"""

import logging
from datetime import date
from typing import Callable, List, Optional, Union

from user_api.app.core.dates import from_storage, to_storage
from user_api.app.models.user import CreateUserParams, UpdateUserParams, UserRecord
from user_api.app.repositories.user_repository import UserRepository
from user_api.app.schemas.user import UserRead, UserWithAge
from user_api.app.services.age import AgePolicy, calculate_age


class UserService:
    """Create, read, update, delete and list users."""

    def __init__(
        self,
        repository: UserRepository,
        logger: Optional[logging.Logger] = None,
        today: Callable[[], date] = date.today,
        age_policy: Union[AgePolicy, str] = AgePolicy.CALENDAR,
    ) -> None:
        self._repository = repository
        self._logger = logger or logging.getLogger("user_api.service")
        self._today = today
        self._age_policy = AgePolicy(age_policy)

    async def create_user(self, name: str, dob: date) -> UserRead:
        record = await self._repository.create(CreateUserParams(name=name, dob=to_storage(dob)))
        self._logger.debug("Stored user %s", record.id)
        return self._to_read(record)

    async def get_user_by_id(self, user_id: int) -> UserWithAge:
        record = await self._repository.get_by_id(user_id)
        return self._with_age(record, self._today())

    async def list_users(self) -> List[UserWithAge]:
        records = await self._repository.list()
        today = self._today()
        return [self._with_age(record, today) for record in records]

    async def update_user(self, user_id: int, name: str, dob: date) -> UserRead:
        record = await self._repository.update(
            UpdateUserParams(id=user_id, name=name, dob=to_storage(dob))
        )
        return self._to_read(record)

    async def delete_user(self, user_id: int) -> None:
        await self._repository.delete(user_id)

    @staticmethod
    def _to_read(record: UserRecord) -> UserRead:
        return UserRead(id=record.id, name=record.name, dob=from_storage(record.dob))

    def _with_age(self, record: UserRecord, today: date) -> UserWithAge:
        dob = from_storage(record.dob)
        return UserWithAge(
            id=record.id,
            name=record.name,
            dob=dob,
            age=calculate_age(dob, today, self._age_policy),
        )
