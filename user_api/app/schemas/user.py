"""
Pydantic models for user data.

``UserCreate`` and ``UserUpdate`` validate request bodies: ``name`` is
required and non-empty, ``dob`` must be a ``YYYY-MM-DD`` string naming
a real day.  ``UserRead`` is the stored user as returned by create and
update; ``UserWithAge`` adds the age derived at read time.  Dates are
serialised back to ``YYYY-MM-DD``.
"""

from datetime import date

from pydantic import BaseModel, Field, field_serializer, field_validator

from user_api.app.core.dates import format_wire_date, parse_wire_date


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Alice"])
    dob: date = Field(..., examples=["1990-05-10"], description="Date of birth, YYYY-MM-DD")

    @field_serializer("dob")
    def serialize_dob(self, value: date) -> str:
        return format_wire_date(value)


class UserPayload(UserBase):
    """Common request body for create and update."""

    @field_validator("dob", mode="before")
    @classmethod
    def parse_dob(cls, value):
        # Pydantic's own date parsing also accepts timestamps and other
        # ISO shapes; only the exact wire format is allowed here.
        if isinstance(value, date):
            return value
        return parse_wire_date(value)


class UserCreate(UserPayload):
    """Schema for creating a user."""


class UserUpdate(UserPayload):
    """Schema for replacing a user's name and date of birth."""


class UserRead(UserBase):
    """Schema for a stored user."""

    id: int

    model_config = {
        "from_attributes": True,
    }


class UserWithAge(UserRead):
    """Stored user enriched with the age computed at read time."""

    age: int
