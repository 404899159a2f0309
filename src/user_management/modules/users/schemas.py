"""Pydantic schemas for user operations."""

from datetime import date

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from user_management.core.constants import (
    MAX_EMAIL_LENGTH,
    MAX_FORENAME_LENGTH,
    MAX_SURNAME_LENGTH,
)


DATE_OF_BIRTH_IN_FUTURE = "Date of Birth cannot be in the future."


# ============================================================
# Validation
# ============================================================


def validate_date_of_birth(value: date | None) -> date | None:
    """Validate that a date of birth is not in the future.

    Args:
        value: The date of birth, if any

    Returns:
        The validated date

    Raises:
        ValueError: If the date is after today
    """
    if value is not None and value > date.today():
        raise ValueError(DATE_OF_BIRTH_IN_FUTURE)
    return value


def validate_email_length(value: str) -> str:
    """Validate that an email address fits the stored column."""
    if len(value) > MAX_EMAIL_LENGTH:
        raise ValueError(f"Email cannot exceed {MAX_EMAIL_LENGTH} characters.")
    return value


# ============================================================
# User Schemas
# ============================================================


class UserBase(BaseModel):
    """Base schema for user data."""

    # camelCase keys are accepted alongside field names; unknown keys are rejected
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    forename: str = Field(..., min_length=1, max_length=MAX_FORENAME_LENGTH)
    surname: str = Field(..., min_length=1, max_length=MAX_SURNAME_LENGTH)
    email: EmailStr
    is_active: bool = Field(True, validation_alias=AliasChoices("is_active", "isActive"))
    date_of_birth: date | None = Field(
        None, validation_alias=AliasChoices("date_of_birth", "dateOfBirth")
    )

    @field_validator("email")
    @classmethod
    def email_length(cls, v: str) -> str:
        """Validate email length."""
        return validate_email_length(v)

    @field_validator("date_of_birth")
    @classmethod
    def date_of_birth_not_in_future(cls, v: date | None) -> date | None:
        """Validate date of birth."""
        return validate_date_of_birth(v)


class UserCreate(UserBase):
    """Schema for creating a new user."""


class UserUpdate(UserBase):
    """Schema for replacing a user's fields.

    ``id`` must match the ID in the request path. Fields left out of the
    payload keep their stored value.
    """

    id: int


class UserResponse(BaseModel):
    """Schema for user response data."""

    id: int
    forename: str
    surname: str
    email: str
    is_active: bool
    date_of_birth: date | None = None

    model_config = ConfigDict(from_attributes=True)
