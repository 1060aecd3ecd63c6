"""User Schemas: Pydantic models with field-level validation for API boundaries.

Invariants:
    - Wire names are camelCase (firstName, lastName, dateOfBirth, phoneNumber)
    - UserCreate: email well-formed (kept verbatim, never normalized), names non-blank,
      dateOfBirth strictly in the past; no length caps on any string field
    - UserPatch: unknown keys dropped; explicit null rejected for required fields
    - Responses carry _links (self, users, update, replace, delete)

Design Decisions:
    - field_validator for side-effect-free transforms (strip): keeps models pure
    - UserPatch.to_update() reads model_fields_set: "absent" and "null" stay distinct
"""

from datetime import date
from typing import Annotated

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AfterValidator, BaseModel, ConfigDict, Field, PastDate,
    field_validator, model_validator,
)

from users_api.core.user import User, UserUpdate


def _check_email(v: str) -> str:
    """Reject malformed addresses; the accepted value is kept exactly as sent."""
    try:
        validate_email(v, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"Invalid email format: {e}")
    return v


Email = Annotated[str, AfterValidator(_check_email)]

_REQUIRED_FIELDS = ("email", "first_name", "last_name", "date_of_birth")


def _strip_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


class UserCreate(BaseModel):
    """Full user payload: used by POST and PUT."""
    model_config = ConfigDict(populate_by_name=True)

    email: Email
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    date_of_birth: PastDate = Field(alias="dateOfBirth")
    address: str | None = None
    phone_number: str | None = Field(None, alias="phoneNumber")

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        return _strip_name(v)

    def to_user(self) -> User:
        return User(
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            date_of_birth=self.date_of_birth,
            address=self.address,
            phone_number=self.phone_number,
        )


class UserPatch(BaseModel):
    """Partial user payload: used by PATCH. Only sent keys are applied."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    email: Email | None = None
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    date_of_birth: date | None = Field(None, alias="dateOfBirth")
    address: str | None = None
    phone_number: str | None = Field(None, alias="phoneNumber")

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_names(cls, v: str | None) -> str | None:
        return _strip_name(v)

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        for name in _REQUIRED_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                alias = type(self).model_fields[name].alias or name
                raise ValueError(f"{alias} cannot be null")
        return self

    def to_update(self) -> UserUpdate:
        values = {name: getattr(self, name) for name in self.model_fields_set}
        return UserUpdate(**values)


# --- Responses ----------------------------------------------------------------

class Link(BaseModel):
    href: str


class UserResponse(BaseModel):
    """User representation with resource links."""
    model_config = ConfigDict(populate_by_name=True)

    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    date_of_birth: date = Field(alias="dateOfBirth")
    address: str | None = None
    phone_number: str | None = Field(None, alias="phoneNumber")
    links: dict[str, Link] = Field(default_factory=dict, alias="_links")

    @classmethod
    def from_user(cls, user: User, links: dict[str, str]) -> "UserResponse":
        return cls(
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            date_of_birth=user.date_of_birth,
            address=user.address,
            phone_number=user.phone_number,
            links={rel: Link(href=href) for rel, href in links.items()},
        )


class UserList(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_list: list[UserResponse] = Field(default_factory=list, alias="userList")


class UserCollectionResponse(BaseModel):
    """Collection of users plus a self link."""
    model_config = ConfigDict(populate_by_name=True)

    embedded: UserList = Field(alias="_embedded")
    links: dict[str, Link] = Field(default_factory=dict, alias="_links")
