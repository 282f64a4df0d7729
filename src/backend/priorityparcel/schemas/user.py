from pydantic import Field, EmailStr, StringConstraints, field_validator
from datetime import datetime
from typing import Annotated, Literal
from priorityparcel.schemas.common import ApiModel, blank_to_none

UserRole = Literal["admin", "klant", "medewerker"]
# passwords are checked byte for byte, so no whitespace stripping
Password = Annotated[str, StringConstraints(strip_whitespace=False)]


class UserCreate(ApiModel):
    username: str = Field(min_length=3, max_length=255)
    email: EmailStr
    password: Password = Field(min_length=6)
    role: UserRole = "klant"
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    bedrijf: str | None = Field(default=None, max_length=255)
    telefoon: str | None = Field(default=None, min_length=10, max_length=64)
    adres: str | None = Field(default=None, max_length=255)
    postcode: str | None = Field(default=None, max_length=16)
    plaats: str | None = Field(default=None, max_length=255)

    blank_optional_strings = field_validator(
        "first_name", "last_name", "bedrijf", "telefoon", "adres", "postcode", "plaats", mode="before"
    )(blank_to_none)


class UserOut(ApiModel):
    id: int
    username: str
    email: str
    role: UserRole
    first_name: str | None
    last_name: str | None
    bedrijf: str | None
    telefoon: str | None
    adres: str | None
    postcode: str | None
    plaats: str | None
    is_active: bool
    last_login: datetime | None
    created_at: datetime
    updated_at: datetime


class LoginIn(ApiModel):
    email: EmailStr
    password: Password = Field(min_length=1)
    remember_me: bool = False


class LoginOut(ApiModel):
    user: UserOut
    token: str
