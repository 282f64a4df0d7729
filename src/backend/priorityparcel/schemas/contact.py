from datetime import datetime
from pydantic import Field, EmailStr, field_validator
from priorityparcel.schemas.common import ApiModel, blank_to_none


class ContactMessageCreate(ApiModel):
    name: str = Field(min_length=2, max_length=255)
    email: EmailStr
    phone: str | None = Field(default=None, min_length=10, max_length=64)
    location: str | None = Field(default=None, max_length=255)
    message: str = Field(min_length=5, max_length=5000)
    # filled in from the request by the route, never trusted from the body
    ip_address: str | None = None

    blank_optional_strings = field_validator("phone", "location", mode="before")(blank_to_none)


class ContactMessageOut(ApiModel):
    id: int
    name: str
    email: str
    phone: str | None
    location: str | None
    message: str
    ip_address: str | None
    is_beantwoord: bool
    created_at: datetime
