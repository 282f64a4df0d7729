from datetime import datetime
from typing import Literal
from pydantic import Field, EmailStr, field_validator
from priorityparcel.schemas.common import ApiModel, blank_to_none

TransportType = Literal["nationaal", "internationaal"]
Gewicht = Literal["0-5", "5-10", "10-20", "20-50", "50+"]
Afmetingen = Literal["klein", "middel", "groot", "extra-groot"]
Spoed = Literal["standaard", "spoed", "extra-spoed"]


class PrijsOfferteCreate(ApiModel):
    transport_type: TransportType
    gewicht: Gewicht
    afmetingen: Afmetingen
    spoed: Spoed
    naam: str = Field(min_length=2, max_length=255)
    bedrijf: str | None = Field(default=None, max_length=255)
    email: EmailStr
    telefoon: str = Field(min_length=10, max_length=64)
    ophaladres: str = Field(min_length=5, max_length=255)
    afleveradres: str = Field(min_length=5, max_length=255)
    bericht: str | None = Field(default=None, max_length=5000)
    # both computed/filled by the route
    prijs_indicatie: str | None = None
    ip_address: str | None = None

    blank_optional_strings = field_validator("bedrijf", "bericht", mode="before")(blank_to_none)


class PrijsOfferteOut(ApiModel):
    id: int
    transport_type: TransportType
    gewicht: Gewicht
    afmetingen: Afmetingen
    spoed: Spoed
    naam: str
    bedrijf: str | None
    email: str
    telefoon: str
    ophaladres: str
    afleveradres: str
    bericht: str | None
    prijs_indicatie: str | None
    ip_address: str | None
    is_verwerkt: bool
    created_at: datetime


class OfferteSubmissionOut(ApiModel):
    id: int
    message: str
    prijs_indicatie: str | None
