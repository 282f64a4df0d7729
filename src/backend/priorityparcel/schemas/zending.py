from datetime import datetime, timezone
from typing import Literal
from pydantic import Field, field_validator
from priorityparcel.schemas.common import ApiModel
from priorityparcel.schemas.offerte import TransportType, Spoed

ZendingStatus = Literal["gepland", "opgehaald", "onderweg", "afgeleverd", "vertraagd", "geannuleerd"]


class ZendingCreate(ApiModel):
    tracking_code: str = Field(min_length=8, max_length=32)
    user_id: int = Field(gt=0)
    status: ZendingStatus = "gepland"
    prioriteit: Spoed = "standaard"
    transport_type: TransportType = "nationaal"
    verzender: str = Field(min_length=1, max_length=255)
    ontvanger: str = Field(min_length=1, max_length=255)
    ophaladres: str = Field(min_length=5, max_length=255)
    afleveradres: str = Field(min_length=5, max_length=255)
    prijs: str | None = None
    betaald: bool = False
    verzend_datum: datetime
    geplande_aflever_datum: datetime | None = None
    werkelijke_aflever_datum: datetime | None = None


class ZendingUpdateCreate(ApiModel):
    zending_id: int = Field(gt=0)
    status: ZendingStatus
    locatie: str | None = Field(default=None, max_length=255)
    notitie: str | None = None
    user_id: int | None = None
    tijdstip: datetime | None = None  # defaults to now

    @field_validator("tijdstip")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        # naive timestamps are UTC so history entries stay comparable
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class LastUpdate(ApiModel):
    status: ZendingStatus
    locatie: str | None
    tijdstip: datetime | None


class ZendingOut(ApiModel):
    id: int
    tracking_code: str
    user_id: int
    status: ZendingStatus
    prioriteit: Spoed
    transport_type: TransportType
    verzender: str
    ontvanger: str
    ophaladres: str
    afleveradres: str
    prijs: str | None
    betaald: bool
    verzend_datum: datetime
    geplande_aflever_datum: datetime | None
    werkelijke_aflever_datum: datetime | None
    last_update: LastUpdate | None
    created_at: datetime
    updated_at: datetime


class TrackingEventOut(ApiModel):
    status: ZendingStatus
    locatie: str | None
    notitie: str | None
    tijdstip: datetime


class ZendingUpdateOut(TrackingEventOut):
    id: int
    zending_id: int
    user_id: int | None


class TrackingOut(ApiModel):
    """Public track & trace view: no addresses, price or owner."""
    tracking_code: str
    status: ZendingStatus
    prioriteit: Spoed
    verzend_datum: datetime
    geplande_aflever_datum: datetime | None
    werkelijke_aflever_datum: datetime | None
    last_update: LastUpdate | None
    updates: list[TrackingEventOut]
