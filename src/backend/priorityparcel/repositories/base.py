# src/backend/priorityparcel/repositories/base.py
from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Iterable

from priorityparcel.models import ContactMessage, PrijsOfferte, User, Zending, ZendingUpdate
from priorityparcel.schemas.contact import ContactMessageCreate
from priorityparcel.schemas.offerte import PrijsOfferteCreate
from priorityparcel.schemas.user import UserCreate
from priorityparcel.schemas.zending import ZendingCreate, ZendingUpdateCreate

# statuses that no longer count as "active"
CLOSED_STATUSES = ("afgeleverd", "geannuleerd")
SECONDS_PER_DAY = 60 * 60 * 24
# largest value an INTEGER primary key column holds on every supported database
MAX_ROW_ID = 2**31 - 1


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def format_average_days(periods: Iterable[tuple[datetime, datetime]]) -> str:
    """Mean length of (start, end) periods in days, e.g. "2.1 dagen"."""
    days = [abs((end - start).total_seconds()) / SECONDS_PER_DAY for start, end in periods]
    if not days:
        return "0.0 dagen"
    return f"{sum(days) / len(days):.1f} dagen"


def matches(search: str | None, *values: str | None) -> bool:
    if not search:
        return True
    needle = search.lower()
    return any(needle in v.lower() for v in values if v)


class DuplicateRecordError(Exception):
    """A unique column (username, email, tracking code) already holds this value."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"{field} already exists: {value}")


class Storage(ABC):
    """Persistence contract shared by the in-memory and SQL backends.

    Lookups return None when nothing matches; they never raise for not-found.
    """

    # --- users ---
    @abstractmethod
    async def get_user(self, user_id: int) -> User | None: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None: ...

    @abstractmethod
    async def create_user(self, data: UserCreate, *, password_hash: str) -> User: ...

    @abstractmethod
    async def list_users(self, *, search: str | None = None) -> list[User]: ...

    @abstractmethod
    async def update_user_last_login(self, user_id: int) -> User | None: ...

    # --- contact messages ---
    @abstractmethod
    async def create_contact_message(self, data: ContactMessageCreate) -> ContactMessage: ...

    @abstractmethod
    async def list_contact_messages(self) -> list[ContactMessage]: ...

    @abstractmethod
    async def get_contact_message(self, message_id: int) -> ContactMessage | None: ...

    # --- price quotes ---
    @abstractmethod
    async def create_prijs_offerte(self, data: PrijsOfferteCreate) -> PrijsOfferte: ...

    @abstractmethod
    async def list_prijs_offertes(self) -> list[PrijsOfferte]: ...

    @abstractmethod
    async def get_prijs_offerte(self, offerte_id: int) -> PrijsOfferte | None: ...

    # --- shipments ---
    @abstractmethod
    async def create_zending(self, data: ZendingCreate) -> Zending: ...

    @abstractmethod
    async def get_zending(self, zending_id: int) -> Zending | None: ...

    @abstractmethod
    async def get_zending_by_tracking_code(self, tracking_code: str) -> Zending | None: ...

    @abstractmethod
    async def list_zendingen_by_user(self, user_id: int) -> list[Zending]: ...

    @abstractmethod
    async def list_zendingen(self, *, status: str | None = None, search: str | None = None) -> list[Zending]: ...

    @abstractmethod
    async def create_zending_update(self, data: ZendingUpdateCreate) -> ZendingUpdate: ...

    @abstractmethod
    async def list_zending_updates(self, zending_id: int) -> list[ZendingUpdate]: ...

    # --- dashboard aggregates ---
    @abstractmethod
    async def count_zendingen(self) -> int: ...

    @abstractmethod
    async def count_active_zendingen(self) -> int: ...

    @abstractmethod
    async def count_delivered_zendingen(self) -> int: ...

    @abstractmethod
    async def average_delivery_time(self) -> str: ...

    @abstractmethod
    async def customer_satisfaction(self) -> str: ...

    async def is_empty(self) -> bool:
        return not await self.list_users()
