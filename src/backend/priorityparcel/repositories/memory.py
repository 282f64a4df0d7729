# src/backend/priorityparcel/repositories/memory.py
from __future__ import annotations
from itertools import count
from typing import TypeVar

from sqlalchemy import inspect

from priorityparcel.models import ContactMessage, PrijsOfferte, User, Zending, ZendingUpdate
from priorityparcel.repositories.base import (
    CLOSED_STATUSES,
    DuplicateRecordError,
    Storage,
    format_average_days,
    matches,
    utcnow,
)
from priorityparcel.schemas.contact import ContactMessageCreate
from priorityparcel.schemas.offerte import PrijsOfferteCreate
from priorityparcel.schemas.user import UserCreate
from priorityparcel.schemas.zending import ZendingCreate, ZendingUpdateCreate

R = TypeVar("R")


def _replace(record: R, **changes) -> R:
    """New detached instance with the same column values plus ``changes``."""
    values = {attr.key: getattr(record, attr.key) for attr in inspect(type(record)).column_attrs}
    values.update(changes)
    return type(record)(**values)


def _newest_first(records):
    return sorted(records, key=lambda r: (r.created_at, r.id), reverse=True)


def _by_verzend_datum(zendingen):
    return sorted(zendingen, key=lambda z: (z.verzend_datum, z.id), reverse=True)


class MemStorage(Storage):
    """Process-local store: one dict and one id counter per entity.

    Records are transient ORM instances that are never mutated in place;
    updates swap in a fresh copy. Data is lost when the process exits.
    """

    def __init__(self, *, customer_satisfaction: str = "4.8 / 5"):
        self._customer_satisfaction = customer_satisfaction

        self._users: dict[int, User] = {}
        self._contact_messages: dict[int, ContactMessage] = {}
        self._prijs_offertes: dict[int, PrijsOfferte] = {}
        self._zendingen: dict[int, Zending] = {}
        self._zending_updates: dict[int, ZendingUpdate] = {}

        self._user_ids = count(1)
        self._contact_message_ids = count(1)
        self._prijs_offerte_ids = count(1)
        self._zending_ids = count(1)
        self._zending_update_ids = count(1)

    # ---------------- users ----------------
    async def get_user(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)

    async def get_user_by_email(self, email: str) -> User | None:
        wanted = email.lower()
        return next((u for u in self._users.values() if u.email.lower() == wanted), None)

    async def create_user(self, data: UserCreate, *, password_hash: str) -> User:
        if await self.get_user_by_username(data.username):
            raise DuplicateRecordError("username", data.username)
        if await self.get_user_by_email(data.email):
            raise DuplicateRecordError("email", data.email)

        now = utcnow()
        user = User(
            id=next(self._user_ids),
            password_hash=password_hash,
            is_active=True,
            last_login=None,
            created_at=now,
            updated_at=now,
            **data.model_dump(exclude={"password"}),
        )
        self._users[user.id] = user
        return user

    async def list_users(self, *, search: str | None = None) -> list[User]:
        return [
            u for u in self._users.values()
            if matches(search, u.username, u.email, u.first_name, u.last_name, u.bedrijf)
        ]

    async def update_user_last_login(self, user_id: int) -> User | None:
        user = self._users.get(user_id)
        if user is None:
            return None
        now = utcnow()
        updated = _replace(user, last_login=now, updated_at=now)
        self._users[user_id] = updated
        return updated

    # ---------------- contact messages ----------------
    async def create_contact_message(self, data: ContactMessageCreate) -> ContactMessage:
        msg = ContactMessage(
            id=next(self._contact_message_ids),
            is_beantwoord=False,
            created_at=utcnow(),
            **data.model_dump(),
        )
        self._contact_messages[msg.id] = msg
        return msg

    async def list_contact_messages(self) -> list[ContactMessage]:
        return _newest_first(self._contact_messages.values())

    async def get_contact_message(self, message_id: int) -> ContactMessage | None:
        return self._contact_messages.get(message_id)

    # ---------------- price quotes ----------------
    async def create_prijs_offerte(self, data: PrijsOfferteCreate) -> PrijsOfferte:
        offerte = PrijsOfferte(
            id=next(self._prijs_offerte_ids),
            is_verwerkt=False,
            created_at=utcnow(),
            **data.model_dump(),
        )
        self._prijs_offertes[offerte.id] = offerte
        return offerte

    async def list_prijs_offertes(self) -> list[PrijsOfferte]:
        return _newest_first(self._prijs_offertes.values())

    async def get_prijs_offerte(self, offerte_id: int) -> PrijsOfferte | None:
        return self._prijs_offertes.get(offerte_id)

    # ---------------- shipments ----------------
    async def create_zending(self, data: ZendingCreate) -> Zending:
        if await self.get_zending_by_tracking_code(data.tracking_code):
            raise DuplicateRecordError("trackingCode", data.tracking_code)

        now = utcnow()
        zending = Zending(
            id=next(self._zending_ids),
            last_update_status=None,
            last_update_locatie=None,
            last_update_tijdstip=None,
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )
        self._zendingen[zending.id] = zending
        return zending

    async def get_zending(self, zending_id: int) -> Zending | None:
        return self._zendingen.get(zending_id)

    async def get_zending_by_tracking_code(self, tracking_code: str) -> Zending | None:
        wanted = tracking_code.upper()
        return next((z for z in self._zendingen.values() if z.tracking_code.upper() == wanted), None)

    async def list_zendingen_by_user(self, user_id: int) -> list[Zending]:
        return _by_verzend_datum(z for z in self._zendingen.values() if z.user_id == user_id)

    async def list_zendingen(self, *, status: str | None = None, search: str | None = None) -> list[Zending]:
        return _by_verzend_datum(
            z for z in self._zendingen.values()
            if (status is None or z.status == status)
            and matches(search, z.tracking_code, z.verzender, z.ontvanger, z.afleveradres)
        )

    async def create_zending_update(self, data: ZendingUpdateCreate) -> ZendingUpdate:
        values = data.model_dump()
        values["tijdstip"] = values["tijdstip"] or utcnow()
        update = ZendingUpdate(id=next(self._zending_update_ids), **values)
        self._zending_updates[update.id] = update

        # the entry with the latest tijdstip is the shipment's current state
        zending = self._zendingen.get(update.zending_id)
        if zending is not None and (
            zending.last_update_tijdstip is None or update.tijdstip >= zending.last_update_tijdstip
        ):
            self._zendingen[zending.id] = _replace(
                zending,
                status=update.status,
                last_update_status=update.status,
                last_update_locatie=update.locatie,
                last_update_tijdstip=update.tijdstip,
                updated_at=utcnow(),
            )
        return update

    async def list_zending_updates(self, zending_id: int) -> list[ZendingUpdate]:
        return sorted(
            (u for u in self._zending_updates.values() if u.zending_id == zending_id),
            key=lambda u: (u.tijdstip, u.id),
            reverse=True,
        )

    # ---------------- dashboard aggregates ----------------
    async def count_zendingen(self) -> int:
        return len(self._zendingen)

    async def count_active_zendingen(self) -> int:
        return sum(1 for z in self._zendingen.values() if z.status not in CLOSED_STATUSES)

    async def count_delivered_zendingen(self) -> int:
        return sum(1 for z in self._zendingen.values() if z.status == "afgeleverd")

    async def average_delivery_time(self) -> str:
        return format_average_days(
            (z.verzend_datum, z.werkelijke_aflever_datum)
            for z in self._zendingen.values()
            if z.status == "afgeleverd" and z.werkelijke_aflever_datum and z.verzend_datum
        )

    async def customer_satisfaction(self) -> str:
        return self._customer_satisfaction
