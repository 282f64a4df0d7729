# src/backend/priorityparcel/repositories/sql.py
from __future__ import annotations
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker

from priorityparcel.models import ContactMessage, PrijsOfferte, User, Zending, ZendingUpdate
from priorityparcel.repositories.base import MAX_ROW_ID, DuplicateRecordError, Storage, format_average_days, utcnow
from priorityparcel.repositories.contact_repo import ContactMessageRepo
from priorityparcel.repositories.offerte_repo import PrijsOfferteRepo
from priorityparcel.repositories.user_repo import UserRepo
from priorityparcel.repositories.zending_repo import ZendingRepo
from priorityparcel.schemas.contact import ContactMessageCreate
from priorityparcel.schemas.offerte import PrijsOfferteCreate
from priorityparcel.schemas.user import UserCreate
from priorityparcel.schemas.zending import ZendingCreate, ZendingUpdateCreate


def _storable(row_id: int) -> bool:
    # ids outside the column range can't exist; the driver would fail on them
    return 0 < row_id <= MAX_ROW_ID


class SqlStorage(Storage):
    """Storage backed by a SQLAlchemy async engine; one session per call."""

    def __init__(self, sessions: async_sessionmaker, *, customer_satisfaction: str = "4.8 / 5"):
        self.sessions = sessions
        self._customer_satisfaction = customer_satisfaction

    # ---------------- users ----------------
    async def get_user(self, user_id: int) -> User | None:
        if not _storable(user_id):
            return None
        async with self.sessions() as session:
            return await UserRepo(session).get_by_id(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        async with self.sessions() as session:
            return await UserRepo(session).get_by_username(username)

    async def get_user_by_email(self, email: str) -> User | None:
        async with self.sessions() as session:
            return await UserRepo(session).get_by_email(email)

    async def create_user(self, data: UserCreate, *, password_hash: str) -> User:
        async with self.sessions() as session:
            repo = UserRepo(session)
            if await repo.get_by_username(data.username):
                raise DuplicateRecordError("username", data.username)
            if await repo.get_by_email(data.email):
                raise DuplicateRecordError("email", data.email)
            now = utcnow()
            try:
                return await repo.create(
                    password_hash=password_hash,
                    is_active=True,
                    last_login=None,
                    created_at=now,
                    updated_at=now,
                    **data.model_dump(exclude={"password"}),
                )
            except IntegrityError:
                await session.rollback()
                # unique constraint caught a concurrent insert; find out which one
                if await repo.get_by_email(data.email):
                    raise DuplicateRecordError("email", data.email)
                raise DuplicateRecordError("username", data.username)

    async def list_users(self, *, search: str | None = None) -> list[User]:
        async with self.sessions() as session:
            return await UserRepo(session).list(search=search)

    async def update_user_last_login(self, user_id: int) -> User | None:
        if not _storable(user_id):
            return None
        async with self.sessions() as session:
            repo = UserRepo(session)
            user = await repo.get_by_id(user_id)
            if user is None:
                return None
            return await repo.touch_last_login(user, utcnow())

    # ---------------- contact messages ----------------
    async def create_contact_message(self, data: ContactMessageCreate) -> ContactMessage:
        async with self.sessions() as session:
            return await ContactMessageRepo(session).create(
                is_beantwoord=False, created_at=utcnow(), **data.model_dump()
            )

    async def list_contact_messages(self) -> list[ContactMessage]:
        async with self.sessions() as session:
            return await ContactMessageRepo(session).list_all()

    async def get_contact_message(self, message_id: int) -> ContactMessage | None:
        if not _storable(message_id):
            return None
        async with self.sessions() as session:
            return await ContactMessageRepo(session).get(message_id)

    # ---------------- price quotes ----------------
    async def create_prijs_offerte(self, data: PrijsOfferteCreate) -> PrijsOfferte:
        async with self.sessions() as session:
            return await PrijsOfferteRepo(session).create(
                is_verwerkt=False, created_at=utcnow(), **data.model_dump()
            )

    async def list_prijs_offertes(self) -> list[PrijsOfferte]:
        async with self.sessions() as session:
            return await PrijsOfferteRepo(session).list_all()

    async def get_prijs_offerte(self, offerte_id: int) -> PrijsOfferte | None:
        if not _storable(offerte_id):
            return None
        async with self.sessions() as session:
            return await PrijsOfferteRepo(session).get(offerte_id)

    # ---------------- shipments ----------------
    async def create_zending(self, data: ZendingCreate) -> Zending:
        async with self.sessions() as session:
            repo = ZendingRepo(session)
            if await repo.get_by_tracking_code(data.tracking_code):
                raise DuplicateRecordError("trackingCode", data.tracking_code)
            now = utcnow()
            try:
                return await repo.create(created_at=now, updated_at=now, **data.model_dump())
            except IntegrityError:
                await session.rollback()
                raise DuplicateRecordError("trackingCode", data.tracking_code)

    async def get_zending(self, zending_id: int) -> Zending | None:
        if not _storable(zending_id):
            return None
        async with self.sessions() as session:
            return await ZendingRepo(session).get(zending_id)

    async def get_zending_by_tracking_code(self, tracking_code: str) -> Zending | None:
        async with self.sessions() as session:
            return await ZendingRepo(session).get_by_tracking_code(tracking_code)

    async def list_zendingen_by_user(self, user_id: int) -> list[Zending]:
        if not _storable(user_id):
            return []
        async with self.sessions() as session:
            return await ZendingRepo(session).list(user_id=user_id)

    async def list_zendingen(self, *, status: str | None = None, search: str | None = None) -> list[Zending]:
        async with self.sessions() as session:
            return await ZendingRepo(session).list(status=status, search=search)

    async def create_zending_update(self, data: ZendingUpdateCreate) -> ZendingUpdate:
        values = data.model_dump()
        values["tijdstip"] = values["tijdstip"] or utcnow()
        async with self.sessions() as session:
            return await ZendingRepo(session).add_update(**values)

    async def list_zending_updates(self, zending_id: int) -> list[ZendingUpdate]:
        if not _storable(zending_id):
            return []
        async with self.sessions() as session:
            return await ZendingRepo(session).list_updates(zending_id)

    # ---------------- dashboard aggregates ----------------
    async def count_zendingen(self) -> int:
        async with self.sessions() as session:
            return await ZendingRepo(session).count()

    async def count_active_zendingen(self) -> int:
        async with self.sessions() as session:
            return await ZendingRepo(session).count_active()

    async def count_delivered_zendingen(self) -> int:
        async with self.sessions() as session:
            return await ZendingRepo(session).count(status="afgeleverd")

    async def average_delivery_time(self) -> str:
        async with self.sessions() as session:
            periods = await ZendingRepo(session).delivery_periods()
        return format_average_days(periods)

    async def customer_satisfaction(self) -> str:
        return self._customer_satisfaction
