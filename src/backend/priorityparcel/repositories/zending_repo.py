from __future__ import annotations
from datetime import datetime
from sqlalchemy import select, update, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from priorityparcel.models.zending import Zending, ZendingUpdate
from priorityparcel.repositories.base import CLOSED_STATUSES, utcnow

class ZendingRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **values) -> Zending:
        zending = Zending(**values)
        self.session.add(zending)
        await self.session.commit()
        await self.session.refresh(zending)
        return zending

    async def get(self, zending_id: int) -> Zending | None:
        res = await self.session.execute(select(Zending).where(Zending.id == zending_id))
        return res.scalars().first()

    async def get_by_tracking_code(self, tracking_code: str) -> Zending | None:
        res = await self.session.execute(
            select(Zending).where(func.upper(Zending.tracking_code) == tracking_code.upper())
        )
        return res.scalars().first()

    async def list(self, *, user_id: int | None = None, status: str | None = None, search: str | None = None) -> list[Zending]:
        stmt = select(Zending).order_by(Zending.verzend_datum.desc(), Zending.id.desc())
        if user_id is not None:
            stmt = stmt.where(Zending.user_id == user_id)
        if status is not None:
            stmt = stmt.where(Zending.status == status)
        if search:
            needle = search.lower()
            stmt = stmt.where(or_(
                func.lower(Zending.tracking_code).contains(needle, autoescape=True),
                func.lower(Zending.verzender).contains(needle, autoescape=True),
                func.lower(Zending.ontvanger).contains(needle, autoescape=True),
                func.lower(Zending.afleveradres).contains(needle, autoescape=True),
            ))
        res = await self.session.execute(stmt)
        return list(res.scalars().all())

    async def count(self, *, status: str | None = None, exclude_statuses: tuple[str, ...] = ()) -> int:
        stmt = select(func.count()).select_from(Zending)
        if status is not None:
            stmt = stmt.where(Zending.status == status)
        if exclude_statuses:
            stmt = stmt.where(Zending.status.not_in(exclude_statuses))
        res = await self.session.execute(stmt)
        return int(res.scalar_one())

    async def count_active(self) -> int:
        return await self.count(exclude_statuses=CLOSED_STATUSES)

    async def delivery_periods(self) -> list[tuple[datetime, datetime]]:
        stmt = select(Zending.verzend_datum, Zending.werkelijke_aflever_datum).where(
            Zending.status == "afgeleverd",
            Zending.werkelijke_aflever_datum.is_not(None),
        )
        res = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in res.all()]

    async def add_update(self, **values) -> ZendingUpdate:
        entry = ZendingUpdate(**values)
        self.session.add(entry)
        # the entry with the latest tijdstip is the shipment's current state
        await self.session.execute(
            update(Zending)
            .where(
                Zending.id == entry.zending_id,
                or_(
                    Zending.last_update_tijdstip.is_(None),
                    Zending.last_update_tijdstip <= entry.tijdstip,
                ),
            )
            .values(
                status=entry.status,
                last_update_status=entry.status,
                last_update_locatie=entry.locatie,
                last_update_tijdstip=entry.tijdstip,
                updated_at=utcnow(),
            )
        )
        await self.session.commit()
        await self.session.refresh(entry)
        return entry

    async def list_updates(self, zending_id: int) -> list[ZendingUpdate]:
        stmt = (
            select(ZendingUpdate)
            .where(ZendingUpdate.zending_id == zending_id)
            .order_by(ZendingUpdate.tijdstip.desc(), ZendingUpdate.id.desc())
        )
        res = await self.session.execute(stmt)
        return list(res.scalars().all())
