from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from priorityparcel.models.prijs_offerte import PrijsOfferte

class PrijsOfferteRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **values) -> PrijsOfferte:
        offerte = PrijsOfferte(**values)
        self.session.add(offerte)
        await self.session.commit()
        await self.session.refresh(offerte)
        return offerte

    async def get(self, offerte_id: int) -> PrijsOfferte | None:
        res = await self.session.execute(select(PrijsOfferte).where(PrijsOfferte.id == offerte_id))
        return res.scalars().first()

    async def list_all(self) -> list[PrijsOfferte]:
        stmt = select(PrijsOfferte).order_by(PrijsOfferte.created_at.desc(), PrijsOfferte.id.desc())
        res = await self.session.execute(stmt)
        return list(res.scalars().all())
