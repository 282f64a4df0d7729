from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from priorityparcel.models.contact_message import ContactMessage

class ContactMessageRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **values) -> ContactMessage:
        msg = ContactMessage(**values)
        self.session.add(msg)
        await self.session.commit()
        await self.session.refresh(msg)
        return msg

    async def get(self, message_id: int) -> ContactMessage | None:
        res = await self.session.execute(select(ContactMessage).where(ContactMessage.id == message_id))
        return res.scalars().first()

    async def list_all(self) -> list[ContactMessage]:
        stmt = select(ContactMessage).order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
        res = await self.session.execute(stmt)
        return list(res.scalars().all())
