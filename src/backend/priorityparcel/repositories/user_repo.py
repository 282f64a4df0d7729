from __future__ import annotations
from datetime import datetime
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from priorityparcel.models.user import User

class UserRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_username(self, username: str) -> User | None:
        res = await self.session.execute(select(User).where(User.username == username))
        return res.scalars().first()

    async def get_by_email(self, email: str) -> User | None:
        res = await self.session.execute(select(User).where(func.lower(User.email) == email.lower()))
        return res.scalars().first()

    async def get_by_id(self, user_id: int) -> User | None:
        res = await self.session.execute(select(User).where(User.id == user_id))
        return res.scalars().first()

    async def create(self, **values) -> User:
        user = User(**values)
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def list(self, *, search: str | None = None) -> list[User]:
        stmt = select(User).order_by(User.id)
        if search:
            needle = search.lower()
            stmt = stmt.where(or_(
                func.lower(User.username).contains(needle, autoescape=True),
                func.lower(User.email).contains(needle, autoescape=True),
                func.lower(User.first_name).contains(needle, autoescape=True),
                func.lower(User.last_name).contains(needle, autoescape=True),
                func.lower(User.bedrijf).contains(needle, autoescape=True),
            ))
        res = await self.session.execute(stmt)
        return list(res.scalars().all())

    async def touch_last_login(self, user: User, when: datetime) -> User:
        user.last_login = when
        user.updated_at = when
        await self.session.commit()
        await self.session.refresh(user)
        return user
