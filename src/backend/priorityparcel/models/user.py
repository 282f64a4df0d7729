# src/backend/priorityparcel/models/user.py
from datetime import datetime
from sqlalchemy import String, CheckConstraint, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from priorityparcel.db.base import Base

USER_ROLES = ("admin", "klant", "medewerker")


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('admin','klant','medewerker')", name="ck_user_role"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)  # admin|klant|medewerker

    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bedrijf: Mapped[str | None] = mapped_column(String(255), nullable=True)
    telefoon: Mapped[str | None] = mapped_column(String(64), nullable=True)
    adres: Mapped[str | None] = mapped_column(String(255), nullable=True)
    postcode: Mapped[str | None] = mapped_column(String(16), nullable=True)
    plaats: Mapped[str | None] = mapped_column(String(255), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
