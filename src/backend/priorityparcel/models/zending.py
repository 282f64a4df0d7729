from datetime import datetime
from sqlalchemy import String, Text, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from priorityparcel.db.base import Base

ZENDING_STATUSES = ("gepland", "opgehaald", "onderweg", "afgeleverd", "vertraagd", "geannuleerd")


class Zending(Base):
    __tablename__ = "zendingen"
    __table_args__ = (
        CheckConstraint(
            "status IN ('gepland','opgehaald','onderweg','afgeleverd','vertraagd','geannuleerd')",
            name="ck_zending_status",
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    tracking_code: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    prioriteit: Mapped[str] = mapped_column(String(16), nullable=False)
    transport_type: Mapped[str] = mapped_column(String(32), nullable=False)

    verzender: Mapped[str] = mapped_column(String(255), nullable=False)
    ontvanger: Mapped[str] = mapped_column(String(255), nullable=False)
    ophaladres: Mapped[str] = mapped_column(String(255), nullable=False)
    afleveradres: Mapped[str] = mapped_column(String(255), nullable=False)
    prijs: Mapped[str | None] = mapped_column(String(32), nullable=True)  # display string, e.g. "€45,95"
    betaald: Mapped[bool] = mapped_column(Boolean, nullable=False)

    verzend_datum: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    geplande_aflever_datum: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    werkelijke_aflever_datum: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Denormalized copy of the newest ZendingUpdate
    last_update_status: Mapped[str | None] = mapped_column(String(16), nullable=True)
    last_update_locatie: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_update_tijdstip: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @property
    def last_update(self) -> dict | None:
        if self.last_update_status is None:
            return None
        return {
            "status": self.last_update_status,
            "locatie": self.last_update_locatie,
            "tijdstip": self.last_update_tijdstip,
        }


class ZendingUpdate(Base):
    __tablename__ = "zending_updates"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    zending_id: Mapped[int] = mapped_column(ForeignKey("zendingen.id", ondelete="CASCADE"), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    locatie: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notitie: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    tijdstip: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
