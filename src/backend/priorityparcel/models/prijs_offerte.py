from datetime import datetime
from sqlalchemy import String, Text, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from priorityparcel.db.base import Base


class PrijsOfferte(Base):
    __tablename__ = "prijs_offertes"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    # Transport parameters
    transport_type: Mapped[str] = mapped_column(String(32), nullable=False)  # nationaal|internationaal
    gewicht: Mapped[str] = mapped_column(String(16), nullable=False)
    afmetingen: Mapped[str] = mapped_column(String(16), nullable=False)
    spoed: Mapped[str] = mapped_column(String(16), nullable=False)

    # Requester
    naam: Mapped[str] = mapped_column(String(255), nullable=False)
    bedrijf: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    telefoon: Mapped[str] = mapped_column(String(64), nullable=False)
    ophaladres: Mapped[str] = mapped_column(String(255), nullable=False)
    afleveradres: Mapped[str] = mapped_column(String(255), nullable=False)
    bericht: Mapped[str | None] = mapped_column(Text, nullable=True)

    prijs_indicatie: Mapped[str | None] = mapped_column(String(64), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    is_verwerkt: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
