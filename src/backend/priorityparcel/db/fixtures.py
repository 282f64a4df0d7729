# src/backend/priorityparcel/db/fixtures.py
"""Demo accounts and shipments loaded into an empty store at startup."""
from datetime import datetime, timezone

from priorityparcel.core.config import settings
from priorityparcel.core.logging import get_logger
from priorityparcel.core.security import hash_password
from priorityparcel.repositories.base import Storage
from priorityparcel.schemas.user import UserCreate
from priorityparcel.schemas.zending import ZendingCreate, ZendingUpdateCreate

logger = get_logger(__name__)


def _at(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def demo_users() -> list[UserCreate]:
    # order matters: the demo customer must end up with id 2
    return [
        UserCreate(
            username="admin",
            email="admin@priorityparcel.nl",
            password=settings.DEMO_ADMIN_PASSWORD,
            role="admin",
            first_name="Beheer",
            last_name="PriorityParcel",
            bedrijf="PriorityParcel",
        ),
        UserCreate(
            username="huso",
            email="huso@priorityparcel.nl",
            password=settings.DEMO_KLANT_PASSWORD,
            role="klant",
            first_name="Huso",
            bedrijf="Kantoor Supplies B.V.",
            telefoon="0612345678",
            adres="Industrieweg 45",
            postcode="1234 AB",
            plaats="Amsterdam",
        ),
    ]


# (shipment, [(status, locatie, notitie, tijdstip), ...]) with history oldest first
DEMO_ZENDINGEN = [
    (
        dict(
            tracking_code="PNL12345678",
            user_id=2,
            status="onderweg",
            prioriteit="standaard",
            verzend_datum=_at("2025-05-10T10:30:00"),
            geplande_aflever_datum=_at("2025-05-13T12:00:00"),
            verzender="Kantoor Supplies B.V.",
            ontvanger="Tech Solutions N.V.",
            ophaladres="Industrieweg 45, 1234 AB Amsterdam",
            afleveradres="Businesspark 12, 5678 CD Rotterdam",
            prijs="€45,95",
            betaald=True,
        ),
        [
            ("gepland", "Aanmelding ontvangen", None, _at("2025-05-10T09:00:00")),
            ("opgehaald", "Industrieweg 45, Amsterdam", "Opgehaald door chauffeur", _at("2025-05-10T10:30:00")),
            ("onderweg", "Distributiecentrum Utrecht", None, _at("2025-05-11T14:45:00")),
        ],
    ),
    (
        dict(
            tracking_code="PNL23456789",
            user_id=2,
            status="gepland",
            prioriteit="spoed",
            verzend_datum=_at("2025-05-12T09:00:00"),
            geplande_aflever_datum=_at("2025-05-12T17:00:00"),
            verzender="Fashion Store B.V.",
            ontvanger="Boutique Elegance",
            ophaladres="Modestraat 78, 2345 EF Den Haag",
            afleveradres="Winkelplein 34, 6789 GH Groningen",
            prijs="€75,50",
            betaald=False,
        ),
        [
            ("gepland", "Wachtend op ophaling", None, _at("2025-05-11T15:30:00")),
        ],
    ),
    (
        dict(
            tracking_code="PNL34567890",
            user_id=2,
            status="afgeleverd",
            prioriteit="standaard",
            verzend_datum=_at("2025-05-09T11:15:00"),
            geplande_aflever_datum=_at("2025-05-11T13:00:00"),
            werkelijke_aflever_datum=_at("2025-05-11T12:45:00"),
            verzender="Electronics Plus",
            ontvanger="IT Solutions",
            ophaladres="Techstraat 12, 3456 JK Eindhoven",
            afleveradres="Computerweg 45, 7890 LM Utrecht",
            prijs="€32,75",
            betaald=True,
        ),
        [
            ("opgehaald", "Techstraat 12, Eindhoven", None, _at("2025-05-09T11:15:00")),
            ("onderweg", "Distributiecentrum Utrecht", None, _at("2025-05-10T08:00:00")),
            ("afgeleverd", "Computerweg 45, Utrecht", "Afgeleverd bij receptie", _at("2025-05-11T12:45:00")),
        ],
    ),
]


async def seed_demo_data(storage: Storage) -> bool:
    """Load the demo data unless the store already holds users."""
    if not await storage.is_empty():
        return False

    for payload in demo_users():
        await storage.create_user(payload, password_hash=hash_password(payload.password))

    for values, history in DEMO_ZENDINGEN:
        zending = await storage.create_zending(ZendingCreate(**values))
        for status, locatie, notitie, tijdstip in history:
            await storage.create_zending_update(ZendingUpdateCreate(
                zending_id=zending.id,
                status=status,
                locatie=locatie,
                notitie=notitie,
                user_id=1,
                tijdstip=tijdstip,
            ))

    logger.info("Seeded demo data: %d users, %d zendingen", len(demo_users()), len(DEMO_ZENDINGEN))
    return True
