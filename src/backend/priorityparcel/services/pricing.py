# src/backend/priorityparcel/services/pricing.py
"""Indicative price bands shown after a quote request.

Bands are per transport type and weight class; urgency scales the band and
bulky parcels add a fixed surcharge. Staff send the binding quote later.
"""
from decimal import Decimal, ROUND_HALF_UP

BASE_BANDS: dict[str, dict[str, tuple[Decimal, Decimal]]] = {
    "nationaal": {
        "0-5": (Decimal("7.95"), Decimal("12.95")),
        "5-10": (Decimal("12.95"), Decimal("19.95")),
        "10-20": (Decimal("19.95"), Decimal("29.95")),
        "20-50": (Decimal("29.95"), Decimal("49.95")),
        "50+": (Decimal("49.95"), Decimal("89.95")),
    },
    "internationaal": {
        "0-5": (Decimal("19.95"), Decimal("34.95")),
        "5-10": (Decimal("29.95"), Decimal("49.95")),
        "10-20": (Decimal("44.95"), Decimal("69.95")),
        "20-50": (Decimal("69.95"), Decimal("119.95")),
        "50+": (Decimal("119.95"), Decimal("199.95")),
    },
}

SPOED_FACTOR = {
    "standaard": Decimal("1.0"),
    "spoed": Decimal("1.5"),
    "extra-spoed": Decimal("2.0"),
}

AFMETINGEN_TOESLAG = {
    "klein": Decimal("0.00"),
    "middel": Decimal("0.00"),
    "groot": Decimal("5.00"),
    "extra-groot": Decimal("15.00"),
}

CENT = Decimal("0.01")


def format_euro(amount: Decimal) -> str:
    """Dutch notation: Decimal("1234.5") -> "€1.234,50"."""
    amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    whole, cents = f"{amount:,.2f}".split(".")
    return f"€{whole.replace(',', '.')},{cents}"


def price_band(transport_type: str, gewicht: str, afmetingen: str, spoed: str) -> tuple[Decimal, Decimal]:
    try:
        low, high = BASE_BANDS[transport_type][gewicht]
        factor = SPOED_FACTOR[spoed]
        toeslag = AFMETINGEN_TOESLAG[afmetingen]
    except KeyError as exc:
        raise ValueError(f"unknown pricing parameter: {exc.args[0]}") from exc
    return (
        (low * factor + toeslag).quantize(CENT, rounding=ROUND_HALF_UP),
        (high * factor + toeslag).quantize(CENT, rounding=ROUND_HALF_UP),
    )


def price_indication(transport_type: str, gewicht: str, afmetingen: str, spoed: str) -> str:
    low, high = price_band(transport_type, gewicht, afmetingen, spoed)
    return f"{format_euro(low)} - {format_euro(high)}"
