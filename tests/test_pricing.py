from decimal import Decimal

import pytest

from priorityparcel.services.pricing import format_euro, price_band, price_indication


def test_national_light_standard_band():
    assert price_indication("nationaal", "0-5", "klein", "standaard") == "€7,95 - €12,95"
    assert price_indication("nationaal", "0-5", "middel", "standaard") == "€7,95 - €12,95"


def test_urgency_scales_the_band():
    low, high = price_band("nationaal", "0-5", "klein", "spoed")
    assert (low, high) == (Decimal("11.93"), Decimal("19.43"))
    assert price_indication("nationaal", "0-5", "klein", "extra-spoed") == "€15,90 - €25,90"


def test_bulky_parcels_add_surcharge():
    assert price_indication("nationaal", "0-5", "groot", "standaard") == "€12,95 - €17,95"
    assert price_indication("internationaal", "50+", "extra-groot", "standaard") == "€134,95 - €214,95"


def test_international_costs_more_than_national():
    for gewicht in ("0-5", "5-10", "10-20", "20-50", "50+"):
        nat = price_band("nationaal", gewicht, "klein", "standaard")
        intl = price_band("internationaal", gewicht, "klein", "standaard")
        assert intl[0] > nat[0]
        assert intl[1] > nat[1]


def test_format_euro_uses_dutch_separators():
    assert format_euro(Decimal("1234.5")) == "€1.234,50"
    assert format_euro(Decimal("7.95")) == "€7,95"


def test_unknown_parameter_raises():
    with pytest.raises(ValueError):
        price_indication("lucht", "0-5", "klein", "standaard")
