import logging
import os

import pytest

from grab_fare.catalog import NO_PROMO, PricingCatalog, PromoRule, RateCard, VehicleClass
from grab_fare.fare import FareCalculator
from grab_fare.fare_logging import LogContext

# Settings are environment driven; keep the developer's shell out of the tests.
_SETTINGS_ENV_PREFIXES = ("FARE_", "SHELL_", "LOG_", "GRAB_FARE_")


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    for name in list(os.environ):
        if name.upper().startswith(_SETTINGS_ENV_PREFIXES):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging() replaces root handlers; put the originals back after each test."""
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers.copy()
    original_level = root_logger.level
    yield
    root_logger.handlers = original_handlers
    root_logger.setLevel(original_level)
    LogContext.clear()


@pytest.fixture
def economy_rates() -> RateCard:
    return RateCard(base=2.50, per_distance_unit=1.20, per_time_unit=0.20, booking_fee=1.00)


@pytest.fixture
def bike_rates() -> RateCard:
    return RateCard(base=1.50, per_distance_unit=0.50, per_time_unit=0.00, booking_fee=0.50)


@pytest.fixture
def promo_table() -> dict[str, PromoRule]:
    return {
        "NONE": NO_PROMO,
        "GRAB10": PromoRule(percentage=0.10, cap=3.00),
        "STUDENT15": PromoRule(percentage=0.15, cap=5.00),
        "SUPER20": PromoRule(percentage=0.20, cap=8.00),
    }


@pytest.fixture
def catalog(economy_rates, bike_rates, promo_table) -> PricingCatalog:
    return PricingCatalog(
        rate_cards={
            VehicleClass.ECONOMY: economy_rates,
            VehicleClass.PREMIUM: RateCard(
                base=4.00, per_distance_unit=1.60, per_time_unit=0.30, booking_fee=1.00
            ),
            VehicleClass.BIKE: bike_rates,
        },
        promos=promo_table,
    )


@pytest.fixture
def calculator(catalog) -> FareCalculator:
    return FareCalculator(catalog, peak_multiplier=1.5, minimum_fare=5.00)
