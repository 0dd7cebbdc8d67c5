"""Ride-hailing fare calculator."""

from grab_fare.catalog import PricingCatalog, PromoRule, RateCard, VehicleClass, default_catalog
from grab_fare.fare import FareBreakdown, FareCalculator, compute_fare, round_currency

__version__ = "0.1.0"

__all__ = [
    "compute_fare",
    "round_currency",
    "default_catalog",
    "FareBreakdown",
    "FareCalculator",
    "PricingCatalog",
    "PromoRule",
    "RateCard",
    "VehicleClass",
]
