import logging
import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Context, Decimal

from pydantic import BaseModel, ConfigDict

from grab_fare.catalog import (
    NO_PROMO_CODE,
    PricingCatalog,
    PromoRule,
    RateCard,
    VehicleClass,
    default_catalog,
    resolve_promo,
)
from grab_fare.settings import FareSettings

logger = logging.getLogger(__name__)

# Wide enough to quantize any finite float to a whole number of cents.
_ROUNDING_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def round_currency(value: float) -> float:
    """Round to 2 decimals, half away from zero.

    The float is scaled to cents first and the exact binary value of the
    product is rounded, so 2.675 (stored as 2.67499...) rounds to 2.67.
    Non-finite values are returned unchanged.
    """
    cents = value * 100
    if not math.isfinite(cents):
        return value
    return float(Decimal(cents).quantize(Decimal(1), context=_ROUNDING_CONTEXT)) / 100


class FareBreakdown(BaseModel):
    """Itemized fare. Currency fields are rounded to cents."""

    model_config = ConfigDict(frozen=True)

    base: float
    booking_fee: float
    distance_cost_off_peak: float
    time_cost: float
    peak_multiplier: float
    distance_cost_final: float
    subtotal: float
    promo_code: str
    discount_applied: float
    total_before_minimum: float
    total_payable: float
    minimum_fare_applied: bool


def compute_fare(
    distance_km: float,
    duration_min: float,
    is_peak: bool,
    promo_code_raw: str,
    rate_card: RateCard,
    peak_multiplier: float,
    minimum_fare: float,
    promo_catalog: Mapping[str, PromoRule],
) -> FareBreakdown:
    """
    Calculate the fare breakdown for a single trip.

    The peak multiplier only scales the distance component. All arithmetic
    runs at full precision; each currency field is rounded independently
    once every total is known, so subtotal need not equal the sum of the
    rounded line items.

    Inputs are not range-checked; callers validate distance and duration.
    """
    distance_cost_off_peak = distance_km * rate_card.per_distance_unit
    time_cost = duration_min * rate_card.per_time_unit
    effective_multiplier = peak_multiplier if is_peak else 1.0
    distance_cost_final = distance_cost_off_peak * effective_multiplier
    subtotal = rate_card.base + rate_card.booking_fee + distance_cost_final + time_cost

    promo_code, promo = resolve_promo(promo_code_raw, promo_catalog)
    raw_discount = subtotal * promo.percentage
    discount_applied = min(raw_discount, promo.cap)

    total_before_minimum = subtotal - discount_applied
    minimum_fare_applied = total_before_minimum < minimum_fare
    total_payable = minimum_fare if minimum_fare_applied else total_before_minimum

    return FareBreakdown(
        base=round_currency(rate_card.base),
        booking_fee=round_currency(rate_card.booking_fee),
        distance_cost_off_peak=round_currency(distance_cost_off_peak),
        time_cost=round_currency(time_cost),
        peak_multiplier=effective_multiplier,
        distance_cost_final=round_currency(distance_cost_final),
        subtotal=round_currency(subtotal),
        promo_code=promo_code,
        discount_applied=round_currency(discount_applied),
        total_before_minimum=round_currency(total_before_minimum),
        total_payable=round_currency(total_payable),
        minimum_fare_applied=minimum_fare_applied,
    )


class FareCalculator:
    """Quotes fares for the vehicle classes of a pricing catalog."""

    def __init__(
        self,
        catalog: PricingCatalog,
        peak_multiplier: float = 1.5,
        minimum_fare: float = 5.00,
    ):
        self.catalog = catalog
        self.peak_multiplier = peak_multiplier
        self.minimum_fare = minimum_fare

    @classmethod
    def from_settings(
        cls, settings: FareSettings, catalog: PricingCatalog | None = None
    ) -> "FareCalculator":
        return cls(
            catalog=catalog or default_catalog(),
            peak_multiplier=settings.peak_multiplier,
            minimum_fare=settings.minimum_fare,
        )

    def calculate(
        self,
        vehicle: VehicleClass,
        distance_km: float,
        duration_min: float = 0.0,
        is_peak: bool = False,
        promo_code: str = NO_PROMO_CODE,
    ) -> FareBreakdown:
        """Look up the vehicle's rate card and compute its fare.

        Raises NotFoundError if the catalog has no rate card for the vehicle.
        """
        breakdown = compute_fare(
            distance_km=distance_km,
            duration_min=duration_min,
            is_peak=is_peak,
            promo_code_raw=promo_code,
            rate_card=self.catalog.rate_card(vehicle),
            peak_multiplier=self.peak_multiplier,
            minimum_fare=self.minimum_fare,
            promo_catalog=self.catalog.promos,
        )
        logger.debug(
            "Quoted %s fare: subtotal=%.2f discount=%.2f payable=%.2f",
            vehicle.value,
            breakdown.subtotal,
            breakdown.discount_applied,
            breakdown.total_payable,
        )
        if breakdown.minimum_fare_applied:
            logger.debug("Minimum fare %.2f enforced", self.minimum_fare)
        return breakdown
