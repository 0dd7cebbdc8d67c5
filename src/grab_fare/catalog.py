"""Fixed pricing catalog: vehicle rate cards and promo rules."""

import functools
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from grab_fare.core.exceptions import ConfigurationError, NotFoundError

NO_PROMO_CODE = "NONE"


class VehicleClass(str, Enum):
    """Bookable vehicle class, in menu order."""

    ECONOMY = "economy"
    PREMIUM = "premium"
    BIKE = "bike"

    @property
    def label(self) -> str:
        return _VEHICLE_LABELS[self]


_VEHICLE_LABELS = {
    VehicleClass.ECONOMY: "GrabCar Economy",
    VehicleClass.PREMIUM: "GrabCar Premium",
    VehicleClass.BIKE: "GrabBike",
}


class RateCard(BaseModel):
    """Pricing for one vehicle class. A zero time rate disables time billing."""

    model_config = ConfigDict(frozen=True)

    base: float = Field(ge=0)
    per_distance_unit: float = Field(ge=0)
    per_time_unit: float = Field(default=0.0, ge=0)
    booking_fee: float = Field(ge=0)

    @property
    def bills_time(self) -> bool:
        return self.per_time_unit > 0


class PromoRule(BaseModel):
    """Percentage-off discount with an absolute cap."""

    model_config = ConfigDict(frozen=True)

    percentage: float = Field(ge=0.0, le=1.0)
    cap: float = Field(ge=0)


NO_PROMO = PromoRule(percentage=0.0, cap=0.0)


def normalize_promo_code(code: str) -> str:
    """Strip surrounding whitespace and uppercase a promo code."""
    return code.strip().upper()


def resolve_promo(code_raw: str, promos: Mapping[str, PromoRule]) -> tuple[str, PromoRule]:
    """Resolve a user-entered code to (applied code, rule).

    Unrecognized or blank codes resolve to the NONE rule rather than failing.
    """
    code = normalize_promo_code(code_raw)
    if code in promos:
        return code, promos[code]
    return NO_PROMO_CODE, promos.get(NO_PROMO_CODE, NO_PROMO)


@dataclass(frozen=True)
class PricingCatalog:
    """Read-only vehicle and promo lookup tables.

    Mapping order is display order: the first vehicle is menu option 1.
    """

    rate_cards: Mapping[VehicleClass, RateCard]
    promos: Mapping[str, PromoRule]

    def __post_init__(self) -> None:
        if not self.rate_cards:
            raise ConfigurationError("Pricing catalog must define at least one vehicle class")
        if NO_PROMO_CODE not in self.promos:
            raise ConfigurationError(
                f"Promo table must define the {NO_PROMO_CODE} rule",
                details={"codes": sorted(self.promos)},
            )
        for code in self.promos:
            if code != normalize_promo_code(code):
                raise ConfigurationError(
                    f"Promo code {code!r} is not normalized",
                    details={"expected": normalize_promo_code(code)},
                )

        object.__setattr__(self, "rate_cards", MappingProxyType(dict(self.rate_cards)))
        object.__setattr__(self, "promos", MappingProxyType(dict(self.promos)))

    def rate_card(self, vehicle: VehicleClass) -> RateCard:
        try:
            return self.rate_cards[vehicle]
        except KeyError:
            name = getattr(vehicle, "value", vehicle)
            raise NotFoundError(
                f"No rate card for vehicle class {name}",
                details={"vehicle": name},
            ) from None

    def resolve_promo(self, code_raw: str) -> tuple[str, PromoRule]:
        return resolve_promo(code_raw, self.promos)

    def vehicles(self) -> list[VehicleClass]:
        return list(self.rate_cards)

    def promo_codes(self) -> list[str]:
        return list(self.promos)


@functools.cache
def default_catalog() -> PricingCatalog:
    """Malaysian ringgit rates, built once per process."""
    return PricingCatalog(
        rate_cards={
            VehicleClass.ECONOMY: RateCard(
                base=2.50, per_distance_unit=1.20, per_time_unit=0.20, booking_fee=1.00
            ),
            VehicleClass.PREMIUM: RateCard(
                base=4.00, per_distance_unit=1.60, per_time_unit=0.30, booking_fee=1.00
            ),
            VehicleClass.BIKE: RateCard(
                base=1.50, per_distance_unit=0.50, per_time_unit=0.00, booking_fee=0.50
            ),
        },
        promos={
            NO_PROMO_CODE: NO_PROMO,
            "GRAB10": PromoRule(percentage=0.10, cap=3.00),  # 10% off up to RM3
            "STUDENT15": PromoRule(percentage=0.15, cap=5.00),
            "SUPER20": PromoRule(percentage=0.20, cap=8.00),
        },
    )
