"""Interactive fare quoting session.

Prompts are read with click, which re-prompts on non-numeric or out-of-range
answers. Breakdowns are rendered with rich. End of input at any prompt ends
the session quietly.
"""

import logging
import math

import click
from pydantic import BaseModel, ConfigDict, Field
from rich.console import Console
from rich.table import Table

from grab_fare.catalog import NO_PROMO_CODE, PricingCatalog, RateCard, VehicleClass
from grab_fare.fare import FareBreakdown, FareCalculator
from grab_fare.fare_logging import log_quote_context
from grab_fare.settings import ShellSettings

logger = logging.getLogger(__name__)

APP_TITLE = "Grab Fare Calculator"
INPUT_ENDED_MESSAGE = "Input ended unexpectedly. Exiting."
FAREWELL_MESSAGE = f"Thank you for using {APP_TITLE}. Have a nice day!"


class FiniteFloatRange(click.FloatRange):
    """FloatRange that also rejects NaN, which passes every range comparison."""

    def convert(self, value, param, ctx):
        rv = super().convert(value, param, ctx)
        if math.isnan(rv):
            self.fail(f"{value!r} is not a valid number.", param, ctx)
        return rv


class TripRequest(BaseModel):
    """Validated trip inputs collected from the user."""

    model_config = ConfigDict(frozen=True)

    vehicle: VehicleClass
    distance_km: float = Field(gt=0)
    duration_min: float = Field(default=0.0, ge=0)
    is_peak: bool = False
    promo_code: str = NO_PROMO_CODE


def describe_rates(rate_card: RateCard, currency: str) -> str:
    """One-line summary of a rate card; the time rate only when billed."""
    parts = [
        f"Base fare: {currency} {rate_card.base:.2f}",
        f"Per km: {currency} {rate_card.per_distance_unit:.2f}",
        f"Booking fee: {currency} {rate_card.booking_fee:.2f}",
    ]
    if rate_card.bills_time:
        parts.append(f"Per minute: {currency} {rate_card.per_time_unit:.2f}")
    return ", ".join(parts)


def describe_trip(request: TripRequest) -> str:
    parts = [
        f"Vehicle: {request.vehicle.label}",
        "Peak" if request.is_peak else "Off-peak",
        f"Distance: {request.distance_km:.2f} km",
    ]
    if request.duration_min > 0:
        parts.append(f"Time: {request.duration_min:.2f} min")
    return " | ".join(parts)


def breakdown_rows(breakdown: FareBreakdown, minimum_fare: float) -> list[tuple[str, str]]:
    """Itemized (label, value) lines for display, in billing order."""
    rows = [
        ("Base fare", f"{breakdown.base:.2f}"),
        ("Booking fee", f"{breakdown.booking_fee:.2f}"),
        ("Distance cost (off-peak)", f"{breakdown.distance_cost_off_peak:.2f}"),
    ]
    if breakdown.peak_multiplier > 1.0:
        rows.append(("Peak multiplier", f"x{breakdown.peak_multiplier:.2f} applied to distance"))
    else:
        rows.append(("Peak multiplier", "x1.00 (off-peak)"))
    rows.append(("Distance cost (final)", f"{breakdown.distance_cost_final:.2f}"))
    if breakdown.time_cost > 0:
        rows.append(("Time cost", f"{breakdown.time_cost:.2f}"))
    rows.append(("Subtotal", f"{breakdown.subtotal:.2f}"))

    promo = breakdown.promo_code
    if promo != NO_PROMO_CODE:
        promo = f"{promo} (discount {breakdown.discount_applied:.2f})"
    rows.append(("Promo code used", promo))

    rows.append(("Total before min fare", f"{breakdown.total_before_minimum:.2f}"))
    if breakdown.minimum_fare_applied:
        rows.append(("Minimum fare enforced", f"{minimum_fare:.2f}"))
    return rows


def render_breakdown(
    console: Console,
    request: TripRequest,
    breakdown: FareBreakdown,
    minimum_fare: float,
    currency: str = "RM",
) -> None:
    console.print()
    console.print(describe_trip(request), style="bold")

    table = Table(title=f"Fare Breakdown ({currency})")
    table.add_column("Item", style="cyan")
    table.add_column("Amount", justify="right")
    for label, value in breakdown_rows(breakdown, minimum_fare):
        table.add_row(label, value)
    table.add_section()
    table.add_row("[bold]Total payable[/bold]", f"[bold]{breakdown.total_payable:.2f}[/bold]")

    console.print(table)
    console.print()


class FareShell:
    """Prompt loop that quotes one trip per iteration."""

    def __init__(
        self,
        calculator: FareCalculator,
        settings: ShellSettings,
        console: Console,
        currency: str = "RM",
    ):
        self.calculator = calculator
        self.settings = settings
        self.console = console
        self.currency = currency

    @property
    def catalog(self) -> PricingCatalog:
        return self.calculator.catalog

    def run(self) -> int:
        """Run the session until the user declines or input ends.

        Returns the number of fares quoted.
        """
        self.console.print(APP_TITLE, style="bold")
        self.console.print(f"Promo codes available: {', '.join(self.catalog.promo_codes())}")

        quoted = 0
        try:
            while True:
                request = self.prompt_trip()
                with log_quote_context(
                    vehicle=request.vehicle.value,
                    promo_code=request.promo_code,
                ) as quote_id:
                    breakdown = self.calculator.calculate(
                        request.vehicle,
                        distance_km=request.distance_km,
                        duration_min=request.duration_min,
                        is_peak=request.is_peak,
                        promo_code=request.promo_code,
                    )
                    logger.info("Quote %s: %.2f payable", quote_id, breakdown.total_payable)
                quoted += 1
                render_breakdown(
                    self.console,
                    request,
                    breakdown,
                    minimum_fare=self.calculator.minimum_fare,
                    currency=self.currency,
                )
                if not self.prompt_again():
                    break
        except click.Abort:
            logger.info("Input ended after %d quote(s)", quoted)
            self.console.print()
            self.console.print(INPUT_ENDED_MESSAGE)
            return quoted

        self.console.print(FAREWELL_MESSAGE)
        return quoted

    def prompt_vehicle(self) -> VehicleClass:
        vehicles = self.catalog.vehicles()
        self.console.print()
        self.console.print("Select vehicle type:")
        for position, vehicle in enumerate(vehicles, start=1):
            self.console.print(f"{position}) {vehicle.label}")

        choice = click.prompt(
            f"Enter choice (1-{len(vehicles)})",
            type=click.IntRange(1, len(vehicles)),
        )
        vehicle = vehicles[choice - 1]
        self.console.print(f"Selected: {vehicle.label}")
        self.console.print(describe_rates(self.catalog.rate_card(vehicle), self.currency))
        return vehicle

    def prompt_trip(self) -> TripRequest:
        vehicle = self.prompt_vehicle()

        distance_km = click.prompt(
            "Enter trip distance (km)",
            type=FiniteFloatRange(0, self.settings.max_distance_km, min_open=True),
        )
        duration_min = 0.0
        if self.catalog.rate_card(vehicle).bills_time:
            duration_min = click.prompt(
                "Enter estimated time (minutes)",
                type=FiniteFloatRange(0, self.settings.max_duration_min, min_open=True),
            )

        peak_choice = click.prompt(
            "Is this a peak-hour ride? 1) No  2) Yes",
            type=click.IntRange(1, 2),
        )
        promo_code = click.prompt(
            f"Enter promo code (or {NO_PROMO_CODE})",
            default=NO_PROMO_CODE,
            show_default=False,
        )
        return TripRequest(
            vehicle=vehicle,
            distance_km=distance_km,
            duration_min=duration_min,
            is_peak=peak_choice == 2,
            promo_code=promo_code,
        )

    def prompt_again(self) -> bool:
        again = click.prompt(
            "Would you like to calculate another fare? 1) Yes  2) No",
            type=click.IntRange(1, 2),
        )
        return again == 1
