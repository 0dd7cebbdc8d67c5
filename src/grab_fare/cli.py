"""Command-line entry point.

Usage:
    grab-fare                      # Interactive session (same as `grab-fare run`)
    grab-fare quote --vehicle economy --distance 10 --duration 15 --peak --promo grab10
    grab-fare quote --vehicle bike --distance 1 --promo SUPER20 --json
    grab-fare rates                # Vehicle rate cards and promo codes
"""

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from grab_fare.catalog import NO_PROMO_CODE, VehicleClass, default_catalog
from grab_fare.fare import FareCalculator
from grab_fare.fare_logging import get_logger, setup_logging
from grab_fare.settings import Settings, get_settings
from grab_fare.shell import FareShell, FiniteFloatRange, TripRequest, render_breakdown

logger = get_logger(__name__)

VEHICLE_CHOICES: tuple[str, ...] = tuple(vehicle.value for vehicle in VehicleClass)


@click.group(invoke_without_command=True)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL.",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default=None,
    help="Override LOG_FORMAT.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, log_format: str | None) -> None:
    """Ride fare calculator."""
    try:
        settings = get_settings()
    except ValidationError as e:
        raise click.UsageError(f"Invalid configuration: {e}") from e

    setup_logging(
        level=log_level or settings.logging.level,
        json_output=(log_format or settings.logging.format).lower() == "json",
        environment=settings.logging.environment,
    )
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.pass_obj
def run(settings: Settings) -> None:
    """Quote fares interactively until you stop or input ends."""
    calculator = FareCalculator.from_settings(settings.fare)
    shell = FareShell(
        calculator,
        settings.shell,
        Console(highlight=False),
        currency=settings.fare.currency,
    )
    quoted = shell.run()
    logger.debug("Session finished with %d quote(s)", quoted)


@cli.command()
@click.option(
    "--vehicle",
    "-v",
    type=click.Choice(VEHICLE_CHOICES, case_sensitive=False),
    required=True,
)
@click.option(
    "--distance",
    "-d",
    "distance_km",
    type=FiniteFloatRange(min=0, min_open=True),
    required=True,
    help="Trip distance in km.",
)
@click.option(
    "--duration",
    "-t",
    "duration_min",
    type=FiniteFloatRange(min=0),
    default=0.0,
    show_default=True,
    help="Estimated trip time in minutes. Ignored for vehicles without a time rate.",
)
@click.option("--peak/--off-peak", default=False, show_default=True)
@click.option("--promo", "-p", "promo_code", default=NO_PROMO_CODE, show_default=True)
@click.option("--json", "as_json", is_flag=True, help="Print the breakdown as JSON.")
@click.pass_obj
def quote(
    settings: Settings,
    vehicle: str,
    distance_km: float,
    duration_min: float,
    peak: bool,
    promo_code: str,
    as_json: bool,
) -> None:
    """Quote a single trip."""
    if distance_km > settings.shell.max_distance_km:
        raise click.BadParameter(
            f"must be at most {settings.shell.max_distance_km:g} km",
            param_hint="--distance",
        )
    if duration_min > settings.shell.max_duration_min:
        raise click.BadParameter(
            f"must be at most {settings.shell.max_duration_min:g} minutes",
            param_hint="--duration",
        )

    calculator = FareCalculator.from_settings(settings.fare)
    request = TripRequest(
        vehicle=VehicleClass(vehicle.lower()),
        distance_km=distance_km,
        duration_min=duration_min,
        is_peak=peak,
        promo_code=promo_code,
    )
    breakdown = calculator.calculate(
        request.vehicle,
        distance_km=request.distance_km,
        duration_min=request.duration_min,
        is_peak=request.is_peak,
        promo_code=request.promo_code,
    )

    if as_json:
        click.echo(breakdown.model_dump_json(indent=2))
        return

    render_breakdown(
        Console(highlight=False),
        request,
        breakdown,
        minimum_fare=calculator.minimum_fare,
        currency=settings.fare.currency,
    )


@cli.command()
@click.pass_obj
def rates(settings: Settings) -> None:
    """Show vehicle rate cards and promo codes."""
    catalog = default_catalog()
    currency = settings.fare.currency
    console = Console(highlight=False)

    vehicle_table = Table(title=f"Vehicle Rates ({currency})")
    vehicle_table.add_column("#", justify="right")
    vehicle_table.add_column("Vehicle", style="cyan")
    vehicle_table.add_column("Base", justify="right")
    vehicle_table.add_column("Per km", justify="right")
    vehicle_table.add_column("Per min", justify="right")
    vehicle_table.add_column("Booking fee", justify="right")
    for position, vehicle in enumerate(catalog.vehicles(), start=1):
        card = catalog.rate_card(vehicle)
        vehicle_table.add_row(
            str(position),
            vehicle.label,
            f"{card.base:.2f}",
            f"{card.per_distance_unit:.2f}",
            f"{card.per_time_unit:.2f}" if card.bills_time else "-",
            f"{card.booking_fee:.2f}",
        )

    promo_table = Table(title="Promo Codes")
    promo_table.add_column("Code", style="cyan")
    promo_table.add_column("Discount", justify="right")
    promo_table.add_column(f"Cap ({currency})", justify="right")
    for code in catalog.promo_codes():
        rule = catalog.promos[code]
        promo_table.add_row(code, f"{rule.percentage:.0%}", f"{rule.cap:.2f}")

    console.print(vehicle_table)
    console.print()
    console.print(promo_table)
    console.print(
        f"Peak multiplier x{settings.fare.peak_multiplier:.2f} on distance; "
        f"minimum fare {currency} {settings.fare.minimum_fare:.2f}"
    )


def main() -> None:
    cli(prog_name="grab-fare")


if __name__ == "__main__":
    main()
