"""Admin CLI: serve the API and inspect ranking or price history."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path

import click
from pydantic import TypeAdapter

from navo_core.schemas import FlightResult, RouteRef
from navo_ranking import calculate_score, compute_decision_labels, format_duration
from navo_ranking.duration import parse_duration_to_minutes

from .config import settings
from .container import build_container
from .logging_config import configure_logging
from .services.price_insight import insight_label

logger = logging.getLogger(__name__)

_flights_adapter = TypeAdapter(list[FlightResult])


def _run(coro_factory):  # type: ignore[no-untyped-def]
    """Run ``coro_factory(container)`` and close the container afterwards."""

    async def _main():  # type: ignore[no-untyped-def]
        container = build_container(settings)
        try:
            return await coro_factory(container)
        finally:
            await container.aclose()

    return asyncio.run(_main())


@click.group()
@click.option("--log-level", default=None, help="Override NAVO_LOG_LEVEL")
def cli(log_level: str | None) -> None:
    """Navo flight price backend CLI."""
    if log_level:
        settings.log_level = log_level.upper()
    settings.log_json = False
    configure_logging(settings, stream=sys.stderr)


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("navo_api.main:app", host=host, port=port, reload=reload)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json-output", is_flag=True, help="Output as JSON")
def rank(file: Path, json_output: bool) -> None:
    """Label a JSON list of flights (best balance / cheapest / fastest)."""
    try:
        flights = _flights_adapter.validate_json(file.read_bytes())
        result = compute_decision_labels(flights)
    except ValueError as exc:
        # ValidationError is a ValueError; so is a repeated flight id
        raise click.ClickException(f"Invalid flight list: {exc}") from exc

    if json_output:
        click.echo(json.dumps(result.to_wire(), indent=2, ensure_ascii=False))
        return
    if not flights:
        click.echo("No flights.")
        return

    for flight in sorted(flights, key=calculate_score):
        decision = result.decisions[flight.id]
        minutes = parse_duration_to_minutes(flight.duration)
        click.echo(
            f"  {flight.id} | {flight.airline} | R$ {flight.price} | "
            f"{format_duration(minutes)} | score {calculate_score(flight):.0f} | "
            f"{decision.price_context.value}"
            + (f" | {decision.label.value}" if decision.label else "")
        )
    if result.stats is not None:
        stats = result.stats
        click.echo(
            f"\nmedian {stats.median_price:.0f}, p35 {stats.p35:.0f}, "
            f"p70 {stats.p70:.0f}"
        )


@cli.command()
@click.argument("origin")
@click.argument("destination")
@click.option("--window-days", default=30, show_default=True, type=int)
@click.option("--month", default=None, help="Departure month bucket, YYYY-MM")
def history(
    origin: str, destination: str, window_days: int, month: str | None
) -> None:
    """Aggregated price history for a route."""
    departure = date.fromisoformat(f"{month}-01") if month else None

    async def _fetch(container):  # type: ignore[no-untyped-def]
        return await container.history.get_price_history_for_route(
            origin.upper(), destination.upper(), window_days, departure_date=departure
        )

    aggregate = _run(_fetch)
    click.echo(json.dumps(aggregate.to_wire(), indent=2))


@cli.command()
@click.argument("origin")
@click.argument("destination")
@click.argument("price", type=int)
@click.option("--depart", default=None, help="Departure date, YYYY-MM-DD")
def insight(origin: str, destination: str, price: int, depart: str | None) -> None:
    """Compare PRICE with the recent history of a route."""
    route = RouteRef(
        origin=origin.upper(),
        destination=destination.upper(),
        departure_date=date.fromisoformat(depart) if depart else None,
    )

    async def _fetch(container):  # type: ignore[no-untyped-def]
        return await container.insights.get_price_insight(route, price)

    result = _run(_fetch)
    if result is None:
        click.echo("Not enough history for an insight.")
        return
    click.echo(json.dumps(result.to_wire(), indent=2))
    label = insight_label(result)
    if label is not None:
        click.echo(f"Price context: {label.value}")
