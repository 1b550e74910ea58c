from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import render_chart, render_table
from logging_config import configure_logging
from models.records import Coordinate, FilterMode, QueryFilter, ViewMode
from services.fetcher import ResultsFetcher
from services.results import (
    ResultsController,
    ResultsState,
    chart_buckets,
    initial_state,
    with_query,
    with_view,
)


@dataclass
class CLIState:
    config: CLIConfig


app = typer.Typer(
    help="Browse historical speed test results.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Speed test API base URL (defaults to SPEED_HISTORY_API_URL env or http://localhost:3000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the API before giving up.",
    ),
    page_size: Optional[int] = typer.Option(
        None,
        "--page-size",
        help="Results per page.",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging()
    ctx.obj = CLIState(config=load_config(base_url=base_url, timeout=timeout, page_size=page_size))


def _build_query(
    config: CLIConfig,
    location: str,
    radius: Optional[float],
    lat: Optional[float],
    lng: Optional[float],
    mine: bool,
) -> QueryFilter:
    if radius is None and lat is None and lng is None:
        return QueryFilter(location_text=location, radius_km=config.radius_km, mine_only=mine)
    center = Coordinate(lat=lat, lng=lng) if lat is not None and lng is not None else None
    return QueryFilter(
        mode=FilterMode.radius,
        radius_km=radius if radius is not None else config.radius_km,
        center=center,
        mine_only=mine,
    )


async def _run(config: CLIConfig, state: ResultsState, page: int) -> ResultsState:
    async with ResultsFetcher(
        config.base_url, page_size=config.page_size, timeout=config.timeout
    ) as fetcher:
        controller = ResultsController(fetcher, state=state)
        return await controller.goto(page)


@app.command("results")
def results_command(
    ctx: typer.Context,
    location: str = typer.Option("", "--location", "-l", help="Only show results whose location matches."),
    radius: Optional[float] = typer.Option(None, "--radius", "-r", help="Search radius in km (5, 25, 100 or 500)."),
    lat: Optional[float] = typer.Option(None, "--lat", help="Latitude of the radius center."),
    lng: Optional[float] = typer.Option(None, "--lng", help="Longitude of the radius center."),
    mine: bool = typer.Option(False, "--mine/--all", help="Only show your own results."),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page to fetch."),
    view: ViewMode = typer.Option(ViewMode.table, "--view", case_sensitive=False, help="Render as a table or a chart."),
) -> None:
    """Fetch one page of past results and render it."""
    cli_state = _get_state(ctx)
    config = cli_state.config
    query = _build_query(config, location, radius, lat, lng, mine)
    state = with_view(
        with_query(initial_state(page_size=config.page_size, radius_km=config.radius_km), query),
        view,
    )

    result = asyncio.run(_run(config, state, page))
    if result.error:
        typer.secho(f"Error fetching past results: {result.error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if result.view is ViewMode.chart:
        render_chart(result.measurements, chart_buckets(result))
    else:
        render_table(result.measurements, result.pagination)
