from __future__ import annotations

from typing import Iterable, List, Sequence

import typer

from models.records import ChartBucket, Measurement
from services.aggregator import chart_summary
from services.pagination import PaginationState


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_rows(rows: Iterable[Sequence[str]], widths: Sequence[int]) -> None:
    for row in rows:
        typer.echo("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())


def render_table(measurements: Sequence[Measurement], pagination: PaginationState) -> None:
    echo_heading("Past Results")
    if not measurements:
        typer.echo("No past results found for the current filters.")
        return

    header = ("Timestamp", "Location", "Download (Mbps)", "Upload (Mbps)", "Ping (ms)")
    rows: List[Sequence[str]] = [header]
    for item in measurements:
        rows.append(
            (
                item.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                item.location,
                f"{item.download_speed:.2f}",
                f"{item.upload_speed:.2f}",
                f"{item.ping:.1f}",
            )
        )
    widths = [max(len(row[i]) for row in rows) for i in range(len(header))]
    echo_rows(rows, widths)

    typer.echo()
    typer.echo(
        f"Page {pagination.page} of {pagination.total_pages} "
        f"({pagination.total_results} results)"
    )


def render_chart(measurements: Sequence[Measurement], buckets: Sequence[ChartBucket]) -> None:
    echo_heading("Download Speeds by Location")
    if not buckets:
        typer.echo("No data available for chart visualization.")
        return

    location_count, measurement_count = chart_summary(measurements)
    typer.echo(
        f"Showing {location_count} locations with {measurement_count} total measurements"
    )
    typer.echo()
    label_width = max(len(bucket.label) for bucket in buckets)
    for bucket in buckets:
        typer.echo(
            f"{bucket.label.ljust(label_width)}  "
            f"avg {bucket.avg_download:.2f}  max {bucket.max_download:.2f}  "
            f"min {bucket.min_download:.2f} Mbps  (n={bucket.sample_count})"
        )
