#!/usr/bin/env python3
# Trade Grid - CLI
# SPDX-License-Identifier: Apache-2.0

"""
Command-line interface for Trade Grid ingest tooling.

Usage:
    tradegrid key -- -33.0 -65.0 -97.0
    tradegrid buckets systems.csv --limit 20
    tradegrid lines dump.jsonl
    tradegrid supply 424242m 2134567891H ?
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import numpy as np
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from tradegrid import __version__
from tradegrid.config import LOG_LEVELS, IngestSettings

console = Console()
logger = logging.getLogger(__name__)


def _load_settings() -> IngestSettings:
    try:
        return IngestSettings.from_env()
    except ValidationError as e:
        console.print(f"[red]Error: Invalid TRADEGRID_* environment settings:[/]\n{escape(str(e))}")
        sys.exit(1)


def _load_points(path: Path) -> np.ndarray:
    """Read x,y,z rows from a CSV file, skipping a header row if present."""
    with open(path, "r") as fh:
        first = fh.readline()

    skip = 0
    try:
        float(first.split(",")[0])
    except ValueError:
        skip = 1

    data = np.loadtxt(path, delimiter=",", usecols=(0, 1, 2), skiprows=skip, ndmin=2)
    if data.size == 0:
        data = data.reshape(0, 3)
    return data


@click.group()
@click.version_option(version=__version__, prog_name="tradegrid")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default=None, help="Logging level (default: TRADEGRID_LOG_LEVEL or WARNING)")
@click.pass_context
def main(ctx: click.Context, log_level: Optional[str]):
    """
    Trade Grid - telemetry ingest tools

    Reduce coordinates, supply readings and raw dump files to compact
    representations.
    """
    settings = _load_settings()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level.upper()})

    logging.basicConfig(level=getattr(logging, settings.log_level))
    ctx.obj = settings


@main.command()
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.argument("z", type=float)
def key(x: float, y: float, z: float):
    """
    Calculate the grid key for a coordinate.

    Use "--" before negative values: tradegrid key -- -1 -1 -1
    """
    from tradegrid.gridkey import GridCell

    try:
        cell = GridCell.from_coordinates(x, y, z)
    except (ValueError, OverflowError) as e:
        console.print(f"[red]Error: Cannot encode ({x}, {y}, {z}): {escape(str(e))}[/]")
        sys.exit(1)

    table = Table(title="Grid Key", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Coordinate", f"({x}, {y}, {z})")
    table.add_row("Cell (qx, qy, qz)", f"({cell.qx}, {cell.qy}, {cell.qz})")
    table.add_row("Cell Origin", "({:.1f}, {:.1f}, {:.1f})".format(*cell.origin))
    table.add_row("Key (hex)", f"{cell.key:#018x}")
    table.add_row("Key (dec)", str(cell.key))

    console.print(table)


@main.command()
@click.argument("csv_file", type=Path)
@click.option("--limit", type=int, default=20, help="Buckets to display (default: 20)")
def buckets(csv_file: Path, limit: int):
    """
    Group x,y,z points from a CSV file into grid buckets.
    """
    from tradegrid.gridkey import GridCell, bucket_counts

    if not csv_file.exists():
        console.print(f"[red]Error: File not found: {escape(str(csv_file))}[/]")
        sys.exit(1)

    try:
        points = _load_points(csv_file)
        counts = bucket_counts(points)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error reading points: {escape(str(e))}[/]")
        sys.exit(1)

    console.print(Panel.fit(
        f"[bold]{csv_file.name}[/]\n"
        f"Points: [green]{len(points):,}[/]\n"
        f"Buckets: [cyan]{len(counts):,}[/]",
        border_style="blue"
    ))

    if not counts:
        return

    table = Table(title=f"Buckets (first {min(limit, len(counts))} by key)")
    table.add_column("Key", style="cyan")
    table.add_column("Cell (qx, qy, qz)", style="dim")
    table.add_column("Points", style="green", justify="right")

    for bucket_key, count in list(counts.items())[:limit]:
        cell = GridCell.from_key(bucket_key)
        table.add_row(
            f"{bucket_key:#018x}",
            f"({cell.qx}, {cell.qy}, {cell.qz})",
            f"{count:,}",
        )

    console.print(table)


@main.command()
@click.argument("files", nargs=-1, required=True, type=Path)
@click.option("--chunk-size", type=click.IntRange(min=1), default=None,
              help="Bytes per read (default: TRADEGRID_READ_BUFFER_SIZE or 128 KiB)")
@click.pass_obj
def lines(settings: IngestSettings, files: tuple[Path, ...], chunk_size: Optional[int]):
    """
    Count newline bytes in one or more files.
    """
    from tradegrid.lines import count_file_lines

    chunk_size = chunk_size or settings.read_buffer_size

    table = Table(title="Line Counts")
    table.add_column("File", style="cyan")
    table.add_column("Lines", style="green", justify="right")

    failed = False
    for path in files:
        try:
            count = count_file_lines(path, chunk_size=chunk_size)
        except OSError as e:
            logger.debug(f"Line count failed for {path}: {e}")
            table.add_row(escape(str(path)), f"[red]{escape(e.strerror or str(e))}[/]")
            failed = True
            continue
        table.add_row(escape(str(path)), f"{count:,}")

    console.print(table)
    if failed:
        sys.exit(1)


@main.command()
@click.argument("readings", nargs=-1, required=True)
def supply(readings: tuple[str, ...]):
    """
    Parse supply level readings.

    Example: tradegrid supply 424242m 2134567891H ? -
    """
    from tradegrid.supply import SupplyLevel, SupplyReadingError, parse_supply_level

    table = Table(title="Supply Readings")
    table.add_column("Reading", style="cyan")
    table.add_column("Units", style="green", justify="right")
    table.add_column("Level", style="green")

    failed = False
    for reading in readings:
        try:
            units, level = parse_supply_level(reading)
        except SupplyReadingError as e:
            table.add_row(escape(repr(reading)), "", f"[red]{e}[/]")
            failed = True
            continue
        table.add_row(escape(repr(reading)), str(units), f"{SupplyLevel(level).name.lower()} ({level})")

    console.print(table)
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
