from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

import typer

from ..geometry import in_bounds
from ..persistence import LoadError, parse_save_data
from .common import app


@app.command("show")
def show_cmd(
    path: Path = typer.Argument(..., help="Saved voxel world", exists=True, dir_okay=False),  # noqa: B008
    list_voxels: bool = typer.Option(False, "--list", "-l", help="List every voxel"),
) -> None:
    """Validate a saved voxel world and print a summary."""
    try:
        data = parse_save_data(path.read_bytes())
    except LoadError as exc:
        print(f"Invalid voxel world: {exc}", file=sys.stderr)
        raise typer.Exit(1) from exc

    print(f"Version: {data.version}")
    print(f"Grid size: {data.grid_size}")
    print(f"Saved at: {data.timestamp}ms")
    print(f"Voxels: {len(data.voxels)}")

    out_of_bounds = [record for record in data.voxels if not in_bounds(*record.cell, data.grid_size)]
    if out_of_bounds:
        print(f"  {len(out_of_bounds)} out of the grid (would be dropped when loaded)")

    colors = Counter(record.color for record in data.voxels)
    for color, count in colors.most_common():
        print(f"  {color}: {count}")

    if list_voxels:
        for record in data.voxels:
            print(f"  {record.cell} {record.color} @ {record.timestamp}")
