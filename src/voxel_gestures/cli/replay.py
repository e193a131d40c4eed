from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from pathlib import Path

import typer
from pydantic import BaseModel, Field, ValidationError

from ..clock import ManualClock
from ..config import Config
from ..engine import FrameState, VoxelEngine
from ..models.landmarks import HandSample
from . import options
from .common import app, setup_logging


class RecordedFrame(BaseModel):
    """One line of a recording: `{"t": 1234, "landmarks": [[x, y, z], ...] or null}`."""

    t: int = Field(description="Time of the frame, in ms", ge=0)
    landmarks: list[tuple[float, float, float]] | None = Field(None, description="The 21 landmarks, or null")

    def to_sample(self) -> HandSample | None:
        if self.landmarks is None:
            return None
        return HandSample.from_points(self.landmarks)


def read_recording(path: Path) -> Iterator[RecordedFrame]:
    """Read a JSON-lines recording, skipping blank lines.

    Raises:
        ValueError: On the first invalid line, with its line number.
    """
    with path.open() as file:
        for line_number, line in enumerate(file, start=1):
            if not line.strip():
                continue
            try:
                yield RecordedFrame.model_validate_json(line)
            except ValidationError as exc:
                raise ValueError(f"{path}:{line_number}: invalid frame: {exc}") from exc


def print_event(state: FrameState) -> None:
    if state.event is None:
        return
    event = state.event
    print(
        f"[{event.timestamp:>8}ms] {event.mode.value:<6} {event.gesture.value:<9} -> {event.action.value:<6} "
        f"at {event.cell}  (voxels: {state.voxel_count})"
    )


def replay(engine: VoxelEngine, clock: ManualClock, frames: Iterator[RecordedFrame], as_json: bool) -> int:
    """Feed recorded frames to the engine with the recorded timing. Returns the number of actions fired."""
    actions = 0
    for frame in frames:
        clock.set(frame.t)
        state = engine.process_frame(frame.to_sample())
        if state.event is not None:
            actions += 1
        if as_json:
            print(json.dumps(state.to_dict()))
        else:
            print_event(state)
    return actions


@app.command("replay")
def replay_cmd(
    recording: Path = typer.Argument(..., help="JSON-lines file of recorded hand samples", exists=True),  # noqa: B008
    mode: str = typer.Option("build", "--mode", "-m", help="Initial mode: build or delete"),
    save: Path | None = typer.Option(None, "--save", "-s", help="Export the resulting world to this file"),  # noqa: B008
    load: Path | None = typer.Option(None, "--load", "-l", help="Start from this saved world"),  # noqa: B008
    as_json: bool = typer.Option(False, "--json", "-j", help="Print the full state of every frame as JSON"),
    config_path: Path | None = options.config,
    verbose: bool = options.verbose,
) -> None:
    """Replay a recording of hand samples through the engine and print the fired actions."""
    setup_logging(verbose)
    config = Config.load(config_path)

    clock = ManualClock()
    engine = VoxelEngine(config=config, clock=clock)
    try:
        engine.set_mode(mode)
    except ValueError:
        print(f"Error: unknown mode {mode!r} (expected build or delete)", file=sys.stderr)
        raise typer.Exit(1) from None

    if load is not None and not engine.import_from_file(load):
        print(f"Error: could not load {load}", file=sys.stderr)
        raise typer.Exit(1)

    try:
        actions = replay(engine, clock, read_recording(recording), as_json)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise typer.Exit(1) from exc

    if not as_json:
        print(f"\n{actions} action(s) fired, {engine.voxel_count} voxel(s) in the world")

    if save is not None:
        path = engine.export_to_file(save)
        if not as_json:
            print(f"World saved to {path}")
