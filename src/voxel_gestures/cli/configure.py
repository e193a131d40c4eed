from __future__ import annotations

from pathlib import Path

import typer

from ..config import Config
from . import options
from .common import app


@app.command("config")
def config_cmd(
    config_path: Path | None = options.config,
    init: bool = typer.Option(False, "--init", help="Write the default configuration to the config file"),
) -> None:
    """Print the effective configuration.

    The default config location is platform-specific and will be shown if the config file is not found.
    """
    if init:
        path = Config.validate_path(config_path)
        if path.exists():
            print(f"Config file {path} already exists, not overwriting it.")
            raise typer.Exit(1)
        Config().save(path)
        print(f"Default config written to {path}")
        return

    print(Config.load(config_path).model_dump_json(indent=2))
