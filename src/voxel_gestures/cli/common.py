from __future__ import annotations

import logging

import typer

from ..config import Config

app = typer.Typer(help="Gesture-driven voxel editing, development tools.")

DEFAULT_USER_CONFIG_PATH = Config.get_user_path()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Attach a stream handler to the package logger, once."""
    logger = logging.getLogger("voxel_gestures")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False  # Don't propagate to root logger
