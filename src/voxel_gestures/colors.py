"""Voxel colors: `#RRGGBB` validation and the preset palette."""

from __future__ import annotations

import re

DEFAULT_PALETTE = [
    "#4F46E5",  # Indigo
    "#EF4444",  # Red
    "#10B981",  # Green
    "#F59E0B",  # Amber
    "#3B82F6",  # Blue
    "#8B5CF6",  # Purple
    "#EC4899",  # Pink
    "#14B8A6",  # Teal
    "#F97316",  # Orange
    "#6366F1",  # Violet
]

HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def normalize_color(color: str) -> str:
    """Validate a `#RRGGBB` color and return it upper-cased.

    Raises:
        ValueError: If the color is not a 24-bit hex string.
    """
    if not isinstance(color, str) or not HEX_COLOR_RE.match(color.strip()):
        raise ValueError(f"Invalid color {color!r}: expected '#RRGGBB'")
    return color.strip().upper()

