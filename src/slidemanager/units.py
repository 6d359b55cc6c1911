"""Unit and color helpers for Google Slides API payloads.

Sizes and offsets are sent in points (``unit: "PT"``); colors are sent as
RGB floats in the range 0-1.
"""

from __future__ import annotations

import re
from typing import Any

from slidemanager.exceptions import MalformedInputError

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")


def pt_dimension(magnitude: float) -> dict[str, Any]:
    """Build a Dimension object in points."""
    return {"magnitude": magnitude, "unit": "PT"}


def pt_size(width: float, height: float) -> dict[str, Any]:
    """Build a Size object in points."""
    return {"width": pt_dimension(width), "height": pt_dimension(height)}


def pt_translate(x: float, y: float) -> dict[str, Any]:
    """Build an unscaled AffineTransform placing an element at (x, y) points."""
    return {
        "scaleX": 1.0,
        "scaleY": 1.0,
        "translateX": x,
        "translateY": y,
        "unit": "PT",
    }


def hex_to_rgb(hex_color: str) -> tuple[float, float, float]:
    """Convert hex color string to RGB float values (0-1).

    Args:
        hex_color: Hex color string like "#4285f4" or "4285f4"

    Returns:
        Tuple of (red, green, blue) each 0.0 to 1.0

    Raises:
        MalformedInputError: If the string is not a six-digit hex color.
    """
    match = _HEX_COLOR.match(hex_color.strip())
    if not match:
        raise MalformedInputError(f"invalid hex color: {hex_color!r}")

    digits = match.group(1)
    r = int(digits[0:2], 16) / 255.0
    g = int(digits[2:4], 16) / 255.0
    b = int(digits[4:6], 16) / 255.0
    return (r, g, b)


def opaque_color(hex_color: str) -> dict[str, Any]:
    """Build an OpaqueColor from a hex string."""
    r, g, b = hex_to_rgb(hex_color)
    return {"rgbColor": {"red": r, "green": g, "blue": b}}
