"""Color conversion utilities for oceanforge shading parameters."""

from __future__ import annotations

from typing import Any, Sequence, Tuple, Union

import numpy as np

Rgba = Tuple[float, float, float, float]

WHITE: Rgba = (1.0, 1.0, 1.0, 1.0)


def hex_to_rgba(hex_color: str, alpha: float = 1.0) -> Rgba:
    """Convert hex color to an RGBA tuple (0.0-1.0 range).

    Args:
        hex_color: Color in hex format, e.g. '#002B4D' or '002B4D' or '#002B4DFF'
        alpha: Alpha value (0.0-1.0), used if hex doesn't include alpha

    Returns:
        Tuple of (R, G, B, A) values in 0.0-1.0 range

    Raises:
        ValueError: if hex color format is invalid
    """
    digits = hex_color.strip().lstrip('#')
    try:
        if len(digits) == 6:
            r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
            return rgba_u8(r, g, b, int(round(float(alpha) * 255.0)))
        if len(digits) == 8:
            r, g, b, a = (int(digits[i:i + 2], 16) for i in (0, 2, 4, 6))
            return rgba_u8(r, g, b, a)
    except ValueError as exc:
        raise ValueError(f"Invalid hex color: {hex_color}") from exc
    raise ValueError(f"Invalid hex color: {hex_color}")


def rgba_u8(r: int, g: int, b: int, a: int = 255) -> Rgba:
    """Convert 8-bit RGBA channels (0-255) to normalized (0.0-1.0) values."""
    channels = (r, g, b, a)
    for value in channels:
        if not 0 <= int(value) <= 255:
            raise ValueError(f"8-bit color channel out of range: {value}")
    return tuple(int(c) / 255.0 for c in channels)  # type: ignore[return-value]


def to_u8(color: Sequence[float]) -> Tuple[int, ...]:
    """Quantize a normalized color back to 8-bit channels."""
    return tuple(int(round(min(max(float(c), 0.0), 1.0) * 255.0)) for c in color)


def to_rgba(value: Union[str, Sequence[Any]], label: str = "color") -> Rgba:
    """Coerce a hex string, RGB or RGBA sequence into a normalized RGBA tuple.

    RGB sequences get an opaque alpha.
    """
    if isinstance(value, str):
        return hex_to_rgba(value)
    if isinstance(value, (list, tuple, np.ndarray)):
        if len(value) == 3:
            return (float(value[0]), float(value[1]), float(value[2]), 1.0)
        if len(value) == 4:
            return (float(value[0]), float(value[1]), float(value[2]), float(value[3]))
    raise ValueError(f"{label} must be a hex string or a sequence of 3 or 4 numeric values")


def srgb_to_linear(color: Sequence[float]) -> np.ndarray:
    """Convert an sRGB-encoded RGBA color to linear RGBA.

    Alpha is passed through unchanged.
    """
    arr = np.asarray(color, dtype=np.float64)
    rgb = arr[:3]
    linear = np.where(rgb <= 0.04045, rgb / 12.92, np.power((rgb + 0.055) / 1.055, 2.4))
    return np.concatenate([linear, arr[3:]]).astype(np.float32)
