"""Numeric and geometry helpers used across the game."""

from __future__ import annotations

import math

import numpy as np

from .config import MIN_PLAYFIELD_HEIGHT, MIN_PLAYFIELD_WIDTH


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def spans_overlap(a_lo: float, a_hi: float, b_lo: float, b_hi: float) -> bool:
    """True if open intervals (a_lo, a_hi) and (b_lo, b_hi) overlap.

    Touching edges do not count as overlap.
    """
    return a_hi > b_lo and a_lo < b_hi


def finite_or(value: float, fallback: float) -> float:
    """Return value as float, or fallback if it is None, NaN or infinite."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return fallback
    return value if math.isfinite(value) else fallback


def sanitize_viewport(width: float, height: float) -> tuple[float, float]:
    """Clamp viewport dimensions to the minimum viable playfield.

    Non-finite values collapse to the minimum rather than propagating.
    """
    w = finite_or(width, MIN_PLAYFIELD_WIDTH)
    h = finite_or(height, MIN_PLAYFIELD_HEIGHT)
    return max(float(MIN_PLAYFIELD_WIDTH), w), max(float(MIN_PLAYFIELD_HEIGHT), h)


def normalize_dt(elapsed_ms: float, frame_ms: float) -> float:
    """Convert a wall-clock delta into frame units, never negative."""
    dt = finite_or(elapsed_ms, 0.0) / frame_ms
    return max(0.0, dt)


def scale_color(color: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    """Scale an RGB color by factor, clamped to [0,255]."""
    r, g, b = color
    return (
        int(clamp(r * factor, 0, 255)),
        int(clamp(g * factor, 0, 255)),
        int(clamp(b * factor, 0, 255)),
    )


def vertical_gradient(
    w: int, h: int, top: tuple[int, int, int], bottom: tuple[int, int, int]
) -> np.ndarray:
    """Build a (w, h, 3) uint8 array blending top to bottom, for surfarray."""
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None]
    rows = np.asarray(top, dtype=np.float32) * (1.0 - t) + np.asarray(bottom, dtype=np.float32) * t
    img = np.broadcast_to(rows[None, :, :], (w, h, 3))
    return np.clip(img, 0, 255).astype(np.uint8)
