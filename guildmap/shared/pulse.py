"""
Wall-clock pulse curves for hover glows.

Each function maps a time value to a stroke width, blur or radius that
oscillates sinusoidally around a resting value.  Callers pass the time in
the unit named by the argument; nothing here reads a clock.
"""

from __future__ import annotations

import math

from guildmap import config


def region_pulse(time_ms: float) -> float:
    """Outline pulse for a hovered region: 1.5 ± 1.2."""
    return 1.5 + math.sin(time_ms * config.REGION_PULSE_RATE) * 1.2


def region_glow_width(pulse: float) -> float:
    return 10.0 + pulse


def region_glow_blur(pulse: float) -> float:
    return 28.0 + pulse * 3.0


def marker_pulse(time_s: float) -> float:
    """Halo pulse for a hovered marker: 6 ± 4 pixels."""
    return (
        config.MARKER_PULSE_BASE
        + math.sin(time_s * config.MARKER_PULSE_RATE) * config.MARKER_PULSE_AMPLITUDE
    )


def marker_radius(base_size: float, pulse: float) -> float:
    return base_size / 2.0 + pulse


def marker_ring_radius(base_size: float) -> float:
    """Ring radius with the pulse held at its resting value."""
    return base_size / 2.0 + config.MARKER_PULSE_BASE


def tooltip_glow(phase: float) -> tuple[float, float]:
    """(alpha, size) of the tooltip halo at *phase* radians."""
    s = math.sin(phase)
    return 0.28 + s * 0.18, 14.0 + s * 6.0
