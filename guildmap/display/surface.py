"""PygletSurface — the renderer's drawing backend built on pyglet.shapes.

Each frame the renderer describes the scene into a fresh batch; the window
draws that batch from ``on_draw``.  Coordinates arrive in container pixels
with a top-left origin and are flipped to pyglet's bottom-left origin here.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

import pyglet
from pyglet import shapes

from guildmap.shared.types import Point

logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, float]

_GLOW_LAYERS = 4
_GRADIENT_STEPS = 12
_RING_SEGMENTS = 48


def _to_color(rgba: RGBA, alpha_scale: float = 1.0) -> Tuple[int, int, int, int]:
    r, g, b, a = rgba
    alpha = int(round(max(0.0, min(1.0, a * alpha_scale)) * 255))
    return int(r), int(g), int(b), alpha


def _gradient_at(stops: Sequence[Tuple[float, RGBA]], t: float) -> RGBA:
    """Linear interpolation between colour stops at offset *t* (0-1)."""
    if t <= stops[0][0]:
        return stops[0][1]
    for (t0, c0), (t1, c1) in zip(stops, stops[1:]):
        if t <= t1:
            f = 0.0 if t1 == t0 else (t - t0) / (t1 - t0)
            return tuple(a + (b - a) * f for a, b in zip(c0, c1))  # type: ignore[return-value]
    return stops[-1][1]


class PygletSurface:
    """Retained-per-frame drawing into a pyglet batch."""

    def __init__(self) -> None:
        self._batch = pyglet.graphics.Batch()
        self._shapes: List[object] = []
        self._order = 0
        self._height = 0.0

    def clear(self, width: float, height: float) -> None:
        # Dropping the shape references releases their vertex lists.
        self._shapes = []
        self._batch = pyglet.graphics.Batch()
        self._order = 0
        self._height = float(height)

    def draw(self) -> None:
        self._batch.draw()

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def fill_circle(self, x: float, y: float, radius: float, color: RGBA) -> None:
        group = self._next_group()
        self._shapes.append(
            shapes.Circle(x, self._flip(y), radius, color=_to_color(color),
                          batch=self._batch, group=group)
        )

    def stroke_polygon(
        self,
        points: Sequence[Point],
        width: float,
        color: RGBA,
        blur: float = 0.0,
        blur_color: Optional[RGBA] = None,
    ) -> None:
        if blur > 0 and blur_color is not None:
            # Approximate a shadow blur with progressively wider, fainter strokes.
            for layer in range(_GLOW_LAYERS, 0, -1):
                spread = blur * layer / _GLOW_LAYERS
                self._polyline(points, width + spread, _to_color(blur_color, 0.6 / _GLOW_LAYERS))
        self._polyline(points, width, _to_color(color))

    def fill_radial_gradient(
        self, x: float, y: float, radius: float, stops: Sequence[Tuple[float, RGBA]]
    ) -> None:
        if radius <= 0 or not stops:
            return
        # Concentric discs, outermost first; each adds its share of alpha.
        for i in range(_GRADIENT_STEPS):
            t = 1.0 - i / _GRADIENT_STEPS
            rgba = _gradient_at(stops, t)
            group = self._next_group()
            self._shapes.append(
                shapes.Circle(x, self._flip(y), radius * t,
                              color=_to_color(rgba, 1.0 / _GRADIENT_STEPS * 2.0),
                              batch=self._batch, group=group)
            )

    def stroke_circle(self, x: float, y: float, radius: float, width: float, color: RGBA) -> None:
        ring = [
            (x + math.cos(a) * radius, y + math.sin(a) * radius)
            for a in (2 * math.pi * i / _RING_SEGMENTS for i in range(_RING_SEGMENTS))
        ]
        self._polyline(ring, width, _to_color(color), joints=False)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _flip(self, y: float) -> float:
        return self._height - y

    def _next_group(self) -> pyglet.graphics.Group:
        self._order += 1
        return pyglet.graphics.Group(order=self._order)

    def _polyline(self, points: Sequence[Point], width: float, color, joints: bool = True) -> None:
        """Closed polyline with round joins."""
        group = self._next_group()
        n = len(points)
        for i in range(n):
            x1, y1 = points[i]
            x2, y2 = points[(i + 1) % n]
            self._shapes.append(
                shapes.Line(x1, self._flip(y1), x2, self._flip(y2), width,
                            color=color, batch=self._batch, group=group)
            )
            if joints:
                self._shapes.append(
                    shapes.Circle(x1, self._flip(y1), width / 2.0,
                                  color=color, batch=self._batch, group=group)
                )
