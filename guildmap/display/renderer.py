"""Renderer — composites particles, region glow and marker glow every frame."""

import logging
import time
from typing import Callable, Optional, Protocol, Sequence, Tuple

from guildmap import config
from guildmap.display.particles import ParticleSystem
from guildmap.engine.coordinate_space import CoordinateSpace
from guildmap.engine.tooltip import TooltipGlow
from guildmap.shared import pulse
from guildmap.shared.types import InteractionState, Marker, Point, Region

logger = logging.getLogger(__name__)

RGBA = Tuple[int, int, int, float]

# Region outline
_REGION_GLOW_COLOR: RGBA = (255, 130, 20, 0.55)
_REGION_SHADOW_COLOR: RGBA = (255, 120, 10, 0.95)
_REGION_CORE_COLOR: RGBA = (255, 180, 80, 0.95)
_REGION_CORE_WIDTH = 3.0

# Marker halo
_MARKER_HALO_STOPS: Sequence[Tuple[float, RGBA]] = (
    (0.0, (255, 150, 50, 0.32)),
    (0.5, (255, 90, 20, 0.14)),
    (1.0, (255, 90, 20, 0.0)),
)
_MARKER_RING_COLOR: RGBA = (255, 160, 80, 0.45)
_MARKER_RING_WIDTH = 2.0


class Surface(Protocol):
    """Drawing backend in container pixels, origin top-left."""

    def clear(self, width: float, height: float) -> None: ...

    def fill_circle(self, x: float, y: float, radius: float, color: RGBA) -> None: ...

    def stroke_polygon(
        self,
        points: Sequence[Point],
        width: float,
        color: RGBA,
        blur: float = 0.0,
        blur_color: Optional[RGBA] = None,
    ) -> None: ...

    def fill_radial_gradient(
        self, x: float, y: float, radius: float, stops: Sequence[Tuple[float, RGBA]]
    ) -> None: ...

    def stroke_circle(self, x: float, y: float, radius: float, width: float, color: RGBA) -> None: ...


class Renderer:
    """Draws one frame of the interactive layer from the shared state."""

    def __init__(
        self,
        surface: Surface,
        space: CoordinateSpace,
        state: InteractionState,
        particles: ParticleSystem,
        marker_size: float = config.MARKER_SIZE_PX,
        clock: Callable[[], float] = time.monotonic,
        tooltip_glow: Optional[TooltipGlow] = None,
    ) -> None:
        """
        Args:
            surface: Backend the frame is drawn into.
            space: Live coordinate space; read, never cached, every frame.
            state: Interaction state written by the pointer tracker.
            particles: Ambient particle pool, advanced here.
            marker_size: Marker diameter the halo is sized from.
            clock: Wall-clock source in seconds for the glow pulses.
            tooltip_glow: Optional tooltip halo animation to advance.
        """
        self._surface = surface
        self._space = space
        self._state = state
        self._particles = particles
        self._marker_size = marker_size
        self._clock = clock
        self._tooltip_glow = tooltip_glow
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def render_frame(self, dt: float = 1.0 / config.DISPLAY_FPS) -> bool:
        """Draw a single frame. Returns False if the container has no area."""
        transform = self._space.transform
        if transform.is_empty:
            return False

        now = self._clock()
        self._surface.clear(transform.width, transform.height)

        self._particles.step(dt * config.DISPLAY_FPS)
        self._draw_particles()

        region = self._state.hovered_region
        if region is not None:
            self._draw_region_glow(region, now)

        marker = self._state.hovered_marker
        if marker is not None:
            self._draw_marker_glow(marker, now)

        if self._tooltip_glow is not None:
            self._tooltip_glow.update(self._state.tooltip_visible)

        self._frame_count += 1
        return True

    # ------------------------------------------------------------------
    # Layers
    # ------------------------------------------------------------------

    def _draw_particles(self) -> None:
        r, g, b = config.PARTICLE_COLOR
        for p in self._particles:
            self._surface.fill_circle(p.x, p.y, p.size, (r, g, b, p.alpha))

    def _draw_region_glow(self, region: Region, now: float) -> None:
        points = self._space.screen_polygon(region)
        if len(points) < 2:
            return
        beat = pulse.region_pulse(now * 1000.0)
        # Wide pulsing glow underneath, crisp outline on top.
        self._surface.stroke_polygon(
            points,
            pulse.region_glow_width(beat),
            _REGION_GLOW_COLOR,
            blur=pulse.region_glow_blur(beat),
            blur_color=_REGION_SHADOW_COLOR,
        )
        self._surface.stroke_polygon(points, _REGION_CORE_WIDTH, _REGION_CORE_COLOR)

    def _draw_marker_glow(self, marker: Marker, now: float) -> None:
        x, y = self._space.marker_position(marker)
        radius = pulse.marker_radius(self._marker_size, pulse.marker_pulse(now))
        self._surface.fill_radial_gradient(x, y, radius * 2.0, _MARKER_HALO_STOPS)
        self._surface.stroke_circle(
            x, y, pulse.marker_ring_radius(self._marker_size),
            _MARKER_RING_WIDTH, _MARKER_RING_COLOR,
        )
