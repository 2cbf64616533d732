"""Map engine for Guild Map.

Wires the coordinate space, particle field, hit testing, interaction state,
renderer and frame loop together for one map instance.  Event handlers
write the interaction state and the scale transform; the frame callback
only reads them and advances the particles.
"""

import logging
import time
from typing import Callable, Optional

import numpy as np

from guildmap import config
from guildmap.display.particles import ParticleSystem
from guildmap.display.renderer import Renderer, Surface
from guildmap.display.scheduler import FrameScheduler
from guildmap.engine.catalog import MapCatalog
from guildmap.engine.coordinate_space import CoordinateSpace
from guildmap.engine.hit_tester import HitTester
from guildmap.engine.pointer_tracker import Measure, PointerTracker
from guildmap.engine.state_machine import InteractionStateMachine
from guildmap.engine.tooltip import TooltipGlow, TooltipPositioner
from guildmap.shared.types import InteractionPhase, InteractionState, ScaleTransform

logger = logging.getLogger(__name__)


class MapEngine:
    """One interactive map: state, input handling and the render loop."""

    def __init__(
        self,
        catalog: MapCatalog,
        surface: Surface,
        navigate: Callable[[str], None],
        panel,
        clock=None,
        measure: Optional[Measure] = None,
        rng: Optional[np.random.Generator] = None,
        time_source: Callable[[], float] = time.monotonic,
        fps: int = config.DISPLAY_FPS,
    ) -> None:
        self.catalog = catalog
        self.space = CoordinateSpace(catalog.base_width, catalog.base_height)
        self.particles = ParticleSystem(config.PARTICLE_COUNT, rng=rng)
        self.state_machine = InteractionStateMachine(navigate=navigate, panel=panel)
        self.tooltip_glow = TooltipGlow()
        self.tracker = PointerTracker(
            self.state_machine,
            self.space,
            catalog.regions,
            catalog.markers,
            hit_tester=HitTester(),
            positioner=TooltipPositioner(),
            measure=measure,
            clock=clock,
        )
        self.renderer = Renderer(
            surface,
            self.space,
            self.state_machine.state,
            self.particles,
            clock=time_source,
            tooltip_glow=self.tooltip_glow,
        )
        self.scheduler = FrameScheduler(self.on_frame, fps=fps, clock=clock)

        self.space.add_listener(self._on_transform_changed)
        self.state_machine.on_state_change = self._on_state_change

    @property
    def state(self) -> InteractionState:
        return self.state_machine.state

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def resize(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> ScaleTransform:
        return self.space.resize(width, height, device_pixel_ratio)

    def start(self) -> None:
        self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.stop()

    def on_frame(self, dt: float) -> None:
        self.renderer.render_frame(dt)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _on_transform_changed(self, transform: ScaleTransform) -> None:
        # Particle positions are relative to the container bounds.
        self.particles.reseed(transform.width, transform.height)

    def _on_state_change(self, old: InteractionPhase, new: InteractionPhase) -> None:
        if new == InteractionPhase.NAVIGATING:
            self.stop()


def create_engine(
    catalog: Optional[MapCatalog],
    surface: Optional[Surface],
    navigate: Callable[[str], None],
    panel,
    **kwargs,
) -> Optional[MapEngine]:
    """Build a ``MapEngine``, or return None if a required collaborator is missing.

    The map then stays a static image; nothing is raised.
    """
    missing = [
        name for name, value in (("catalog", catalog), ("surface", surface), ("panel", panel))
        if value is None
    ]
    if missing:
        logger.warning("Map engine disabled; missing %s", ", ".join(missing))
        return None
    engine = MapEngine(catalog, surface, navigate, panel, **kwargs)
    logger.info(
        "Map engine ready: %d region(s), %d marker(s), base %dx%d",
        len(catalog.regions), len(catalog.markers), catalog.base_width, catalog.base_height,
    )
    return engine
