"""
Pointer, touch and keyboard input for the map.

Converts window events to container-local coordinates, runs the hit tester
and drives the ``InteractionStateMachine``.  Markers sit above the map
surface, so they are checked before region polygons.
"""

import logging
from typing import Callable, Optional, Sequence, Tuple

from guildmap import config
from guildmap.engine.coordinate_space import CoordinateSpace
from guildmap.engine.hit_tester import HitTester
from guildmap.engine.state_machine import InteractionStateMachine
from guildmap.engine.tooltip import TooltipPositioner, format_tooltip
from guildmap.shared.types import Marker, Region

logger = logging.getLogger(__name__)

Measure = Callable[[str, str], Tuple[float, float]]

_CHAR_WIDTH_PX = 7.0
_LINE_HEIGHT_PX = 16.0
_PADDING_PX = 10.0


def estimate_tooltip_size(title: str, body: str) -> Tuple[float, float]:
    """Rough text-box size used when no font metrics are available."""
    max_text = config.TOOLTIP_MAX_WIDTH - 2 * _PADDING_PX
    chars_per_line = max(1, int(max_text // _CHAR_WIDTH_PX))
    widest = max(len(title), len(body))
    width = min(config.TOOLTIP_MAX_WIDTH, widest * _CHAR_WIDTH_PX + 2 * _PADDING_PX)
    body_lines = max(1, -(-len(body) // chars_per_line))
    height = (1 + body_lines) * _LINE_HEIGHT_PX + 2 * _PADDING_PX
    return width, height


class PointerTracker:
    """Feeds pointer and touch events into the interaction state."""

    def __init__(
        self,
        state_machine: InteractionStateMachine,
        space: CoordinateSpace,
        regions: Sequence[Region],
        markers: Sequence[Marker],
        hit_tester: Optional[HitTester] = None,
        positioner: Optional[TooltipPositioner] = None,
        measure: Optional[Measure] = None,
        clock=None,
        touch_hide_s: float = config.TOUCH_TOOLTIP_HIDE_S,
    ) -> None:
        self._sm = state_machine
        self._space = space
        self._regions = regions
        self._markers = markers
        self._hit_tester = hit_tester or HitTester()
        self._positioner = positioner or TooltipPositioner()
        self._measure = measure or estimate_tooltip_size
        self._clock = clock
        self._touch_hide_s = touch_hide_s
        self._focus_index = -1
        self._hide_pending = False

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------

    def to_local(self, window_x: float, window_y: float) -> Tuple[float, float]:
        """Window coordinates (origin bottom-left) -> container (origin top-left)."""
        return window_x, self._space.height - window_y

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_pointer_move(self, x: float, y: float) -> None:
        if not self._sm.accepting_hover:
            return
        transform = self._space.transform
        if transform.is_empty:
            self._sm.clear_hover()
            return

        marker = self._hit_tester.find_marker(self._markers, x, y, transform)
        if marker is not None:
            self._sm.hover_marker(marker)
            return

        region = self._hit_tester.find_region(self._regions, x, y, transform)
        if region is None:
            self._sm.clear_hover()
            return

        # Size depends on the text, so measure the content that will be shown.
        title, body = format_tooltip(region)
        size = self._measure(title, body)
        tooltip = self._positioner.placement_for(
            region, x, y, size, transform.width, transform.height,
        )
        self._sm.hover_region(region, tooltip)

    def on_click(self) -> bool:
        """Returns True if the click started a navigation."""
        return self._sm.activate()

    def on_touch_start(self, x: float, y: float) -> None:
        """Touch has no persistent hover: show state, then hide the tooltip."""
        self.on_pointer_move(x, y)
        if self._clock is None:
            return
        if self._hide_pending:
            self._clock.unschedule(self._hide_tooltip)
        self._clock.schedule_once(self._hide_tooltip, self._touch_hide_s)
        self._hide_pending = True

    def on_marker_activate(self, marker: Marker) -> None:
        self._sm.open_panel(marker)

    def on_pointer_leave(self) -> None:
        self._sm.clear_hover()

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    @property
    def focused_marker(self) -> Optional[Marker]:
        if 0 <= self._focus_index < len(self._markers):
            return self._markers[self._focus_index]
        return None

    def focus_next_marker(self) -> Optional[Marker]:
        if not self._markers or not self._sm.accepting_hover:
            return None
        self._focus_index = (self._focus_index + 1) % len(self._markers)
        marker = self._markers[self._focus_index]
        self._sm.hover_marker(marker)
        return marker

    def activate_focused(self) -> None:
        marker = self.focused_marker
        if marker is not None:
            self.on_marker_activate(marker)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _hide_tooltip(self, dt: float = 0.0) -> None:
        self._hide_pending = False
        self._sm.hide_tooltip()
