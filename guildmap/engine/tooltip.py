"""Tooltip placement and glow animation."""

import logging
from typing import Tuple

from guildmap import config
from guildmap.shared.pulse import tooltip_glow
from guildmap.shared.types import Region, TooltipPlacement

logger = logging.getLogger(__name__)

_GLOW_PHASE_STEP = 0.1
_GLOW_REST = (0.25, 14.0)


def format_tooltip(region: Region) -> Tuple[str, str]:
    """(title, body) shown for a hovered region."""
    return region.label, region.tooltip or "Click to open"


class TooltipPositioner:
    """Places the tooltip next to the pointer without leaving the container.

    Each axis is resolved on its own: the default spot is up and to the
    right of the pointer, flipping left or below when that would overflow,
    and clamping to a small margin when the flip overflows too.
    """

    def __init__(
        self,
        offset: float = config.TOOLTIP_OFFSET_PX,
        margin: float = config.TOOLTIP_MARGIN_PX,
    ) -> None:
        self._offset = offset
        self._margin = margin

    def place(
        self,
        px: float,
        py: float,
        width: float,
        height: float,
        container_width: float,
        container_height: float,
    ) -> Tuple[float, float]:
        """Return the tooltip's top-left corner in container pixels."""
        x = self._place_x(px, width, container_width)
        y = self._place_y(py, height, container_height)

        # Pointers reported outside the container can still push the box out.
        x = max(0.0, min(x, container_width - width))
        y = max(0.0, min(y, container_height - height))
        return x, y

    def placement_for(
        self,
        region: Region,
        px: float,
        py: float,
        size: Tuple[float, float],
        container_width: float,
        container_height: float,
    ) -> TooltipPlacement:
        title, body = format_tooltip(region)
        width, height = size
        x, y = self.place(px, py, width, height, container_width, container_height)
        return TooltipPlacement(x=x, y=y, width=width, height=height, title=title, body=body)

    def _place_x(self, px: float, width: float, container_width: float) -> float:
        x = px + self._offset
        if x + width > container_width:
            x = px - width - self._offset
            if x < 0:
                x = min(self._margin, max(0.0, container_width - width))
        return x

    def _place_y(self, py: float, height: float, container_height: float) -> float:
        y = py - self._offset - height
        if y < 0:
            y = py + self._offset
            if y + height > container_height:
                y = max(0.0, container_height - height - self._margin)
        return y


class TooltipGlow:
    """Pulsing halo around the visible tooltip, advanced once per frame."""

    def __init__(self) -> None:
        self._phase = 0.0
        self.alpha, self.size = _GLOW_REST

    @property
    def phase(self) -> float:
        return self._phase

    def update(self, visible: bool) -> Tuple[float, float]:
        if visible:
            self._phase += _GLOW_PHASE_STEP
            self.alpha, self.size = tooltip_glow(self._phase)
        else:
            self.alpha, self.size = _GLOW_REST
        return self.alpha, self.size
