"""Interaction state machine for Guild Map.

States: IDLE, HOVER_REGION, HOVER_MARKER, PANEL_OPEN and the terminal
NAVIGATING.  The machine owns the shared ``InteractionState`` record; the
renderer and the window read it, and only the methods here write it.
"""

import logging
from typing import Callable, Optional

from guildmap.shared.types import (
    InteractionPhase,
    InteractionState,
    Marker,
    PanelContent,
    Region,
    TooltipPlacement,
)

logger = logging.getLogger(__name__)


class InteractionStateMachine:
    """Hover/panel/navigation flow for one map instance."""

    def __init__(
        self,
        navigate: Callable[[str], None],
        panel=None,
    ) -> None:
        """
        Args:
            navigate: Called once with the target when the page navigates.
            panel: Detail panel collaborator exposing ``open(PanelContent)``
                and ``close()``; may be None.
        """
        self._navigate = navigate
        self._panel = panel
        self._state = InteractionState()

        self.on_state_change: Optional[
            Callable[[InteractionPhase, InteractionPhase], None]
        ] = None

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def phase(self) -> InteractionPhase:
        return self._state.phase

    @property
    def accepting_hover(self) -> bool:
        return self._state.phase not in (
            InteractionPhase.PANEL_OPEN, InteractionPhase.NAVIGATING,
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def hover_region(self, region: Region, tooltip: Optional[TooltipPlacement] = None) -> None:
        if not self.accepting_hover:
            return
        self._state.hovered_region = region
        self._state.hovered_marker = None
        self._state.tooltip = tooltip
        self._set_phase(InteractionPhase.HOVER_REGION)

    def hover_marker(self, marker: Marker) -> None:
        if not self.accepting_hover:
            return
        self._state.hovered_region = None
        self._state.hovered_marker = marker
        self._state.tooltip = None
        self._set_phase(InteractionPhase.HOVER_MARKER)

    def leave_marker(self, marker: Marker) -> None:
        """Pointer left *marker*'s hit box without entering another."""
        if self._state.phase == InteractionPhase.HOVER_MARKER and self._state.hovered_marker == marker:
            self.clear_hover()

    def clear_hover(self) -> None:
        if not self.accepting_hover:
            return
        self._state.hovered_region = None
        self._state.hovered_marker = None
        self._state.tooltip = None
        self._set_phase(InteractionPhase.IDLE)

    def hide_tooltip(self) -> None:
        """Hide the tooltip but keep the hover glow (touch has no hover-out)."""
        if self._state.phase == InteractionPhase.NAVIGATING:
            return
        self._state.tooltip = None

    def open_panel(self, marker: Marker) -> None:
        if self._state.phase == InteractionPhase.NAVIGATING:
            return
        content = PanelContent(label=marker.label or "Location", target=marker.target or "#")
        self._state.hovered_region = None
        self._state.hovered_marker = marker
        self._state.tooltip = None
        self._state.panel = content
        self._set_phase(InteractionPhase.PANEL_OPEN)
        if self._panel is not None:
            self._panel.open(content)

    def close_panel(self) -> None:
        if self._state.phase != InteractionPhase.PANEL_OPEN:
            return
        self._state.panel = None
        self._state.hovered_marker = None
        self._set_phase(InteractionPhase.IDLE)
        if self._panel is not None:
            self._panel.close()

    def activate(self) -> bool:
        """Click/tap on the map surface. Returns True if navigation began."""
        if self._state.phase == InteractionPhase.HOVER_REGION and self._state.hovered_region:
            return self.begin_navigation(self._state.hovered_region.target)
        if self._state.phase == InteractionPhase.HOVER_MARKER and self._state.hovered_marker:
            self.open_panel(self._state.hovered_marker)
        return False

    def begin_navigation(self, target: str) -> bool:
        if self._state.phase == InteractionPhase.NAVIGATING:
            logger.debug("Ignoring navigation to %s; already navigating", target)
            return False
        self._state.tooltip = None
        self._set_phase(InteractionPhase.NAVIGATING)
        logger.info("Navigating to %s", target)
        self._navigate(target)
        return True

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _set_phase(self, new_phase: InteractionPhase) -> None:
        old = self._state.phase
        if old == new_phase:
            return
        logger.debug("State transition: %s -> %s", old.name, new_phase.name)
        self._state.phase = new_phase
        if self.on_state_change:
            self.on_state_change(old, new_phase)
