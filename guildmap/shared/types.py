"""Shared dataclasses and enums for Guild Map."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

Point = Tuple[float, float]


# ── Interaction States ─────────────────────────────────────────────────────

class InteractionPhase(Enum):
    IDLE = auto()
    HOVER_REGION = auto()
    HOVER_MARKER = auto()
    PANEL_OPEN = auto()
    NAVIGATING = auto()


# ── Catalog Entries ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Region:
    """A clickable polygon authored in design-space pixels."""
    id: str
    label: str
    target: str
    tooltip: str = ""
    polygon: Tuple[Point, ...] = ()


@dataclass(frozen=True)
class Marker:
    """A point of interest placed at a normalized (0.0–1.0) position."""
    id: str
    label: str = "Location"
    target: str = "#"
    fx: float = 0.5
    fy: float = 0.5


# ── Geometry ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScaleTransform:
    """Design space -> container pixels for the current container size."""
    scale_x: float = 0.0
    scale_y: float = 0.0
    device_pixel_ratio: float = 1.0
    width: float = 0.0
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass
class Particle:
    """Read-only snapshot of one pooled particle."""
    x: float
    y: float
    vx: float
    vy: float
    size: float
    alpha: float


# ── UI State ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TooltipPlacement:
    """Top-left corner and content of the region tooltip, in container pixels."""
    x: float
    y: float
    width: float
    height: float
    title: str = ""
    body: str = ""


@dataclass(frozen=True)
class PanelContent:
    label: str = "Location"
    target: str = "#"


@dataclass
class InteractionState:
    """Hover/panel state shared by the pointer tracker and the renderer."""
    phase: InteractionPhase = InteractionPhase.IDLE
    hovered_region: Optional[Region] = None
    hovered_marker: Optional[Marker] = None
    panel: Optional[PanelContent] = None
    tooltip: Optional[TooltipPlacement] = None

    @property
    def panel_open(self) -> bool:
        return self.phase == InteractionPhase.PANEL_OPEN

    @property
    def tooltip_visible(self) -> bool:
        return self.tooltip is not None
