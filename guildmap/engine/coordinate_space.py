"""
Design-space <-> container-pixel conversion.

Region polygons are authored against a fixed base resolution.  The live
container may be any size, so every piece of geometry goes through the
``ScaleTransform`` held here.  The device pixel ratio only sizes the
backing raster; all hit-testing and drawing math stays in logical pixels.
"""

import logging
from typing import Callable, List, Tuple

from guildmap import config
from guildmap.shared.geometry import polygon_centroid, scale_polygon
from guildmap.shared.types import Marker, Point, Region, ScaleTransform

logger = logging.getLogger(__name__)

ResizeListener = Callable[[ScaleTransform], None]


class CoordinateSpace:
    """Owns the current ``ScaleTransform`` and notifies listeners on resize."""

    def __init__(
        self,
        base_width: float = config.BASE_WIDTH,
        base_height: float = config.BASE_HEIGHT,
    ) -> None:
        self._base_width = float(base_width)
        self._base_height = float(base_height)
        self._transform = ScaleTransform()
        self._listeners: List[ResizeListener] = []

    def add_listener(self, listener: ResizeListener) -> None:
        self._listeners.append(listener)

    @property
    def transform(self) -> ScaleTransform:
        return self._transform

    @property
    def width(self) -> float:
        return self._transform.width

    @property
    def height(self) -> float:
        return self._transform.height

    @property
    def is_empty(self) -> bool:
        return self._transform.is_empty

    def resize(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> ScaleTransform:
        """Recompute the transform for a new container size.

        The new transform replaces the old one in a single assignment, so a
        frame never sees a mix of old and new scale factors.
        """
        width = max(0.0, float(width))
        height = max(0.0, float(height))
        dpr = max(1.0, float(device_pixel_ratio or 1.0))

        scale_x = width / self._base_width if self._base_width > 0 else 0.0
        scale_y = height / self._base_height if self._base_height > 0 else 0.0

        self._transform = ScaleTransform(
            scale_x=scale_x,
            scale_y=scale_y,
            device_pixel_ratio=dpr,
            width=width,
            height=height,
        )
        if self._transform.is_empty:
            logger.debug("Container collapsed to %.0fx%.0f", width, height)
        else:
            logger.debug(
                "Resized to %.0fx%.0f (scale %.3f, %.3f, dpr %.2f)",
                width, height, scale_x, scale_y, dpr,
            )

        for listener in self._listeners:
            listener(self._transform)
        return self._transform

    def backing_size(self) -> Tuple[int, int]:
        """Raster surface size in device pixels.

        The pyglet window allocates its HiDPI framebuffer itself; this is for
        hosts that size an offscreen raster by hand.
        """
        t = self._transform
        return int(round(t.width * t.device_pixel_ratio)), int(round(t.height * t.device_pixel_ratio))

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def to_screen(self, x: float, y: float) -> Point:
        t = self._transform
        return x * t.scale_x, y * t.scale_y

    def to_design(self, x: float, y: float) -> Point:
        t = self._transform
        if t.scale_x == 0 or t.scale_y == 0:
            return 0.0, 0.0
        return x / t.scale_x, y / t.scale_y

    def screen_polygon(self, region: Region) -> Tuple[Point, ...]:
        t = self._transform
        return scale_polygon(region.polygon, t.scale_x, t.scale_y)

    def region_center(self, region: Region) -> Point:
        return polygon_centroid(self.screen_polygon(region))

    def marker_position(self, marker: Marker) -> Point:
        t = self._transform
        return marker.fx * t.width, marker.fy * t.height
