"""Hit testing for map regions and markers.

Region polygons are scaled through the live ``ScaleTransform`` before every
test, so the cursor (in container pixels) is always compared against
container-pixel vertices.  Regions use an expanded test that also probes
four neighbours at a fixed radius, which tolerates imprecise touch input and
thin polygon extremities.  Markers use their native square hit box.
"""

import logging
from typing import Iterable, Optional, Sequence

from guildmap import config
from guildmap.shared.geometry import point_in_box
from guildmap.shared.geometry import point_in_polygon as _raw_point_in_polygon
from guildmap.shared.geometry import scale_polygon
from guildmap.shared.types import Marker, Point, Region, ScaleTransform

logger = logging.getLogger(__name__)


def point_in_polygon(
    polygon: Sequence[Point], x: float, y: float, transform: ScaleTransform
) -> bool:
    """Ray-casting parity test against the polygon scaled by *transform*."""
    if len(polygon) < 3:
        return False
    scaled = scale_polygon(polygon, transform.scale_x, transform.scale_y)
    return _raw_point_in_polygon(x, y, scaled)


def expanded_hit(
    polygon: Sequence[Point],
    x: float,
    y: float,
    transform: ScaleTransform,
    radius: float = config.HIT_EXPAND_PX,
) -> bool:
    """True if (x, y) or any axis neighbour at *radius* is inside the polygon."""
    if len(polygon) < 3:
        return False
    scaled = scale_polygon(polygon, transform.scale_x, transform.scale_y)
    return (
        _raw_point_in_polygon(x, y, scaled)
        or _raw_point_in_polygon(x + radius, y, scaled)
        or _raw_point_in_polygon(x - radius, y, scaled)
        or _raw_point_in_polygon(x, y + radius, scaled)
        or _raw_point_in_polygon(x, y - radius, scaled)
    )


class HitTester:
    """Linear scan over the catalog; first match in declaration order wins."""

    def __init__(
        self,
        hit_radius: float = config.HIT_EXPAND_PX,
        marker_size: float = config.MARKER_SIZE_PX,
    ) -> None:
        self._hit_radius = hit_radius
        self._marker_size = marker_size

    def find_region(
        self, regions: Iterable[Region], x: float, y: float, transform: ScaleTransform
    ) -> Optional[Region]:
        if transform.is_empty:
            return None
        for region in regions:
            if expanded_hit(region.polygon, x, y, transform, self._hit_radius):
                return region
        return None

    def find_marker(
        self, markers: Iterable[Marker], x: float, y: float, transform: ScaleTransform
    ) -> Optional[Marker]:
        if transform.is_empty:
            return None
        for marker in markers:
            cx = marker.fx * transform.width
            cy = marker.fy * transform.height
            if point_in_box(x, y, cx, cy, self._marker_size):
                return marker
        return None
