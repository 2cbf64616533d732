"""Geometry helpers — point-in-polygon and box tests in container pixels."""

from typing import Sequence, Tuple

Point = Tuple[float, float]


def point_in_polygon(px: float, py: float, polygon: Sequence[Point]) -> bool:
    """Ray-casting algorithm for point-in-polygon test.

    The polygon is an implicitly closed ring. Fewer than three vertices
    never contain anything.
    """
    n = len(polygon)
    if n < 3:
        return False
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if ((yi > py) != (yj > py)) and (px < (xj - xi) * (py - yi) / (yj - yi) + xi):
            inside = not inside
        j = i
    return inside


def scale_polygon(polygon: Sequence[Point], sx: float, sy: float) -> Tuple[Point, ...]:
    """Multiply every vertex by (sx, sy)."""
    return tuple((x * sx, y * sy) for x, y in polygon)


def polygon_centroid(polygon: Sequence[Point]) -> Point:
    """Vertex average (not the area centroid). (0, 0) for an empty polygon."""
    n = len(polygon)
    if n == 0:
        return 0.0, 0.0
    sum_x = sum(p[0] for p in polygon)
    sum_y = sum(p[1] for p in polygon)
    return sum_x / n, sum_y / n


def point_in_box(px: float, py: float, cx: float, cy: float, size: float) -> bool:
    """Whether (px, py) lies in the square of side *size* centred on (cx, cy)."""
    half = size / 2.0
    return (cx - half) <= px <= (cx + half) and (cy - half) <= py <= (cy + half)
