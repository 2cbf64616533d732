"""Catalog loader for Guild Map.

Reads a ``map.json`` file, validates it against the pydantic schema in
``guildmap.shared.models``, and turns it into immutable ``Region`` and
``Marker`` records held by ``RegionIndex`` and ``MarkerIndex``.  Both
indexes keep declaration order, which is also hit-test priority.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, Iterator, List, Optional, Sequence, TypeVar

from pydantic import ValidationError

from guildmap import config
from guildmap.shared.models import CatalogModel, MarkerModel, RegionModel
from guildmap.shared.types import Marker, Point, Region

logger = logging.getLogger(__name__)

T = TypeVar("T", Region, Marker)


def _safe_fraction(value, default: float = 0.5) -> float:
    """Coerce *value* to a float in [0, 1], returning *default* on failure or None."""
    if value is None or value == "":
        return default
    try:
        f = float(value)
    except (TypeError, ValueError):
        return default
    if f != f:  # NaN
        return default
    return max(0.0, min(1.0, f))


class _Index(Generic[T]):
    """Fixed, ordered collection of catalog entries."""

    def __init__(self, items: Sequence[T]) -> None:
        self._items = tuple(items)
        self._by_id = {item.id: item for item in self._items}

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def get(self, item_id: str) -> Optional[T]:
        return self._by_id.get(item_id)


class RegionIndex(_Index[Region]):
    pass


class MarkerIndex(_Index[Marker]):
    pass


@dataclass(frozen=True)
class MapCatalog:
    title: str
    image_path: Optional[Path]
    base_width: int
    base_height: int
    regions: RegionIndex
    markers: MarkerIndex


# ------------------------------------------------------------------
# Parsing
# ------------------------------------------------------------------

def _unique_id(raw_id: str, fallback: str, seen: set) -> str:
    item_id = str(raw_id or "").strip() or fallback
    if item_id in seen:
        suffix = 1
        while "%s_%d" % (item_id, suffix) in seen:
            suffix += 1
        item_id = "%s_%d" % (item_id, suffix)
    seen.add(item_id)
    return item_id


def _parse_polygon(raw_points: Sequence, region_id: str) -> List[Point]:
    valid_points: List[Point] = []
    for pt in raw_points:
        if isinstance(pt, (list, tuple)) and len(pt) == 2:
            try:
                valid_points.append((float(pt[0]), float(pt[1])))
            except (TypeError, ValueError):
                logger.warning("Skipping invalid vertex %s in region '%s'", pt, region_id)
        else:
            logger.warning("Skipping malformed vertex %s in region '%s'", pt, region_id)
    if len(valid_points) < 3:
        logger.warning(
            "Region '%s' has %d usable vertices and can never be hit",
            region_id, len(valid_points),
        )
    return valid_points


def _parse_region(model: RegionModel, index: int, seen: set) -> Region:
    region_id = _unique_id(model.id, "region_%d" % index, seen)
    return Region(
        id=region_id,
        label=model.label or region_id,
        target=model.target or "#",
        tooltip=model.tooltip,
        polygon=tuple(_parse_polygon(model.polygon, region_id)),
    )


def _parse_marker(model: MarkerModel, index: int, seen: set) -> Marker:
    marker_id = _unique_id(model.id, "marker_%d" % index, seen)
    return Marker(
        id=marker_id,
        label=model.label or "Location",
        target=model.target or "#",
        fx=_safe_fraction(model.x),
        fy=_safe_fraction(model.y),
    )


def parse_catalog(raw: dict, base_dir: Optional[Path] = None) -> MapCatalog:
    """Validate a decoded catalog dict and build a ``MapCatalog``.

    Raises ``pydantic.ValidationError`` if the document does not match the
    schema.
    """
    model = CatalogModel.model_validate(raw)

    region_ids: set = set()
    regions = [_parse_region(r, i, region_ids) for i, r in enumerate(model.regions)]
    marker_ids: set = set()
    markers = [_parse_marker(m, i, marker_ids) for i, m in enumerate(model.markers)]

    image_path: Optional[Path] = None
    if base_dir is not None and model.image:
        resolved = (Path(base_dir) / model.image).resolve()
        if str(resolved).startswith(str(Path(base_dir).resolve()) + os.sep):
            image_path = resolved
        else:
            logger.warning("Image path escapes catalog dir: %s", model.image)

    return MapCatalog(
        title=model.title,
        image_path=image_path,
        base_width=model.base_width,
        base_height=model.base_height,
        regions=RegionIndex(regions),
        markers=MarkerIndex(markers),
    )


def load_catalog(path: Optional[Path] = None) -> Optional[MapCatalog]:
    """Load the catalog at *path* (default ``config.CATALOG_PATH``).

    Returns None if the file is missing or invalid; the map then runs as a
    static image.
    """
    catalog_path = Path(path) if path else Path(config.CATALOG_PATH)
    if not catalog_path.is_file():
        logger.warning("Catalog file does not exist: %s", catalog_path)
        return None
    try:
        with open(catalog_path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except (json.JSONDecodeError, ValueError, OSError):
        logger.exception("Failed to read catalog %s", catalog_path)
        return None
    if not isinstance(raw, dict):
        logger.warning("Catalog %s is not a JSON object", catalog_path)
        return None
    try:
        catalog = parse_catalog(raw, base_dir=catalog_path.parent)
    except ValidationError:
        logger.exception("Catalog %s failed validation", catalog_path)
        return None

    logger.info(
        "Catalog loaded from %s: %d region(s), %d marker(s)",
        catalog_path.name, len(catalog.regions), len(catalog.markers),
    )
    return catalog
