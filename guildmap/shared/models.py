"""
Pydantic models for the Guild Map catalog file.
Matches the map.json schema: design-space size, regions and markers.
"""

from typing import Any, List

from pydantic import BaseModel, Field

from guildmap import config


class RegionModel(BaseModel):
    id: str = ""
    label: str = ""
    target: str = "#"
    tooltip: str = ""
    # Vertices are checked one by one in the catalog loader so that a single
    # bad pair does not discard the whole region.
    polygon: List[Any] = Field(default_factory=list)


class MarkerModel(BaseModel):
    id: str = ""
    label: str = "Location"
    target: str = "#"
    # Coerced leniently by the loader; anything unusable falls back to the centre.
    x: Any = None
    y: Any = None


class CatalogModel(BaseModel):
    version: int = 1
    title: str = ""
    image: str = "map.bmp"
    base_width: int = config.BASE_WIDTH
    base_height: int = config.BASE_HEIGHT
    regions: List[RegionModel] = Field(default_factory=list)
    markers: List[MarkerModel] = Field(default_factory=list)
