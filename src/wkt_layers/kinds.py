"""Geometry kinds and their fixed default symbology."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from shapely.geometry.base import BaseGeometry


@dataclass(frozen=True)
class KindSymbology:
    fill_opacity: float
    stroke_width: float


class GeometryKind(StrEnum):
    """Closed set of geometry kinds a style carries one rule for.

    Declaration order is the rule order of every generated style.
    """

    POINT = "point"
    LINE = "line"
    POLYGON = "polygon"

    @property
    def fill_opacity(self) -> float:
        return KIND_TABLE[self].fill_opacity

    @property
    def stroke_width(self) -> float:
        return KIND_TABLE[self].stroke_width


KIND_TABLE: dict[GeometryKind, KindSymbology] = {
    GeometryKind.POINT: KindSymbology(fill_opacity=1.0, stroke_width=1.0),
    GeometryKind.LINE: KindSymbology(fill_opacity=1.0, stroke_width=1.0),
    GeometryKind.POLYGON: KindSymbology(fill_opacity=0.5, stroke_width=1.0),
}

_GEOM_TYPE_KINDS = {
    "Point": GeometryKind.POINT,
    "MultiPoint": GeometryKind.POINT,
    "LineString": GeometryKind.LINE,
    "LinearRing": GeometryKind.LINE,
    "MultiLineString": GeometryKind.LINE,
    "Polygon": GeometryKind.POLYGON,
    "MultiPolygon": GeometryKind.POLYGON,
}


def kind_of(geometry: BaseGeometry) -> GeometryKind | None:
    """Classify a shapely geometry, or return None for mixed collections."""
    return _GEOM_TYPE_KINDS.get(geometry.geom_type)
