"""Builds per-geometry-kind rendering rules from a stroke and a fill color."""

from typing import assert_never

from .config import SYMBOLOGY
from .kinds import GeometryKind
from .models import Color, Fill, LineRule, Marker, PointRule, PolygonRule, Stroke, Style


class StyleBuilder:
    """Turns two colors into a complete :class:`Style`.

    Color selection happens elsewhere; this class only derives rules, so the
    same two colors always give an equal style.
    """

    def __init__(
        self,
        marker_size: float = SYMBOLOGY.MARKER_SIZE,
        marker_rotation: float = SYMBOLOGY.MARKER_ROTATION,
    ):
        self._marker_size = marker_size
        self._marker_rotation = marker_rotation

    def build_style(self, stroke_color: Color, fill_color: Color) -> Style:
        """Return one rule per geometry kind, in :class:`GeometryKind` order."""
        return Style(rules=tuple(self.build_rule(kind, stroke_color, fill_color) for kind in GeometryKind))

    def build_rule(
        self, kind: GeometryKind, stroke_color: Color, fill_color: Color
    ) -> PointRule | LineRule | PolygonRule:
        stroke = Stroke(color=stroke_color, width=kind.stroke_width)
        fill = Fill(color=fill_color, opacity=kind.fill_opacity)

        match kind:
            case GeometryKind.POINT:
                marker = Marker(
                    size=self._marker_size,
                    rotation=self._marker_rotation,
                    opacity=kind.fill_opacity,
                )
                return PointRule(stroke=stroke, fill=fill, marker=marker)
            case GeometryKind.LINE:
                return LineRule(stroke=stroke, fill=fill)
            case GeometryKind.POLYGON:
                return PolygonRule(stroke=stroke, fill=fill)
            case _:
                assert_never(kind)
