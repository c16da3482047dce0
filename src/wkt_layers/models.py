"""Pydantic data models for parsed geometries, styles and layers."""

from collections import Counter
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer
from shapely.geometry.base import BaseGeometry

from .config import SYMBOLOGY
from .kinds import GeometryKind, kind_of


class Color(BaseModel):
    """An 8-bit RGB color."""

    model_config = ConfigDict(frozen=True)

    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#RRGGBB`` (the leading ``#`` is optional)."""
        digits = value.strip().removeprefix("#")
        if len(digits) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        return cls(
            red=int(digits[0:2], 16),
            green=int(digits[2:4], 16),
            blue=int(digits[4:6], 16),
        )

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


BLACK = Color(red=0, green=0, blue=0)
GRAY = Color(red=128, green=128, blue=128)


class FeatureType(BaseModel):
    """Schema shared by every parsed record: one geometry attribute in a fixed CRS."""

    model_config = ConfigDict(frozen=True)

    name: str = SYMBOLOGY.FEATURE_TYPE_NAME
    geometry_field: str = SYMBOLOGY.GEOMETRY_FIELD
    crs: str = SYMBOLOGY.CRS_WGS84
    crs_epsg: int | None = None
    crs_name: str | None = None


class GeometryRecord(BaseModel):
    """A single decoded geometry and the schema it conforms to."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    geometry: BaseGeometry
    feature_type: FeatureType

    @property
    def kind(self) -> GeometryKind | None:
        return kind_of(self.geometry)

    @field_serializer("geometry")
    def _geometry_as_wkt(self, geometry: BaseGeometry) -> str:
        return geometry.wkt


def count_kinds(records: tuple[GeometryRecord, ...]) -> dict[str, int]:
    """Count records per geometry kind; kinds outside the table count as ``other``."""
    counts = Counter(record.kind.value if record.kind else "other" for record in records)
    result = {kind.value: counts.get(kind.value, 0) for kind in GeometryKind}
    result["other"] = counts.get("other", 0)
    return result


class FeatureCollection(BaseModel):
    """A named, ordered set of records sharing one feature type."""

    model_config = ConfigDict(frozen=True)

    name: str
    feature_type: FeatureType
    records: tuple[GeometryRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def kind_counts(self) -> dict[str, int]:
        return count_kinds(self.records)


class ParseReport(BaseModel):
    """Outcome of one parse pass over a source file.

    ``failed_lines`` holds the raw text of lines that could not be decoded, in
    file order. Blank lines appear in neither list.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    feature_type: FeatureType
    records: tuple[GeometryRecord, ...] = ()
    failed_lines: tuple[str, ...] = ()

    @property
    def success_count(self) -> int:
        return len(self.records)

    @property
    def failure_count(self) -> int:
        return len(self.failed_lines)

    @property
    def total_lines(self) -> int:
        """Number of non-empty lines processed."""
        return self.success_count + self.failure_count

    def kind_counts(self) -> dict[str, int]:
        return count_kinds(self.records)

    def to_feature_collection(self, name: str) -> FeatureCollection:
        return FeatureCollection(name=name, feature_type=self.feature_type, records=self.records)


class Stroke(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: Color
    width: float = Field(ge=0)


class Fill(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: Color
    opacity: float = Field(ge=0, le=1)


class Marker(BaseModel):
    """Point marker graphic. Opacity follows the point fill opacity."""

    model_config = ConfigDict(frozen=True)

    size: float
    rotation: float
    opacity: float = Field(ge=0, le=1)


class PointRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[GeometryKind.POINT] = GeometryKind.POINT
    stroke: Stroke
    fill: Fill
    marker: Marker


class LineRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[GeometryKind.LINE] = GeometryKind.LINE
    stroke: Stroke
    fill: Fill


class PolygonRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[GeometryKind.POLYGON] = GeometryKind.POLYGON
    stroke: Stroke
    fill: Fill


StyleRule = Annotated[PointRule | LineRule | PolygonRule, Field(discriminator="kind")]


class Style(BaseModel):
    """Ordered rendering rules, one per geometry kind."""

    model_config = ConfigDict(frozen=True)

    rules: tuple[StyleRule, ...]

    def rule_for(self, kind: GeometryKind) -> PointRule | LineRule | PolygonRule:
        for rule in self.rules:
            if rule.kind == kind:
                return rule
        raise KeyError(f"No rule for geometry kind: {kind}")

    def rule_for_geometry(self, geometry: BaseGeometry) -> PointRule | LineRule | PolygonRule | None:
        """Pick the rule a renderer should apply to ``geometry``, if any."""
        kind = kind_of(geometry)
        if kind is None:
            return None
        return self.rule_for(kind)


class Layer(BaseModel):
    """A displayable feature collection with its style."""

    model_config = ConfigDict(frozen=True)

    features: FeatureCollection
    style: Style

    @property
    def name(self) -> str:
        return self.features.name


class Outcome(BaseModel):
    """Result of adding one layer from a file."""

    source: str
    layer_index: int
    success_count: int
    failure_count: int

    @computed_field
    @property
    def has_failures(self) -> bool:
        return self.failure_count > 0


class LayerSummary(BaseModel):
    """One entry of the layer listing."""

    index: int
    name: str
    feature_count: int
    kind_counts: dict[str, int]
    style: Style


class LayerDetail(LayerSummary):
    """A layer with every geometry rendered as WKT."""

    geometries: list[str]


class ParseSummary(BaseModel):
    """Dry-run parse result returned without registering a layer."""

    source: str
    success_count: int
    failure_count: int
    kind_counts: dict[str, int]
    failed_lines: list[str]
