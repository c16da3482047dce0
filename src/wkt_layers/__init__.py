"""Load WKT text files as styled map layers."""

from .context import AppContext, create_context
from .errors import (
    IndexOutOfRangeError,
    InvalidInputError,
    InvalidLayerError,
    LayerError,
    SessionClosedError,
    SourceReadError,
    UserCancelledError,
)
from .kinds import GeometryKind, kind_of
from .models import (
    BLACK,
    GRAY,
    Color,
    FeatureCollection,
    GeometryRecord,
    Layer,
    Outcome,
    ParseReport,
    Style,
)
from .reader import LineGeometryParser
from .registry import LayerRegistry
from .styles import StyleBuilder
from .workflow import IngestionWorkflow

__all__ = [
    "BLACK",
    "GRAY",
    "AppContext",
    "Color",
    "FeatureCollection",
    "GeometryKind",
    "GeometryRecord",
    "IndexOutOfRangeError",
    "IngestionWorkflow",
    "InvalidInputError",
    "InvalidLayerError",
    "Layer",
    "LayerError",
    "LayerRegistry",
    "LineGeometryParser",
    "Outcome",
    "ParseReport",
    "SessionClosedError",
    "SourceReadError",
    "Style",
    "StyleBuilder",
    "UserCancelledError",
    "create_context",
    "kind_of",
]
