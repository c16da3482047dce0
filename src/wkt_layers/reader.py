"""Line-oriented WKT reader: one geometry per non-empty line, bad lines collected."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from pyproj import CRS
from shapely import wkt
from shapely.geometry.base import BaseGeometry

from .config import DEFAULT_CONFIG, SYMBOLOGY, ViewerConfig
from .errors import InvalidInputError, SourceReadError
from .models import FeatureType, GeometryRecord, ParseReport

logger = logging.getLogger(__name__)

Decoder = Callable[[str], BaseGeometry]


def wgs84_feature_type() -> FeatureType:
    """Build the feature type every parsed record is tagged with."""
    crs = CRS.from_user_input(SYMBOLOGY.CRS_WGS84)
    return FeatureType(crs=SYMBOLOGY.CRS_WGS84, crs_epsg=crs.to_epsg(), crs_name=crs.name)


def file_extension(filename: str) -> str:
    """Text after the last dot of ``filename``, or "" when it has no dot."""
    if "." not in filename:
        return ""
    return filename.rpartition(".")[2]


class LineGeometryParser:
    """Parses text files holding one WKT geometry per line.

    Decoding is delegated to ``decode`` (``shapely.wkt.loads`` by default),
    which must raise on malformed input. A failed line is recorded in the
    report and never aborts the file.
    """

    def __init__(self, config: ViewerConfig = DEFAULT_CONFIG, decode: Decoder = wkt.loads):
        self._extension = config.source_extension
        self._encoding = config.encoding
        self._decode = decode
        self._feature_type = wgs84_feature_type()

    @property
    def feature_type(self) -> FeatureType:
        return self._feature_type

    def validate(self, source_path: str | Path) -> Path:
        """Check extension and readability before any line is read.

        The extension check is an exact, case-sensitive match.
        """
        path = Path(source_path)
        if file_extension(path.name) != self._extension:
            raise InvalidInputError(f"File selected is not a {self._extension} file: {path.name}")
        if not path.is_file():
            raise InvalidInputError(f"File not found: {path}")
        if not os.access(path, os.R_OK):
            raise InvalidInputError(f"File is not readable: {path}")
        return path

    def parse(self, source_path: str | Path) -> ParseReport:
        """Read ``source_path`` and return every decoded record and failed line."""
        path = self.validate(source_path)

        records: list[GeometryRecord] = []
        failed_lines: list[str] = []

        try:
            with open(path, encoding=self._encoding, newline="") as f:
                for line in f:
                    raw = line.rstrip("\r\n")
                    if not raw.strip():
                        continue
                    geometry = self._decode_line(raw)
                    if geometry is None:
                        failed_lines.append(raw)
                    else:
                        records.append(GeometryRecord(geometry=geometry, feature_type=self._feature_type))
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Error reading file {path}: {e}") from e

        report = ParseReport(
            source=str(path),
            feature_type=self._feature_type,
            records=tuple(records),
            failed_lines=tuple(failed_lines),
        )
        logger.info(
            f"Parsed {path.name}: {report.success_count} geometries, "
            f"{report.failure_count} invalid lines"
        )
        return report

    def _decode_line(self, line: str) -> BaseGeometry | None:
        try:
            return self._decode(line.strip())
        except Exception:
            logger.debug(f"Invalid WKT line: {line!r}")
            return None
