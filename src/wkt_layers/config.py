"""Configuration and fixed symbology constants for the WKT layer viewer.

Configuration can be overridden via:
1. Environment variables (e.g., WKT_VIEWER_PARSE_WORKERS=8, WKT_VIEWER_PORT=9000)
2. .env file in the current directory
3. Default values in code
"""

from dataclasses import dataclass

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class SymbologyConstants:
    """Fixed rendering and schema constants.

    These are NOT configurable: every feature collection is tagged with the
    same geographic reference system and every point style uses the same
    marker.
    """

    MARKER_SIZE: float = 1.0
    MARKER_ROTATION: float = 1.0

    CRS_WGS84: str = "EPSG:4326"
    FEATURE_TYPE_NAME: str = "WKT_to_geom"
    GEOMETRY_FIELD: str = "the_geom"


SYMBOLOGY = SymbologyConstants()

HEX_COLOR = r"^#?[0-9a-fA-F]{6}$"


class ViewerConfig(BaseSettings):
    """Runtime configuration for parsing and serving layers.

    Can be overridden via environment variables with WKT_VIEWER_ prefix:
    - WKT_VIEWER_SOURCE_EXTENSION
    - WKT_VIEWER_ENCODING
    - WKT_VIEWER_PARSE_WORKERS
    - WKT_VIEWER_DEFAULT_STROKE_COLOR / WKT_VIEWER_DEFAULT_FILL_COLOR
    - WKT_VIEWER_HOST / WKT_VIEWER_PORT / WKT_VIEWER_LOG_LEVEL
    """

    model_config = SettingsConfigDict(
        env_prefix="WKT_VIEWER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    source_extension: str = Field(
        default="txt", description="Required source file extension (exact, case-sensitive match)"
    )
    encoding: str = Field(default="utf-8", description="Text encoding of source files")
    parse_workers: int = Field(
        default=4, ge=1, description="Background threads available for file parsing"
    )

    default_stroke_color: str = Field(
        default="#000000", pattern=HEX_COLOR, description="Stroke color when none is chosen"
    )
    default_fill_color: str = Field(
        default="#808080", pattern=HEX_COLOR, description="Fill color when none is chosen"
    )

    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="HTTP port")
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("source_extension")
    @classmethod
    def strip_leading_dot(cls, v: str) -> str:
        if not v or not v.lstrip("."):
            msg = "source_extension cannot be empty"
            raise ValueError(msg)
        return v.lstrip(".")


DEFAULT_CONFIG = ViewerConfig()
