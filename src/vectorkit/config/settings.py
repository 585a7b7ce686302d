"""Configuration settings for vectorkit."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class BooleanOperation(str, Enum):
    """Boolean operation applied to a set of shape outlines."""

    UNITE = "unite"
    SUBTRACT = "subtract"
    INTERSECT = "intersect"
    EXCLUDE = "exclude"
    TRIM = "trim"


class Alignment(str, Enum):
    """Alignment target for multi-shape alignment."""

    LEFT = "left"
    RIGHT = "right"
    H_CENTER = "h-center"
    TOP = "top"
    BOTTOM = "bottom"
    V_CENTER = "v-center"


class DistributeMode(str, Enum):
    """Whether distribution spacing is measured between edges or centers."""

    EDGES = "edges"
    CENTERS = "centers"


class Axis(str, Enum):
    """Layout or mirroring axis."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ResizeHandle(str, Enum):
    """One of the eight compass handles of a selection box."""

    TOP_LEFT = "top-left"
    TOP = "top"
    TOP_RIGHT = "top-right"
    RIGHT = "right"
    BOTTOM_RIGHT = "bottom-right"
    BOTTOM = "bottom"
    BOTTOM_LEFT = "bottom-left"
    LEFT = "left"


class GeometryConfig(BaseModel):
    """Numeric tolerances and constants for the geometry kernel."""

    collinear_epsilon: float = Field(
        default=1e-8,
        gt=0.0,
        description="Determinant magnitude below which three points count as collinear",
    )
    max_arc_radius: float = Field(
        default=1_000_000.0,
        gt=0.0,
        description="Circumradius above which an arc is treated as a straight segment",
    )
    ellipse_kappa: float = Field(
        default=0.5522847498,
        gt=0.0,
        lt=1.0,
        description="Handle length ratio for the four-arc circle approximation",
    )
    arc_sample_steps: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Number of steps used when sampling an arc",
    )
    bbox_samples_per_segment: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Samples per cubic segment when measuring path bounds",
    )
    zero_epsilon: float = Field(
        default=1e-6,
        gt=0.0,
        description="Box dimension below which a resize treats the box as degenerate",
    )


class FittingConfig(BaseModel):
    """Configuration for freehand stroke fitting."""

    freehand_tolerance_factor: float = Field(
        default=1.5,
        gt=0.0,
        le=20.0,
        description="Simplification tolerance as a multiple of the stroke width",
    )
    handle_divisor: float = Field(
        default=6.0,
        gt=0.0,
        description="Divisor applied to neighbour deltas when deriving smooth handles",
    )


class BooleanConfig(BaseModel):
    """Configuration for boolean operations."""

    flatten_tolerance: float = Field(
        default=0.25,
        ge=0.001,
        le=10.0,
        description="Maximum deviation when flattening bezier segments for clipping",
    )
    repair_invalid: bool = Field(
        default=True,
        description="Repair self-intersecting outlines before clipping",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class VectorKitSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    fitting: FittingConfig = Field(default_factory=FittingConfig)
    boolean: BooleanConfig = Field(default_factory=BooleanConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> VectorKitSettings:
    """Get default application settings."""
    return VectorKitSettings()
