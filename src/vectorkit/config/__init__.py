"""Configuration management for vectorkit.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Numeric tolerances for arcs, bounds and resizing
- FittingConfig: Freehand stroke fitting settings
- BooleanConfig: Boolean operation settings
- LoggingConfig: Logging settings
- VectorKitSettings: Main application settings
"""

from vectorkit.config.settings import (
    Alignment,
    Axis,
    BooleanConfig,
    BooleanOperation,
    DistributeMode,
    FittingConfig,
    GeometryConfig,
    LoggingConfig,
    ResizeHandle,
    VectorKitSettings,
    get_default_settings,
)

__all__ = [
    "Alignment",
    "Axis",
    "BooleanConfig",
    "BooleanOperation",
    "DistributeMode",
    "FittingConfig",
    "GeometryConfig",
    "LoggingConfig",
    "ResizeHandle",
    "VectorKitSettings",
    "get_default_settings",
]
