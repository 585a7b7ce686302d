"""Utility functions for vectorkit.

This module provides utility functions including:

- Logging setup and configuration
- Operation statistics for the CLI
"""

from vectorkit.utils.logging import (
    OperationLogger,
    OperationStats,
    configure_logging,
)

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
]
