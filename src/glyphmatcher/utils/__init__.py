"""Utility functions for glyphmatcher.

This module provides utility functions including:

- Logging setup and configuration
- Extraction statistics tracking
- A reader/writer lock for shared caches
"""

from glyphmatcher.utils.locking import ReadWriteLock
from glyphmatcher.utils.logging import (
    ExtractionLogger,
    ExtractionStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "ExtractionLogger",
    "ExtractionStats",
    "ReadWriteLock",
    "configure_logging",
    "get_logger",
]
