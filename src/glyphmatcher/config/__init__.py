"""Configuration management for glyphmatcher.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- DatabaseConfig: Shape database location and reference corpus settings
- ReportConfig: Diagnostic report rendering settings
- LoggingConfig: Logging settings
- GlyphMatcherSettings: Main application settings
"""

from glyphmatcher.config.settings import (
    DatabaseConfig,
    GlyphMatcherSettings,
    LoggingConfig,
    ReportConfig,
    get_default_settings,
)

__all__ = [
    "DatabaseConfig",
    "GlyphMatcherSettings",
    "LoggingConfig",
    "ReportConfig",
    "get_default_settings",
]
