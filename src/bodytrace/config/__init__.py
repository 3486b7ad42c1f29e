"""Configuration management for bodytrace.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- MaskConfig: Mask normalization settings
- TraceConfig: Boundary tracing settings
- SimplifyConfig: Contour simplification settings
- DedupConfig: Contour deduplication settings
- PathConfig: Path synthesis settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- BodytraceSettings: Main application settings
"""

from bodytrace.config.settings import (
    BodytraceSettings,
    CurveType,
    DedupConfig,
    LoggingConfig,
    MaskConfig,
    PathConfig,
    ProcessingConfig,
    SimplifyConfig,
    SingletonPolicy,
    TraceConfig,
    get_default_settings,
)

__all__ = [
    "BodytraceSettings",
    "CurveType",
    "DedupConfig",
    "LoggingConfig",
    "MaskConfig",
    "PathConfig",
    "ProcessingConfig",
    "SimplifyConfig",
    "SingletonPolicy",
    "TraceConfig",
    "get_default_settings",
]
