"""hashcalc Configuration Module

This module provides unified access to configuration models and settings
management:
- Settings: Main configuration facade
- Loader functions: get_config, load_settings, reload_config, reset_config
- Domain models: Pipeline, Hashing, Output and Logging settings
"""

from __future__ import annotations

from .loader import (
    get_config,
    load_settings,
    reload_config,
    reset_config,
)
from .models import (
    HashingSettings,
    LoggingSettings,
    OutputSettings,
    PipelineSettings,
    Settings,
)

__all__ = [
    "HashingSettings",
    "LoggingSettings",
    "OutputSettings",
    "PipelineSettings",
    "Settings",
    "get_config",
    "load_settings",
    "reload_config",
    "reset_config",
]
