"""Configuration models package."""

from __future__ import annotations

from .hashing_settings import HashingSettings
from .logging_settings import LoggingSettings
from .output_settings import OutputSettings
from .pipeline_settings import PipelineSettings
from .settings import Settings

__all__ = [
    "HashingSettings",
    "LoggingSettings",
    "OutputSettings",
    "PipelineSettings",
    "Settings",
]
