"""
hashcalc Constants Module

This module provides centralized constants for hashcalc. All magic values
and configuration defaults are defined here.
"""

from .cli import APPLICATION_VERSION, CLICommands, CLIDefaults, CLIHelp, CLIOptions
from .system import BASE_FILE_SIZE, Hashing, Pipeline, ProcessingConfig, Timeout

__all__ = [
    "APPLICATION_VERSION",
    "BASE_FILE_SIZE",
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "CLIOptions",
    "Hashing",
    "Pipeline",
    "ProcessingConfig",
    "Timeout",
]
