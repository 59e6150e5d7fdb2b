"""
CLI Configuration Constants

This module contains all constants related to command-line interface
configuration, default values, and help texts.
"""

from __future__ import annotations

from typing import Literal

APPLICATION_VERSION = "1.0.0"


class CLICommands:
    """Command names."""

    HASH = "hash"
    ALGORITHMS = "algorithms"


class CLIDefaults:
    """CLI default values."""

    VERSION = APPLICATION_VERSION
    DEFAULT_PATH = "."

    # Exit codes
    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INTERRUPTED = 130


class CLIOptions:
    """Option flag names."""

    FILE_PATTERN = "--file-pattern"
    FILE_PATTERN_SHORT = "-p"
    HASH = "--hash"
    HASH_SHORT = "-a"
    OUT_FILE = "--out-file"
    OUT_FILE_SHORT = "-o"
    RENAME = "--rename"
    DISPLAY = "--display/--no-display"
    WORKERS = "--workers"
    WORKERS_SHORT = "-w"
    TABLE = "--table"
    STATS = "--stats"
    CONFIG = "--config"
    CONFIG_SHORT = "-c"


class CLIHelp:
    """CLI help text and descriptions."""

    VERSION_HELP = "Display version information and exit."
    VERSION_TEXT = "Hash MT Generator - Version: {version}"

    APP_NAME = "hashcalc"
    APP_DESCRIPTION = "hashcalc - concurrent file hashing (MD5, SHA1, SHA256, XXHASH64, BLAKE3)"
    APP_STYLE: Literal["rich"] = "rich"

    HASH_PATH_HELP = "Directory to search."
    FILE_PATTERN_HELP = "File pattern to search (glob matched against file names)."
    HASH_TYPE_HELP = "Hash type: {algorithms}."
    OUT_FILE_HELP = "File to store the results."
    RENAME_HELP = "Rename files to their hash value."
    DISPLAY_HELP = "Display hash values to the user."
    WORKERS_HELP = "Number of worker threads (default: number of CPUs)."
    TABLE_HELP = "Display results as a table."
    STATS_HELP = "Print pipeline statistics when done."
    CONFIG_HELP = "TOML configuration file."
    ALGORITHMS_HELP = "List supported hash algorithms."


__all__ = ["APPLICATION_VERSION", "CLICommands", "CLIDefaults", "CLIHelp", "CLIOptions"]
