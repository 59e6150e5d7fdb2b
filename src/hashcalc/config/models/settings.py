"""hashcalc Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from hashcalc.config.models.hashing_settings import HashingSettings
from hashcalc.config.models.logging_settings import LoggingSettings
from hashcalc.config.models.output_settings import OutputSettings
from hashcalc.config.models.pipeline_settings import PipelineSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Values come from (highest priority first) constructor arguments,
    ``HASHCALC_*`` environment variables and defaults. Nested values use
    ``__`` as delimiter, e.g. ``HASHCALC_PIPELINE__NUM_WORKERS=4``.
    """

    model_config = SettingsConfigDict(
        env_prefix="HASHCALC_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    hashing: HashingSettings = Field(default_factory=HashingSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from TOML file with environment variable overrides.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        logger.debug("Loaded configuration from %s", file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(exclude_none=True)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
