"""
Configuration model for the converter.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .registry import MappingRegistry

logger = logging.getLogger("mythic-converter")

ENV_PREFIX = "MYTHIC_CONVERTER_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConverterConfig(BaseModel):
    """Settings for a conversion run.

    Values come from the environment (or a ``.env`` file) through
    ``from_env``; everything has a usable default.
    """

    mappings_path: Optional[Path] = Field(
        default=None,
        description="Mapping configuration file; the packaged defaults when unset"
    )
    default_slot: Optional[str] = Field(
        default=None,
        description="Overrides the mapping file's default-slot for unmapped item types"
    )
    max_concurrent: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Items translated at once by the concurrent batch runner"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level for the mythic-converter logger"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_env(cls) -> ConverterConfig:
        """Build a config from ``MYTHIC_CONVERTER_*`` variables, loading ``.env`` first."""
        if not load_dotenv():
            logger.debug(".env file not found, using process environment only")

        values: dict[str, object] = {}
        mappings = os.getenv(f"{ENV_PREFIX}MAPPINGS")
        if mappings:
            values["mappings_path"] = Path(mappings)
        default_slot = os.getenv(f"{ENV_PREFIX}DEFAULT_SLOT")
        if default_slot is not None:
            values["default_slot"] = default_slot
        max_concurrent = os.getenv(f"{ENV_PREFIX}MAX_CONCURRENT")
        if max_concurrent:
            values["max_concurrent"] = max_concurrent
        log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level

        return cls(**values)

    def load_registry(self) -> MappingRegistry:
        """Load the configured mapping file, or the packaged defaults.

        Raises:
            RegistryLoadError: If a configured mapping file cannot be read.
        """
        if self.mappings_path is not None:
            logger.info(f"Loading mappings from {self.mappings_path}")
            registry = MappingRegistry.from_yaml(self.mappings_path)
        else:
            registry = MappingRegistry.default()

        if self.default_slot is not None:
            registry = dataclasses.replace(registry, default_slot=self.default_slot)
        return registry

    def configure_logging(self) -> None:
        logging.basicConfig(level=self.log_level)
        logging.getLogger("mythic-converter").setLevel(self.log_level)
