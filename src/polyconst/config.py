"""Generator configuration.

Settings come from ``POLYCONST_*`` environment variables, optionally
overridden by a YAML file passed on the command line.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import field_validator
from pydantic_settings import BaseSettings

from .registry import host_pointer_width

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from environment variables and an optional YAML file."""

    # Width of isize/usize, in bits
    pointer_width: int = host_pointer_width()

    # Generated code
    class_prefix: str = "PolymorphicConstant"
    numpy_alias: str = "np"

    # Logging
    log_level: str = "WARNING"

    @field_validator("pointer_width")
    @classmethod
    def _validate_pointer_width(cls, v: int) -> int:
        if v not in (32, 64):
            raise ValueError(f"pointer_width must be 32 or 64, got {v}")
        return v

    @field_validator("class_prefix", "numpy_alias")
    @classmethod
    def _validate_identifier(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"not a valid Python identifier: {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> Settings:
        """Load settings from a YAML mapping; keyword overrides win."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = yaml.safe_load(path.read_text())
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Expected YAML mapping at top level in {path}, got {type(data).__name__}")

        unknown = sorted(set(data) - set(cls.model_fields))
        if unknown:
            logger.warning("Ignoring unknown settings in %s: %s", path, ", ".join(unknown))
            data = {k: v for k, v in data.items() if k in cls.model_fields}

        logger.debug("Loaded settings from %s", path)
        return cls(**{**data, **overrides})

    model_config = {
        "env_prefix": "POLYCONST_",
        "extra": "ignore",
    }
