from __future__ import annotations

import logging
from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PATTERN = "*.py"
DEFAULT_FILENAME = "docs.gen"


class OutputFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    HTML = "html"


class DocsConfig(BaseSettings):
    """Generator settings; every field can be overridden with DOCSGEN_<NAME>."""

    model_config = SettingsConfigDict(env_prefix="DOCSGEN_", extra="ignore")

    pattern: str = DEFAULT_PATTERN
    output: OutputFormat = OutputFormat.JSON
    filename: str = DEFAULT_FILENAME
    log_level: str = "INFO"

    # empty values keep the defaults
    @field_validator("pattern", mode="before")
    @classmethod
    def _default_pattern(cls, v):
        return v or DEFAULT_PATTERN

    @field_validator("filename", mode="before")
    @classmethod
    def _default_filename(cls, v):
        return v or DEFAULT_FILENAME

    @field_validator("output", mode="before")
    @classmethod
    def _default_output(cls, v):
        if isinstance(v, str):
            return v.strip().lower() or OutputFormat.JSON
        return v or OutputFormat.JSON

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        # getLevelName maps known names to their int value
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v!r}")
        return level
