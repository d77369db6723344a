"""
Pydantic configuration schemas for mocklog.

Everything has a default; an empty YAML document is a valid config.

Example:
    original_format_key: "{OriginalFormat}"
    min_level: debug
    ring_buffer_size: 500
    diagnostics:
      current_level: warning
      active_tags: [mocklog.extract]
      echo: true

Usage:
    config = AdapterConfig.from_yaml("mocklog.yaml")
    adapter = MockableLoggerAdapter.from_config(sink, config)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from mocklog.formatted import ORIGINAL_FORMAT_KEY
from mocklog.records import LogLevel


def _coerce_level(value: Any) -> LogLevel:
    try:
        return LogLevel.from_value(value)
    except TypeError as exc:
        raise ValueError(str(exc)) from exc


class DiagnosticsConfig(BaseModel):
    current_level: LogLevel = LogLevel.WARNING
    active_tags: list[str] = Field(default_factory=list)
    ring_buffer_size: int = Field(default=1000, gt=0)
    echo: bool = False

    @field_validator("current_level", mode="before")
    @classmethod
    def resolve_level(cls, value: Any) -> LogLevel:
        return _coerce_level(value)


class AdapterConfig(BaseModel):
    """
    Adapter and recording-logger settings.

    min_level and ring_buffer_size apply to RecordingLogger; the
    diagnostics section is applied to the Diagnostics singleton by the
    from_config() constructors.
    """
    original_format_key: str = Field(default=ORIGINAL_FORMAT_KEY, min_length=1)
    min_level: LogLevel = LogLevel.TRACE
    ring_buffer_size: int = Field(default=10000, gt=0)
    diagnostics: DiagnosticsConfig = Field(default_factory=DiagnosticsConfig)
    source_yaml: Optional[str] = Field(default=None, exclude=True)

    @field_validator("min_level", mode="before")
    @classmethod
    def resolve_level(cls, value: Any) -> LogLevel:
        return _coerce_level(value)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AdapterConfig":
        """Load and validate from a YAML file."""
        path = Path(path)
        raw = path.read_text(encoding="utf-8")
        config = cls.from_dict(yaml.safe_load(raw))
        config.source_yaml = raw
        return config

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "AdapterConfig":
        """Load and validate from a YAML string."""
        config = cls.from_dict(yaml.safe_load(yaml_string))
        config.source_yaml = yaml_string
        return config

    @classmethod
    def from_dict(cls, data: dict | None) -> "AdapterConfig":
        """Load and validate from a dict. None (empty document) → defaults."""
        return cls.model_validate(data or {})

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
