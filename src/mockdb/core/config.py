# src/mockdb/core/config.py
"""Construction-time configuration for MockEngine.

EngineSettings is a frozen Pydantic model. Program values, the extension
and the log buffer are held by identity: callables, exception classes and
a caller-owned list must reach the engine untouched, so they are never
copied or coerced here. Programs are validated lazily by the engine, not
by this model.

Settings can be layered from YAML (data programs only) with
load_settings(). Precedence: overrides > config file > defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, InstanceOf


class EngineSettings(BaseModel):
    """Options recognized by MockEngine."""

    model_config = {"frozen": True, "extra": "forbid"}

    host: str | None = Field(
        default=None,
        description="Host tag appended to every logged query as ' -- <host>'",
    )
    servers: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Per-shard connection option overrides, keyed by shard",
    )
    identifier_program: Any = Field(
        default=None,
        description="Program for generated identifiers returned by inserts",
    )
    fetch_program: Any = Field(
        default=None,
        description="Program for row-records yielded by select queries",
    )
    rowcount_program: Any = Field(
        default=None,
        description="Program for affected-row counts returned by updates/deletes",
    )
    extension: Any = Field(
        default=None,
        description="pluggy extension object (or list of them) registered with the engine",
    )
    log_buffer: InstanceOf[list] | None = Field(  # type: ignore[type-arg]
        default=None,
        description="Caller-owned list used as the execution log backing store",
    )

    def connection_options(self) -> dict[str, Any]:
        """Global connection options shared by every shard."""
        return {"host": self.host} if self.host is not None else {}

    def with_overrides(self, **overrides: Any) -> EngineSettings:
        """Return validated settings with the given fields replaced."""
        current = {name: getattr(self, name) for name in type(self).model_fields}
        current.update(overrides)
        return type(self)(**current)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge two dicts recursively; override wins. Inputs are not mutated."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(
    config_file: Path | None = None,
    *,
    overrides: dict[str, Any] | None = None,
) -> EngineSettings:
    """Load engine settings from an optional YAML file and overrides.

    Args:
        config_file: YAML mapping of EngineSettings fields.
        overrides: Values taking precedence over the file.

    Raises:
        FileNotFoundError: If config_file does not exist.
        ValueError: If the YAML document is not a mapping.
        pydantic.ValidationError: If the merged settings are invalid.
    """
    config_dict: dict[str, Any] = {}

    if config_file is not None:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        with config_file.open() as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file {config_file} must be a YAML mapping, got {type(loaded).__name__}")
        config_dict = loaded

    if overrides is not None:
        config_dict = deep_merge(config_dict, overrides)

    return EngineSettings(**config_dict)
