from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..db.schema import DEFAULT_TABLE_NAME
from ..sheets.fetcher import DEFAULT_EXPORT_URL

"""Config loader.

Responsibilities:
- Load an optional YAML file (default ``config/convert.yml``)
- Validate it against the bundled ``config_schema.json``
- Apply defaults for missing keys
- Apply ``SHEETDB_*`` environment overrides (the CLI loads ``.env`` first)
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "ConvertConfig",
    "apply_env_overrides",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/convert.yml")

ENV_TABLE_NAME = "SHEETDB_TABLE_NAME"
ENV_EXPORT_URL = "SHEETDB_EXPORT_URL"
ENV_TIMEOUT = "SHEETDB_TIMEOUT"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ConvertConfig:
    table_name: str = DEFAULT_TABLE_NAME
    export_url: str = DEFAULT_EXPORT_URL  # must contain {sheet_id}
    timeout: float | None = None  # None = transport default
    logs_directory: str = "logs"


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is unreadable or the data violates it.
    """
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"invalid schema file: {e}") from e

    try:
        jsonschema.validate(data, schema)
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _from_mapping(data: Mapping[str, Any]) -> ConvertConfig:
    _validate_config_schema(dict(data))
    defaults = ConvertConfig()
    return ConvertConfig(
        table_name=data.get("table_name", defaults.table_name),
        export_url=data.get("export_url", defaults.export_url),
        timeout=data.get("timeout", defaults.timeout),
        logs_directory=data.get("logs_directory", defaults.logs_directory),
    )


def load_config(path: Path | None = None, *, required: bool = True) -> ConvertConfig:
    """Load and validate a config file.

    When ``required`` is False a missing file yields the defaults; this is how
    the CLI treats the implicit ``config/convert.yml``.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return ConvertConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: top level must be a mapping, got {type(data).__name__}")
    return _from_mapping(data)


def apply_env_overrides(config: ConvertConfig, environ: Mapping[str, str] | None = None) -> ConvertConfig:
    """Return ``config`` with ``SHEETDB_*`` environment values applied and re-validated."""
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    if env.get(ENV_TABLE_NAME):
        overrides["table_name"] = env[ENV_TABLE_NAME]
    if env.get(ENV_EXPORT_URL):
        overrides["export_url"] = env[ENV_EXPORT_URL]
    if env.get(ENV_TIMEOUT):
        try:
            overrides["timeout"] = float(env[ENV_TIMEOUT])
        except ValueError as e:
            raise ConfigError(f"{ENV_TIMEOUT} must be a number: {env[ENV_TIMEOUT]!r}") from e
    if not overrides:
        return config
    merged = replace(config, **overrides)
    _validate_config_schema(
        {
            "table_name": merged.table_name,
            "export_url": merged.export_url,
            "timeout": merged.timeout,
            "logs_directory": merged.logs_directory,
        }
    )
    return merged
