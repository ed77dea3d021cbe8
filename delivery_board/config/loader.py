from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..services.normalizer import DEFAULT_DATE_FIELDS

"""Config loader for the delivery board.

Responsibilities:
- Load YAML config/board.yml
- Validate against schema.json (next to this module)
- Apply defaults for optional keys
- Apply environment overrides (REPORT_API_URL)
"""

SCHEMA_PATH = Path(__file__).parent / "schema.json"
DEFAULT_CONFIG_PATH = Path("config/board.yml")

REPORT_URL_ENV = "REPORT_API_URL"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class BoardConfig:
    report_url: str | None = None  # None -> bundled sample report
    timeout_seconds: float = 30
    max_item_slots: int = 5
    date_fields: tuple[str, ...] = DEFAULT_DATE_FIELDS
    sort_field: str = "DueDate"
    error_log_dir: str = "./logs"

    @property
    def uses_sample_data(self) -> bool:
        return not self.report_url


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: if the schema file is missing or not valid JSON, or the
            config data fails validation (unknown keys, wrong types, ...)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> BoardConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    defaults = BoardConfig()
    return BoardConfig(
        report_url=data.get("report_url"),
        timeout_seconds=data.get("timeout_seconds", defaults.timeout_seconds),
        max_item_slots=data.get("max_item_slots", defaults.max_item_slots),
        date_fields=tuple(data.get("date_fields", defaults.date_fields)),
        sort_field=data.get("sort_field", defaults.sort_field),
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
    )


def apply_env_overrides(cfg: BoardConfig) -> BoardConfig:
    """Environment (typically loaded from .env) takes precedence over the file."""
    url = os.getenv(REPORT_URL_ENV)
    if url and url.strip():
        return replace(cfg, report_url=url.strip())
    return cfg
