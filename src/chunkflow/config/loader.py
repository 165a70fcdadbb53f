from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from chunkflow.config.models import AppConfig


class ConfigError(ValueError):
    # Raised for invalid configuration (fail fast).
    pass


def load_yaml_config(path: Path) -> dict[str, object]:
    # Returns the raw mapping; validation happens in load_config.
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")
    return raw


def load_config(path: Path) -> AppConfig:
    raw = load_yaml_config(path)
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
