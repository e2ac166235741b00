"""Configuration and secrets providers.

Both documents are JSON files read once at process start. The config carries
the greeting prefix; secrets are loaded so a broken secrets mount fails early,
but nothing reads their contents.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from .logging_conf import get_logger

__all__ = [
    "DEFAULT_CONFIGS_PATH",
    "DEFAULT_SECRETS_PATH",
    "AppConfig",
    "Secrets",
    "ConfigError",
    "load_config",
    "load_secrets",
]

DEFAULT_CONFIGS_PATH = "configs.json"
DEFAULT_SECRETS_PATH = "secrets.json"

logger = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when a config or secrets document cannot be loaded."""


class AppConfig(BaseModel):
    """Immutable values read from configs.json."""

    model_config = ConfigDict(frozen=True)

    prefix: StrictStr


class Secrets(BaseModel):
    """Opaque secrets document; any keys are accepted and kept as-is."""

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def names(self) -> list[str]:
        return sorted(self.model_extra or {})


def _resolve(path: str | os.PathLike[str] | None, env_var: str, default: str) -> Path:
    if path is None:
        path = os.getenv(env_var) or default
    return Path(path)


def _read_json(path: Path) -> Any:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot open '{path}': {e}") from e
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"cannot unmarshal '{path}': {e}") from e


def load_config(path: str | os.PathLike[str] | None = None) -> AppConfig:
    """Load configs.json (or $CONFIGS_PATH) into an AppConfig."""
    p = _resolve(path, "CONFIGS_PATH", DEFAULT_CONFIGS_PATH)
    data = _read_json(p)
    if not isinstance(data, dict):
        raise ConfigError(f"'{p}' must contain a JSON object")
    try:
        config = AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config in '{p}': {e}") from e
    logger.info("config.loaded", extra={"event": "config_loaded", "config_path": str(p)})
    return config


def load_secrets(path: str | os.PathLike[str] | None = None) -> Secrets:
    """Load secrets.json (or $SECRETS_PATH).

    A missing file yields empty secrets; an unreadable or malformed one is a
    ConfigError.
    """
    p = _resolve(path, "SECRETS_PATH", DEFAULT_SECRETS_PATH)
    if not p.exists():
        logger.warning("secrets.missing", extra={"event": "secrets_missing", "secrets_path": str(p)})
        return Secrets()
    data = _read_json(p)
    if not isinstance(data, dict):
        raise ConfigError(f"'{p}' must contain a JSON object")
    secrets = Secrets.model_validate(data)
    # Key names only, never values.
    logger.info(
        "secrets.loaded",
        extra={"event": "secrets_loaded", "secrets_path": str(p), "count": len(secrets.names)},
    )
    return secrets
