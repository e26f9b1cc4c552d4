"""YAML configuration file loader."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError
from ruamel.yaml import YAML

from subnet_groups.config.schema import Config
from subnet_groups.errors import SubnetGroupError

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised for configuration loading / validation errors."""


# Field name → environment variable.
_STORE_ENV_MAP: dict[str, str] = {
    "path": "SUBNET_GROUPS_STORE_PATH",
}


def _resolve_store(raw_store: dict[str, Any] | None, config_dir: Path) -> dict[str, Any]:
    """Resolve store fields from YAML, env vars, and ``.env`` file.

    Priority (highest wins): YAML value > env var > ``.env`` file.
    """
    if raw_store is None:
        raw_store = {}
    if not isinstance(raw_store, dict):
        raise ConfigError(f"'store' must be a mapping, got {type(raw_store).__name__}")

    env_file = config_dir / ".env"
    dotenv_vals = dotenv_values(env_file, encoding="utf-8-sig") if env_file.is_file() else {}

    resolved: dict[str, Any] = dict(raw_store)
    for field, env_key in _STORE_ENV_MAP.items():
        val = raw_store.get(field)
        if val is None:
            val = os.environ.get(env_key)
        if val is None:
            val = dotenv_vals.get(env_key)
        if val is not None:
            resolved[field] = val
    return resolved


def load_config(path: Path | str) -> Config:
    """Load a YAML configuration file and return a ``Config`` object.

    Raises:
        ConfigError: On YAML parse errors, missing sections, or validation failures.
    """
    path = Path(path)

    try:
        raw = YAML(typ="safe").load(path)
    except Exception as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")

    try:
        raw["store"] = _resolve_store(raw.get("store"), path.parent)
        config = Config.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    config.config_dir = path.parent

    try:
        config.network()
    except SubnetGroupError as exc:
        raise ConfigError(str(exc)) from exc

    logger.info(
        "Loaded config from %s (vpc %s, %d subnet group(s))",
        path,
        config.vpc.name,
        len(config.vpc.subnets),
    )
    return config
