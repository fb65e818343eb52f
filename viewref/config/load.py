"""
Loader for viewref.yaml.

The file is optional; a missing file means default conventions.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import ProjectConfig, DEFAULT_CONFIG
from .paths import config_path
from ..errors import ConfigLoadError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Read a YAML file and return its top-level mapping."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8"))
    except (OSError, YAMLError) as e:
        raise ConfigLoadError(f"cannot read YAML: {e}", path) from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigLoadError("YAML must be a mapping", path)
    return raw


def _format_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def load_config(root: Path) -> ProjectConfig:
    """
    Load project conventions from <root>/viewref.yaml.

    Args:
        root: Project root path

    Returns:
        Validated configuration (defaults when the file is absent)

    Raises:
        ConfigLoadError: The file exists but is not a valid configuration
    """
    path = config_path(root)
    if not path.is_file():
        return DEFAULT_CONFIG

    raw = _read_yaml_map(path)
    try:
        cfg = ProjectConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigLoadError(_format_validation_error(e), path) from e

    logger.debug("Loaded %s: %s", path, cfg)
    return cfg


__all__ = ["load_config"]
