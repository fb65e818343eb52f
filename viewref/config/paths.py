"""
Single source of truth for configuration file location.
"""

from __future__ import annotations

from pathlib import Path

CONFIG_FILE = "viewref.yaml"


def config_path(root: Path) -> Path:
    """Absolute path to viewref.yaml (may not exist)."""
    return (root / CONFIG_FILE).resolve()


__all__ = ["CONFIG_FILE", "config_path"]
