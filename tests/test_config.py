"""
Tests for viewref.yaml loading.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.infrastructure import write
from viewref.config import DEFAULT_CONFIG, load_config
from viewref.errors import ConfigLoadError, ViewRefUserError


class TestLoadConfig:

    def test_defaults_without_file(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg is DEFAULT_CONFIG
        assert cfg.views_dir == "resources/views"
        assert cfg.components_root == "resources/views/components"
        assert cfg.template_ext == ".edge"
        assert cfg.controller_extensions == [".ts", ".js"]

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        write(tmp_path / "viewref.yaml", "")
        assert load_config(tmp_path) == DEFAULT_CONFIG

    def test_overrides_are_normalized(self, tmp_path: Path):
        write(
            tmp_path / "viewref.yaml",
            "views_dir: /views/\n"
            "template_ext: html\n"
            "controllers_dir: app\\controllers\n"
            "controller_extensions: [ts]\n"
            "max_workers: 2\n",
        )
        cfg = load_config(tmp_path)
        assert cfg.views_dir == "views"
        assert cfg.template_ext == ".html"
        assert cfg.controllers_dir == "app/controllers"
        assert cfg.controller_extensions == [".ts"]
        assert cfg.max_workers == 2

    def test_unknown_key_is_rejected(self, tmp_path: Path):
        write(tmp_path / "viewref.yaml", "view_dir: views\n")
        with pytest.raises(ConfigLoadError) as exc:
            load_config(tmp_path)
        assert "view_dir" in str(exc.value)
        assert "viewref.yaml" in str(exc.value)

    def test_non_mapping_is_rejected(self, tmp_path: Path):
        write(tmp_path / "viewref.yaml", "- a\n- b\n")
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_config(tmp_path)

    def test_invalid_yaml(self, tmp_path: Path):
        write(tmp_path / "viewref.yaml", "views_dir: [unclosed\n")
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path)

    def test_parent_segments_are_rejected(self, tmp_path: Path):
        write(tmp_path / "viewref.yaml", "views_dir: ../elsewhere\n")
        with pytest.raises(ConfigLoadError, match="views_dir"):
            load_config(tmp_path)

    def test_invalid_workers(self, tmp_path: Path):
        write(tmp_path / "viewref.yaml", "max_workers: 0\n")
        with pytest.raises(ConfigLoadError, match="max_workers"):
            load_config(tmp_path)

    def test_errors_are_user_facing(self, tmp_path: Path):
        write(tmp_path / "viewref.yaml", "42\n")
        with pytest.raises(ViewRefUserError):
            load_config(tmp_path)
