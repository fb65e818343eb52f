from pathlib import Path

import pytest

from tests.infrastructure import build_edge_project
from viewref.project import Project


@pytest.fixture
def edge_root(tmp_path: Path) -> Path:
    """Standard AdonisJS-like project tree (see build_edge_project)."""
    return build_edge_project(tmp_path)


@pytest.fixture
def project(edge_root: Path) -> Project:
    return Project.load(edge_root)
