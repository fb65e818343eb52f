"""
Shared test infrastructure: file helpers, project builders, CLI runner.
"""

from .file_utils import write
from .project_builders import EdgeProjectBuilder, build_edge_project
from .cli_utils import run_cli, jload

__all__ = ["write", "EdgeProjectBuilder", "build_edge_project", "run_cli", "jload"]
