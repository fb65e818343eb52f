"""
Template naming: dotted view identifiers <-> files under the views directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .project import Project
from .types import DottedName


def template_candidate(identifier: str) -> str:
    """
    Logical path for a view identifier: quotes stripped, dots become slashes.

        'users.show'  -> users/show
        "layouts/app" -> layouts/app
    """
    return identifier.replace('"', "").replace("'", "").strip().replace(".", "/")


def find_template(project: Project, identifier: str) -> Optional[Path]:
    """
    Existing template file for a view identifier, matched case-insensitively.

    Raises:
        OSError: the views directory cannot be listed
    """
    candidate = template_candidate(identifier)
    if not candidate:
        return None
    cfg = project.config
    rel = f"{cfg.views_dir}/{candidate}{cfg.template_ext}" if cfg.views_dir else f"{candidate}{cfg.template_ext}"
    return project.find_file(rel)


def dotted_name(view_rel: str, template_ext: str) -> DottedName:
    """Path relative to the views directory -> dotted view name."""
    if view_rel.lower().endswith(template_ext.lower()):
        view_rel = view_rel[: -len(template_ext)]
    return DottedName(view_rel.replace("\\", "/").replace("/", "."))


def list_templates(project: Project) -> List[DottedName]:
    """
    Dotted names of every template under the views directory, in scan order.

    Raises:
        OSError: the views directory cannot be listed
    """
    cfg = project.config
    views_dir = project.find_dir(cfg.views_dir)
    if views_dir is None:
        return []
    names: List[DottedName] = []
    for rel in project.search(f"**/*{cfg.template_ext}", base=cfg.views_dir):
        view_rel = (project.root / rel).relative_to(views_dir).as_posix()
        names.append(dotted_name(view_rel, cfg.template_ext))
    return names


__all__ = ["template_candidate", "find_template", "dotted_name", "list_templates"]
