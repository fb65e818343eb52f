"""
Controller modules under the conventional controllers directory.

A route handler 'Admin/UsersController.index' names the module
'Admin/UsersController' (path relative to controllers_dir, extension
omitted) and the method 'index'.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from ..project import Project

# Declarations and tests live next to controllers but are not routable
_NOT_CONTROLLER = re.compile(r"(\.d\.ts$)|(\.(spec|test)\.[a-z]+$)", re.IGNORECASE)


def is_controller_file(rel_path: str, extensions) -> bool:
    name = rel_path.rsplit("/", 1)[-1]
    if name.startswith("_") or _NOT_CONTROLLER.search(name):
        return False
    return any(name.lower().endswith(ext.lower()) for ext in extensions)


def _strip_ext(rel_path: str, extensions) -> str:
    for ext in extensions:
        if rel_path.lower().endswith(ext.lower()):
            return rel_path[: -len(ext)]
    return rel_path


def find_controller(project: Project, module: str) -> Optional[Path]:
    """
    Controller file for a handler module, trying each configured extension in order.

    Raises:
        OSError: the controllers directory cannot be listed
    """
    module = module.strip().strip("/")
    if not module:
        return None
    cfg = project.config
    for ext in cfg.controller_extensions:
        found = project.find_file(f"{cfg.controllers_dir}/{module}{ext}")
        if found is not None and is_controller_file(found.name, cfg.controller_extensions):
            return found
    return None


def list_controller_modules(project: Project) -> List[str]:
    """
    Module names ('UsersController', 'Admin/PostsController') in scan order.

    Raises:
        OSError: the controllers directory cannot be listed
    """
    cfg = project.config
    base = project.find_dir(cfg.controllers_dir)
    if base is None:
        return []

    modules: List[str] = []
    seen = set()
    for rel in project.search("**/*", base=cfg.controllers_dir):
        mod_rel = (project.root / rel).relative_to(base).as_posix()
        if not is_controller_file(mod_rel, cfg.controller_extensions):
            continue
        module = _strip_ext(mod_rel, cfg.controller_extensions)
        # UsersController.ts and UsersController.js are one module
        if module not in seen:
            seen.add(module)
            modules.append(module)
    return modules


__all__ = ["is_controller_file", "find_controller", "list_controller_modules"]
