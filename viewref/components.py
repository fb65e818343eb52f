"""
Component index: reusable templates discoverable by their path.

Names follow Edge's components-as-tags convention:

    components/card.edge            -> card
    components/form/input.edge      -> form.input
    components/modal/index.edge     -> modal
    components/_partials/row.edge   -> partials.row
    components/user_avatar.edge     -> userAvatar
    components/MyCard.edge          -> MyCard
"""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional, Sequence

from .project import Project
from .types import ComponentEntry, DottedName

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[-_]+")


def _camelize(segment: str) -> str:
    words = [w for w in _SEPARATORS.split(segment) if w]
    if len(words) <= 1:
        return words[0] if words else ""
    return words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])


def component_name(rel_path: str, template_ext: str = ".edge") -> Optional[DottedName]:
    """
    Dotted component name for a path relative to the components directory.

    Returns None when nothing is left after normalization.
    """
    rel = rel_path.replace("\\", "/")
    if rel.lower().endswith(template_ext.lower()):
        rel = rel[: -len(template_ext)]

    segments = [s for s in PurePosixPath(rel).parts if s not in ("", ".", "/")]
    if len(segments) > 1 and segments[-1] == "index":
        segments = segments[:-1]

    names = [_camelize(s.lstrip("_")) for s in segments]
    names = [n for n in names if n]
    if not names:
        return None
    return DottedName(".".join(names))


def build_index(project: Project) -> List[ComponentEntry]:
    """
    Enumerate components under <views_dir>/<components_dir>.

    Entries come in directory-scan order. Names may repeat across the tree;
    lookups take the first entry (see find_component). Returns [] when the
    directory is missing or unreadable.
    """
    cfg = project.config
    base = cfg.components_root
    try:
        rel_files = project.search(f"**/*{cfg.template_ext}", base=base)
        base_dir = project.find_dir(base)
    except OSError as e:
        logger.debug("Component scan failed under %s: %s", base, e)
        return []
    if base_dir is None:
        return []

    entries: List[ComponentEntry] = []
    for rel in rel_files:
        path = project.root / rel
        name = component_name(path.relative_to(base_dir).as_posix(), cfg.template_ext)
        if name is None:
            continue
        entries.append(ComponentEntry(name=name, path=path))

    logger.debug("Indexed %d component(s) under %s", len(entries), base_dir)
    return entries


def find_component(entries: Sequence[ComponentEntry], name: str) -> Optional[ComponentEntry]:
    """Exact-name lookup; the first entry in scan order wins."""
    return next((e for e in entries if e.name == name), None)


class ComponentIndexCache:
    """
    One component index per project root, kept for an editor session.

    No invalidation is needed for correctness: a stale index only means
    missed or extra links and completions.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, List[ComponentEntry]] = {}

    def get(self, project: Project) -> List[ComponentEntry]:
        key = str(project.root)
        if key not in self._entries:
            self._entries[key] = build_index(project)
        return self._entries[key]

    def invalidate(self, root=None) -> None:
        if root is None:
            self._entries.clear()
        else:
            self._entries.pop(str(Path(root).resolve()), None)


__all__ = ["component_name", "build_index", "find_component", "ComponentIndexCache"]
