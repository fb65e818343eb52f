"""
Hover previews for resolved references.
"""

from __future__ import annotations

import logging
from itertools import islice
from typing import Optional, Sequence, Union

from .linking import document_links
from .positions import offset_to_point
from .project import Project
from .types import ComponentEntry, HoverInfo, RelPath, ResolvedLink, SourceKind

logger = logging.getLogger(__name__)


def resolve_hover(
    file_text: str,
    cursor_offset: int,
    source_kind: Union[SourceKind, str],
    project: Project,
    *,
    components: Optional[Sequence[ComponentEntry]] = None,
) -> Optional[HoverInfo]:
    """
    Hover for the link under the cursor.

    Link spans come from the position mapper, so a hover follows the same
    first-occurrence placement as the document links.

    Returns:
        HoverInfo with the first lines of the target file, or None
    """
    try:
        line, col = offset_to_point(file_text, cursor_offset)
        link = next(
            (lk for lk in document_links(file_text, source_kind, project, components=components)
             if lk.position.contains(line, col)),
            None,
        )
        if link is None:
            return None
        return HoverInfo(
            link=link,
            relative_path=RelPath(project.rel(link.target_path)),
            preview=_preview(link, project.config.hover_preview_lines),
        )
    except (OSError, ValueError) as e:
        logger.debug("Hover failed in %s: %s", project, e)
        return None


def _preview(link: ResolvedLink, max_lines: int) -> str:
    start = link.target_line or 0
    with open(link.target_path, encoding="utf-8", errors="replace") as f:
        lines = list(islice(f, start, start + max_lines))
    return "".join(lines).rstrip("\n")


__all__ = ["resolve_hover"]
