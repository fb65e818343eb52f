"""
Completion resolver: candidate identifiers for a reference being typed.

The cursor must sit inside the identifier of an in-progress pattern match
(between the opening quote and the end of what was typed). Outside of such
a span no completions are offered.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Union

from .controllers import find_controller, list_controller_methods, list_controller_modules
from .patterns import ROUTE_HANDLER_PARTIAL, iter_references, patterns_for
from .project import Project
from .types import Reference, SourceKind
from .views import list_templates

logger = logging.getLogger(__name__)


def resolve_completions(
    file_text: str,
    cursor_offset: int,
    source_kind: Union[SourceKind, str],
    project: Project,
) -> List[str]:
    """
    Ranked candidate identifiers for the fragment under the cursor.

    - view fragment (@include('…, view.render('…): dotted template names
      starting with the typed prefix
    - route handler module ('Users…): controller modules starting with the prefix
    - route handler method ('UsersController.…): public methods of that controller

    Returns:
        Candidates, prefix-case-exact matches first; [] outside a fragment
        or on any failure
    """
    try:
        kind = SourceKind.coerce(source_kind)
        for pattern in patterns_for(kind, complete=False):
            for ref in iter_references(pattern, file_text):
                start, end = ref.match_span
                if not (start <= cursor_offset <= end):
                    continue
                if pattern is ROUTE_HANDLER_PARTIAL:
                    return _route_candidates(ref, cursor_offset, project)
                prefix = ref.raw_text[: cursor_offset - start]
                return _rank(list_templates(project), prefix.replace("/", "."))
        return []
    except (OSError, ValueError) as e:
        logger.warning("Completion failed in %s: %s", project, e)
        return []


def _route_candidates(ref: Reference, cursor_offset: int, project: Project) -> List[str]:
    start, _ = ref.match_span
    module = ref.raw_text.split(".", 1)[0]
    module_end = start + len(module)

    if ref.method is None or cursor_offset <= module_end:
        return _rank(list_controller_modules(project), module[: cursor_offset - start])

    controller = find_controller(project, module)
    if controller is None:
        return []
    prefix = ref.method[: cursor_offset - module_end - 1]
    return _rank([m.name for m in list_controller_methods(controller)], prefix)


def _rank(candidates: Iterable[str], prefix: str) -> List[str]:
    """
    Case-insensitive prefix filter. Candidates matching the prefix with the
    same case come first; each group is sorted, duplicates are dropped.
    """
    wanted = prefix.lower()
    exact, loose = set(), set()
    for c in candidates:
        if c.startswith(prefix):
            exact.add(c)
        elif c.lower().startswith(wanted):
            loose.add(c)
    return sorted(exact) + sorted(loose)


__all__ = ["resolve_completions"]
