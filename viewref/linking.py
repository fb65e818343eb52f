"""
Reference resolver: text -> clickable links to existing files.

Purpose:
- scan a template or code file with the catalog patterns
- map each identifier onto the project tree (views, components, controllers)
- return one ResolvedLink per reference that points at an existing file

Unresolvable references are expected (views generated at runtime, typos in
progress) and are dropped silently. Failures never reach the caller: a
candidate that hits an I/O error is absent, a call that cannot proceed
returns [].
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Union

from .components import build_index, find_component
from .controllers import find_controller, find_method
from .patterns import COMPONENT_TAG, RENDER_CALL, ROUTE_HANDLER, TEMPLATE_DIRECTIVE, iter_references
from .positions import position_of
from .project import Project
from .types import ComponentEntry, Reference, ResolvedLink, SourceKind
from .views import find_template

logger = logging.getLogger(__name__)

_Resolver = Callable[[Reference], Optional[ResolvedLink]]

# Patterns whose identifiers name views
_VIEW_PATTERNS = {
    SourceKind.TEMPLATE: (TEMPLATE_DIRECTIVE,),
    SourceKind.CODE: (RENDER_CALL,),
}


def resolve_links(
    file_text: str,
    source_kind: Union[SourceKind, str],
    project: Project,
    *,
    components: Optional[Sequence[ComponentEntry]] = None,
) -> List[ResolvedLink]:
    """
    Links for include/layout/component directives (templates) or render calls (code).

    Args:
        file_text: Full text of the scanned file
        source_kind: "template" or "code"
        project: Project handle
        components: Pre-built component index; built on demand when omitted

    Returns:
        Directive/render links first, then component-tag links (templates only).
        Order within each group is not guaranteed.
    """
    try:
        kind = SourceKind.coerce(source_kind)
        refs = [
            ref
            for pattern in _VIEW_PATTERNS[kind]
            for ref in iter_references(pattern, file_text)
        ]
        links = _resolve_all(refs, lambda ref: _view_link(file_text, ref, project), project)

        if kind is SourceKind.TEMPLATE:
            links.extend(_component_tag_links(file_text, project, components))
        return links
    except (OSError, ValueError) as e:
        logger.warning("Link resolution failed in %s: %s", project, e)
        return []


def resolve_route_links(file_text: str, project: Project) -> List[ResolvedLink]:
    """
    Links from route bindings ('UsersController.index') to controller files.

    The span covers the whole handler string. target_line is set when the
    method part names a method the controller exposes.
    """
    try:
        refs = list(iter_references(ROUTE_HANDLER, file_text))
        return _resolve_all(refs, lambda ref: _route_link(file_text, ref, project), project)
    except (OSError, ValueError) as e:
        logger.warning("Route link resolution failed in %s: %s", project, e)
        return []


def document_links(
    file_text: str,
    source_kind: Union[SourceKind, str],
    project: Project,
    *,
    components: Optional[Sequence[ComponentEntry]] = None,
) -> List[ResolvedLink]:
    """All links of a file: views and components, plus route handlers for code."""
    try:
        kind = SourceKind.coerce(source_kind)
    except ValueError as e:
        logger.warning("Link resolution failed in %s: %s", project, e)
        return []
    links = resolve_links(file_text, kind, project, components=components)
    if kind is SourceKind.CODE:
        links.extend(resolve_route_links(file_text, project))
    return links


def _resolve_all(refs: List[Reference], resolve: _Resolver, project: Project) -> List[ResolvedLink]:
    """Resolve candidates concurrently; each one does its own directory search."""
    if not refs:
        return []

    def _guarded(ref: Reference) -> Optional[ResolvedLink]:
        try:
            return resolve(ref)
        except OSError as e:
            logger.debug("Candidate %r dropped: %s", ref.raw_text, e)
            return None

    workers = min(project.config.max_workers, len(refs))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="viewref-link") as pool:
        results = list(pool.map(_guarded, refs))
    return [link for link in results if link is not None]


def _view_link(file_text: str, ref: Reference, project: Project) -> Optional[ResolvedLink]:
    target = find_template(project, ref.raw_text)
    if target is None:
        logger.debug("Unresolved view reference %r", ref.raw_text)
        return None
    position = position_of(file_text, ref.raw_text)
    if position is None:
        return None
    return ResolvedLink(target_path=target, position=position, kind=ref.kind, text=ref.raw_text)


def _component_tag_links(
    file_text: str,
    project: Project,
    components: Optional[Sequence[ComponentEntry]],
) -> List[ResolvedLink]:
    refs = list(iter_references(COMPONENT_TAG, file_text))
    if not refs:
        return []

    entries = components if components is not None else build_index(project)
    links: List[ResolvedLink] = []
    for ref in refs:
        entry = find_component(entries, ref.raw_text)
        if entry is None:
            continue
        position = position_of(file_text, ref.raw_text)
        if position is None:
            continue
        links.append(ResolvedLink(target_path=entry.path, position=position, kind=ref.kind, text=ref.raw_text))
    return links


def _route_link(file_text: str, ref: Reference, project: Project) -> Optional[ResolvedLink]:
    module = ref.raw_text.split(".", 1)[0]
    target = find_controller(project, module)
    if target is None:
        logger.debug("Unresolved controller %r", module)
        return None
    position = position_of(file_text, ref.raw_text)
    if position is None:
        return None

    target_line = None
    if ref.method:
        method = find_method(target, ref.method)
        target_line = method.line if method is not None else None

    return ResolvedLink(
        target_path=target,
        position=position,
        kind=ref.kind,
        text=ref.raw_text,
        target_line=target_line,
    )


__all__ = ["resolve_links", "resolve_route_links", "document_links"]
