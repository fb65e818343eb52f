"""
Pattern catalog: one declarative regex per reference kind.

Each reference kind has a "complete" variant (closing quote required, used
for links and hovers) and an "in-progress" variant (open quote, possibly
empty identifier, no closing delimiter, used for completion).

Identifiers never include quote characters, so no pattern runs past the
closing quote of the reference it matched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Pattern, Tuple

from .types import Reference, ReferenceKind, SourceKind


@dataclass(frozen=True)
class ReferencePattern:
    name: str
    source: SourceKind
    kind: ReferenceKind
    complete: bool
    regex: Pattern[str]
    # Identifier groups, tried in order; the first one that participated wins
    ident_groups: Tuple[str, ...] = ("ident",)

    def __repr__(self) -> str:
        state = "complete" if self.complete else "in-progress"
        return f"ReferencePattern({self.name!r}, {self.source.value}, {state})"


_DIRECTIVE = r"(?P<directive>@include|@layout|@!component|@component)"
_RENDER = r"(?P<directive>\b[Vv]iew\.render(?:Sync)?)"
_ROUTE = r"\b[Rr]outer?\.[a-zA-Z]*\(\s*(?P<pq>['\"])[^'\"\n]*(?P=pq)\s*,\s*"
_NAME = r"[A-Za-z_][\w-]*(?:\.[A-Za-z_][\w-]*)*"

# --- complete references ---

TEMPLATE_DIRECTIVE = ReferencePattern(
    name="template-directive",
    source=SourceKind.TEMPLATE,
    kind=ReferenceKind.INCLUDE,
    complete=True,
    regex=re.compile(_DIRECTIVE + r"\((?P<quote>['\"])(?P<ident>[^'\">\n]+)(?P=quote)"),
)

RENDER_CALL = ReferencePattern(
    name="render-call",
    source=SourceKind.CODE,
    kind=ReferenceKind.RENDER,
    complete=True,
    regex=re.compile(_RENDER + r"\((?P<quote>['\"])(?P<ident>[^'\"\n]+)(?P=quote)"),
)

# Edge tag syntax (@card(), @!form.input()) or element syntax (<MyCard>).
# Directive names (@include, @layout, @component) are never tags.
COMPONENT_TAG = ReferencePattern(
    name="component-tag",
    source=SourceKind.TEMPLATE,
    kind=ReferenceKind.COMPONENT,
    complete=True,
    regex=re.compile(
        r"(?:(?<![\w@])@!?(?!(?:include|layout|component)\()(?P<ident>" + _NAME + r")\("
        r"|<(?P<element>[A-Z][\w-]*(?:\.[A-Za-z_][\w-]*)*)(?=[\s/>]))"
    ),
    ident_groups=("ident", "element"),
)

ROUTE_HANDLER = ReferencePattern(
    name="route-handler",
    source=SourceKind.CODE,
    kind=ReferenceKind.ROUTE_HANDLER,
    complete=True,
    regex=re.compile(
        _ROUTE + r"(?P<quote>['\"])(?P<module>[^'\".\n]+)(?:\.(?P<method>[^'\"\n]*))?(?P=quote)"
    ),
    ident_groups=("module",),
)

# --- in-progress fragments ---

TEMPLATE_DIRECTIVE_PARTIAL = ReferencePattern(
    name="template-directive-partial",
    source=SourceKind.TEMPLATE,
    kind=ReferenceKind.INCLUDE,
    complete=False,
    regex=re.compile(_DIRECTIVE + r"\((?P<quote>['\"])(?P<ident>[^'\"\n]*)"),
)

RENDER_CALL_PARTIAL = ReferencePattern(
    name="render-call-partial",
    source=SourceKind.CODE,
    kind=ReferenceKind.RENDER,
    complete=False,
    regex=re.compile(_RENDER + r"\((?P<quote>['\"])(?P<ident>[^'\"\n]*)"),
)

ROUTE_HANDLER_PARTIAL = ReferencePattern(
    name="route-handler-partial",
    source=SourceKind.CODE,
    kind=ReferenceKind.ROUTE_HANDLER,
    complete=False,
    regex=re.compile(
        _ROUTE + r"(?P<quote>['\"])(?P<module>[^'\".\n]*)(?:\.(?P<method>[^'\"\n]*))?"
    ),
    ident_groups=("module",),
)

CATALOG: Tuple[ReferencePattern, ...] = (
    TEMPLATE_DIRECTIVE,
    RENDER_CALL,
    COMPONENT_TAG,
    ROUTE_HANDLER,
    TEMPLATE_DIRECTIVE_PARTIAL,
    RENDER_CALL_PARTIAL,
    ROUTE_HANDLER_PARTIAL,
)

_DIRECTIVE_KINDS = {
    "@include": ReferenceKind.INCLUDE,
    "@layout": ReferenceKind.LAYOUT,
    "@component": ReferenceKind.COMPONENT,
    "@!component": ReferenceKind.COMPONENT,
}


def patterns_for(source_kind: SourceKind, *, complete: bool) -> List[ReferencePattern]:
    """Catalog entries that apply to a file of the given kind."""
    return [p for p in CATALOG if p.source is source_kind and p.complete is complete]


def _kind_of(pattern: ReferencePattern, m: re.Match) -> ReferenceKind:
    directive = m.groupdict().get("directive")
    return _DIRECTIVE_KINDS.get(directive, pattern.kind) if directive else pattern.kind


def iter_references(pattern: ReferencePattern, text: str) -> Iterator[Reference]:
    """
    Every non-overlapping match of `pattern` in `text`, as References.

    Complete patterns skip matches with an empty identifier; in-progress
    patterns keep them (a just-opened quote is a valid completion point).
    For route handlers raw_text is the whole handler string and `method`
    is None when no '.' was written, "" when the method part is still empty.
    """
    for m in pattern.regex.finditer(text):
        group = _first_group(pattern, m)
        if group is None:
            continue

        start, end = m.span(group)
        method: Optional[str] = None
        if "method" in pattern.regex.groupindex and m.group("method") is not None:
            method = m.group("method")
            end = m.end("method")

        if pattern.complete and start == end:
            continue

        yield Reference(
            kind=_kind_of(pattern, m),
            raw_text=text[start:end],
            match_span=(start, end),
            method=method,
        )


def _first_group(pattern: ReferencePattern, m: re.Match) -> Optional[str]:
    for name in pattern.ident_groups:
        if m.group(name) is not None:
            return name
    return None


__all__ = [
    "ReferencePattern",
    "CATALOG",
    "TEMPLATE_DIRECTIVE",
    "RENDER_CALL",
    "COMPONENT_TAG",
    "ROUTE_HANDLER",
    "TEMPLATE_DIRECTIVE_PARTIAL",
    "RENDER_CALL_PARTIAL",
    "ROUTE_HANDLER_PARTIAL",
    "patterns_for",
    "iter_references",
]
