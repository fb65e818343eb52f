"""
viewref: resolve view, component and route-handler references in
Edge templates and TypeScript sources to files of an AdonisJS-style project.
"""

from .completion import resolve_completions
from .components import ComponentIndexCache, build_index, component_name, find_component
from .hover import resolve_hover
from .linking import document_links, resolve_links, resolve_route_links
from .positions import position_of
from .project import Project
from .types import (
    ComponentEntry,
    ControllerMethod,
    HoverInfo,
    Position,
    Reference,
    ReferenceKind,
    ResolvedLink,
    SourceKind,
)

__all__ = [
    "Project",
    "resolve_links",
    "resolve_route_links",
    "document_links",
    "resolve_completions",
    "resolve_hover",
    "build_index",
    "component_name",
    "find_component",
    "ComponentIndexCache",
    "position_of",
    "SourceKind",
    "ReferenceKind",
    "Reference",
    "Position",
    "ResolvedLink",
    "ComponentEntry",
    "ControllerMethod",
    "HoverInfo",
]
