from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import NewType, Optional, Tuple, Union

# ---- Aliases for clarity ----
RelPath = NewType("RelPath", str)  # project-root relative POSIX path
DottedName = NewType("DottedName", str)  # "users.show", "form.input"


class SourceKind(Enum):
    """Kind of file being scanned for references."""
    TEMPLATE = "template"  # .edge templates
    CODE = "code"          # .ts / .js sources

    @classmethod
    def coerce(cls, value: Union["SourceKind", str]) -> "SourceKind":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class ReferenceKind(Enum):
    """Kind of symbolic reference found in text."""
    INCLUDE = "include"
    LAYOUT = "layout"
    COMPONENT = "component"
    RENDER = "render"
    ROUTE_HANDLER = "route-handler"


# ---- References and links ----

@dataclass(frozen=True)
class Reference:
    """
    Symbolic identifier extracted from text by one of the catalog patterns.

    Ephemeral: created per scan, discarded after resolution.
    """
    kind: ReferenceKind
    raw_text: str               # identifier as written, without quotes
    match_span: Tuple[int, int]  # absolute offsets of raw_text in the scanned text
    method: Optional[str] = None  # route handlers only: "index" in 'UsersController.index'


@dataclass(frozen=True)
class Position:
    """Clickable span: 0-based line, [col_start, col_end) within that line."""
    line: int
    col_start: int
    col_end: int

    def contains(self, line: int, col: int) -> bool:
        return line == self.line and self.col_start <= col <= self.col_end


@dataclass(frozen=True)
class ResolvedLink:
    """
    Reference successfully mapped to an existing file.

    target_line is only set for route handlers whose method was found
    in the controller.
    """
    target_path: Path
    position: Position
    kind: ReferenceKind
    text: str
    target_line: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "targetPath": str(self.target_path),
            "position": {
                "line": self.position.line,
                "colStart": self.position.col_start,
                "colEnd": self.position.col_end,
            },
            "kind": self.kind.value,
            "text": self.text,
            "targetLine": self.target_line,
        }


# ---- Components and controllers ----

@dataclass(frozen=True)
class ComponentEntry:
    name: DottedName
    path: Path  # absolute


@dataclass(frozen=True)
class ControllerMethod:
    name: str
    line: int  # 0-based line of the definition


@dataclass(frozen=True)
class HoverInfo:
    link: ResolvedLink
    relative_path: RelPath
    preview: str

    def to_dict(self) -> dict:
        return {
            "link": self.link.to_dict(),
            "relativePath": self.relative_path,
            "preview": self.preview,
        }


__all__ = [
    "RelPath",
    "DottedName",
    "SourceKind",
    "ReferenceKind",
    "Reference",
    "Position",
    "ResolvedLink",
    "ComponentEntry",
    "ControllerMethod",
    "HoverInfo",
]
