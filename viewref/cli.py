from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from .completion import resolve_completions
from .components import build_index
from .errors import ViewRefUserError
from .hover import resolve_hover
from .linking import document_links
from .project import Project
from .types import SourceKind
from .version import tool_version


def _setup_logging() -> None:
    log = logging.getLogger("viewref")
    if log.handlers:
        return
    log.setLevel(logging.DEBUG if os.environ.get("VIEWREF_DEBUG") else logging.INFO)
    h = logging.StreamHandler()
    h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    log.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="viewref",
        description="Resolve view, component and controller references (JSON output)",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(sp: argparse.ArgumentParser, *, with_file: bool = True) -> None:
        sp.add_argument(
            "--root",
            default=".",
            help="project root (default: current directory)",
        )
        if not with_file:
            return
        sp.add_argument("file", help="template or source file to scan")
        sp.add_argument(
            "--kind",
            choices=[k.value for k in SourceKind],
            help="source kind (default: from the file extension)",
        )

    sp_links = sub.add_parser("links", help="document links of a file")
    add_common(sp_links)

    sp_complete = sub.add_parser("complete", help="completion candidates at an offset")
    add_common(sp_complete)
    sp_complete.add_argument("--offset", type=int, required=True, help="cursor offset (characters)")

    sp_hover = sub.add_parser("hover", help="hover preview at an offset")
    add_common(sp_hover)
    sp_hover.add_argument("--offset", type=int, required=True, help="cursor offset (characters)")

    sp_components = sub.add_parser("components", help="component index of the project")
    add_common(sp_components, with_file=False)

    return p


def _source_kind(ns: argparse.Namespace, project: Project, file: Path) -> SourceKind:
    if getattr(ns, "kind", None):
        return SourceKind(ns.kind)
    if file.name.lower().endswith(project.config.template_ext.lower()):
        return SourceKind.TEMPLATE
    return SourceKind.CODE


def _read_file(arg: str) -> tuple[Path, str]:
    path = Path(arg)
    if not path.is_file():
        raise ValueError(f"File not found: {path}")
    return path, path.read_text(encoding="utf-8", errors="replace")


def _dump(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def main(argv: Optional[list[str]] = None) -> int:
    _setup_logging()
    ns = _build_parser().parse_args(argv)

    try:
        project = Project.load(Path(ns.root))

        if ns.cmd == "components":
            entries = build_index(project)
            sys.stdout.write(_dump([{"name": e.name, "path": str(e.path)} for e in entries]))
            return 0

        file, text = _read_file(ns.file)
        kind = _source_kind(ns, project, file)

        if ns.cmd == "links":
            links = document_links(text, kind, project)
            sys.stdout.write(_dump([lk.to_dict() for lk in links]))
            return 0

        if ns.cmd == "complete":
            sys.stdout.write(_dump(resolve_completions(text, ns.offset, kind, project)))
            return 0

        if ns.cmd == "hover":
            info = resolve_hover(text, ns.offset, kind, project)
            sys.stdout.write(_dump(info.to_dict() if info is not None else None))
            return 0

    except ViewRefUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
