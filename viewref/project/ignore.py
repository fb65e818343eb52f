"""
Directory pruning for project traversal.

Combines the fixed exclude list from viewref.yaml with .gitignore rules:
- each .gitignore applies to its directory and below
- patterns are matched relative to the .gitignore location
- results are cached for the lifetime of the filter
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern

logger = logging.getLogger(__name__)

__all__ = ["IgnoreFilter"]


class IgnoreFilter:
    """
    Answers "should this path be skipped?" during read-only traversal.

    Usage:
        flt = IgnoreFilter(root, exclude=["node_modules"], use_gitignore=True)
        if flt.should_descend("resources/views"):
            ...
    """

    def __init__(self, root: Path, *, exclude: Iterable[str] = (), use_gitignore: bool = True):
        self.root = root
        self.use_gitignore = use_gitignore
        self._exclude = {e.strip("/").lower() for e in exclude if e.strip("/")}

        # rel dir ("" for root) -> PathSpec of its .gitignore (None when absent)
        self._specs: Dict[str, Optional[PathSpec]] = {}
        self._cache: Dict[str, bool] = {}

        if use_gitignore:
            self._load_root_ignores()

    def _load_root_ignores(self) -> None:
        patterns: List[str] = []
        exclude_path = self.root / ".git" / "info" / "exclude"
        if exclude_path.is_file():
            patterns.extend(self._read_patterns(exclude_path))
        root_gitignore = self.root / ".gitignore"
        if root_gitignore.is_file():
            patterns.extend(self._read_patterns(root_gitignore))
        self._specs[""] = PathSpec.from_lines(GitWildMatchPattern, patterns) if patterns else None

    def _read_patterns(self, path: Path) -> List[str]:
        try:
            content = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            logger.debug("Failed to read %s: %s", path, e)
            return []
        return [
            line.strip().lower()
            for line in content.splitlines()
            if line.strip() and not line.strip().startswith("#")
        ]

    def _spec_for_dir(self, rel_dir: str) -> Optional[PathSpec]:
        if rel_dir in self._specs:
            return self._specs[rel_dir]

        gitignore = self.root / rel_dir / ".gitignore"
        spec = None
        if gitignore.is_file():
            patterns = self._read_patterns(gitignore)
            if patterns:
                spec = PathSpec.from_lines(GitWildMatchPattern, patterns)
        self._specs[rel_dir] = spec
        return spec

    def is_ignored(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """
        Check a root-relative POSIX path against the exclude list and .gitignore files.

        Matching is case-insensitive, like reference resolution.
        """
        key = f"{rel_path}/" if is_dir else rel_path
        if key in self._cache:
            return self._cache[key]

        stripped = rel_path.strip("/")
        orig_parts = stripped.split("/") if stripped else []
        normalized = stripped.lower()
        parts = normalized.split("/") if normalized else []

        ignored = any(p in self._exclude for p in parts)

        if not ignored and self.use_gitignore and parts:
            probe = normalized + "/" if is_dir else normalized
            root_spec = self._specs.get("")
            if root_spec is not None and root_spec.match_file(probe):
                ignored = True

            # Deeper .gitignore files apply relative to their own directory
            for i in range(len(parts) - 1):
                spec = self._spec_for_dir("/".join(orig_parts[: i + 1]))
                if spec is None:
                    continue
                remaining = "/".join(parts[i + 1:])
                if spec.match_file(remaining + "/" if is_dir else remaining):
                    ignored = True

        self._cache[key] = ignored
        return ignored

    def should_descend(self, rel_dir: str) -> bool:
        return not self.is_ignored(rel_dir, is_dir=True)
