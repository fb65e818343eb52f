"""
Project handle: the root directory of the analyzed codebase plus its conventions.

All lookups are read-only. Path matching is case-insensitive unless asked
otherwise, so `Users.Show` and `users/show.edge` refer to the same file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath
from typing import List, Optional

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern

from .ignore import IgnoreFilter
from ..config import ProjectConfig, DEFAULT_CONFIG, load_config
from ..errors import ProjectNotFoundError

logger = logging.getLogger(__name__)


class Project:
    """
    Opaque reference to a project root.

    The resolvers only read `root` and `config`; nothing here mutates
    the file tree.
    """

    def __init__(self, root: Path, config: ProjectConfig = DEFAULT_CONFIG):
        self.root = Path(root).resolve()
        self.config = config

    @classmethod
    def load(cls, root: Path) -> Project:
        """
        Open a project and read its viewref.yaml.

        Raises:
            ProjectNotFoundError: root is not a directory
            ConfigLoadError: viewref.yaml is invalid
        """
        root = Path(root)
        if not root.is_dir():
            raise ProjectNotFoundError(root)
        return cls(root, load_config(root))

    @property
    def path(self) -> Path:
        return self.root

    def __repr__(self) -> str:
        return f"Project(root={str(self.root)!r})"

    # --------------------------- lookups --------------------------- #

    def find_file(self, rel_path: str) -> Optional[Path]:
        """
        Resolve a root-relative POSIX path, case-insensitively, segment by segment.

        An exact-case entry wins; otherwise the first case-insensitive match
        in directory iteration order is taken.

        Returns:
            Absolute path of an existing file, or None

        Raises:
            OSError: a directory on the way cannot be listed
        """
        found = self._walk_segments(rel_path)
        if found is None or not found.is_file():
            return None
        return found

    def find_dir(self, rel_path: str) -> Optional[Path]:
        """Directory counterpart of find_file. An empty path is the root itself."""
        found = self._walk_segments(rel_path)
        if found is None or not found.is_dir():
            return None
        return found

    def exists(self, rel_path: str) -> bool:
        return self.find_file(rel_path) is not None

    def _walk_segments(self, rel_path: str) -> Optional[Path]:
        current = self.root
        for part in PurePosixPath(rel_path.replace("\\", "/")).parts:
            if part in ("/", "."):
                continue
            if part == "..":
                # lookups never leave the project root
                return None

            exact = current / part
            if exact.exists():
                current = exact
                continue

            if not current.is_dir():
                return None
            wanted = part.lower()
            with os.scandir(current) as it:
                match = next((e.name for e in it if e.name.lower() == wanted), None)
            if match is None:
                return None
            current = current / match
        return current

    # --------------------------- search --------------------------- #

    def ignore_filter(self) -> IgnoreFilter:
        return IgnoreFilter(
            self.root,
            exclude=self.config.exclude,
            use_gitignore=self.config.respect_gitignore,
        )

    def search(self, pattern: str, *, base: str = "", case_sensitive: bool = False) -> List[str]:
        """
        List files under `base` whose base-relative path matches a gitwildmatch pattern.

        Args:
            pattern: e.g. "**/*.edge"
            base: root-relative directory to walk (resolved case-insensitively)
            case_sensitive: match pattern case-sensitively

        Returns:
            Root-relative POSIX paths in directory-walk order; [] if base is missing
        """
        base_dir = self.find_dir(base)
        if base_dir is None:
            return []

        spec = PathSpec.from_lines(
            GitWildMatchPattern, [pattern if case_sensitive else pattern.lower()]
        )
        flt = self.ignore_filter()

        def _on_error(err: OSError) -> None:
            logger.debug("Skipping unreadable directory %s: %s", err.filename, err)

        results: List[str] = []
        for dirpath, dirnames, filenames in os.walk(base_dir, onerror=_on_error):
            dir_rel = Path(dirpath).relative_to(self.root).as_posix()
            dir_rel = "" if dir_rel == "." else dir_rel

            # Prune in place so os.walk does not descend
            dirnames[:] = [
                d for d in dirnames
                if flt.should_descend(f"{dir_rel}/{d}" if dir_rel else d)
            ]

            for name in filenames:
                rel = f"{dir_rel}/{name}" if dir_rel else name
                if flt.is_ignored(rel):
                    continue
                probe = (Path(dirpath) / name).relative_to(base_dir).as_posix()
                if spec.match_file(probe if case_sensitive else probe.lower()):
                    results.append(rel)
        return results

    def rel(self, path: Path) -> str:
        """Root-relative POSIX form of an absolute path inside the project."""
        return Path(path).resolve().relative_to(self.root).as_posix()


__all__ = ["Project"]
