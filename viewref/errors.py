"""
Base exceptions for user-facing errors.

Errors that should reach the user as clean messages (without stack traces)
inherit from ViewRefUserError. Resolution failures never raise: the resolvers
degrade to empty results instead.
"""

from __future__ import annotations


class ViewRefUserError(Exception):
    """
    Base class for all user-facing errors in viewref.

    These errors indicate problems that the user can fix:
    a missing project directory, a broken viewref.yaml, etc.
    """
    pass


class ProjectNotFoundError(ViewRefUserError):
    """Project root does not exist or is not a directory."""

    def __init__(self, root):
        self.root = root
        super().__init__(f"Project root not found: {root}")


class ConfigLoadError(ViewRefUserError, ValueError):
    """viewref.yaml could not be read or validated."""

    def __init__(self, message: str, path=None):
        self.path = path
        prefix = f"{path}: " if path is not None else ""
        super().__init__(prefix + message)


__all__ = ["ViewRefUserError", "ProjectNotFoundError", "ConfigLoadError"]
