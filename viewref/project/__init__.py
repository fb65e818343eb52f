from .ignore import IgnoreFilter
from .project import Project

__all__ = ["Project", "IgnoreFilter"]
