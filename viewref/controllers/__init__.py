from .introspect import ControllerDocument, list_controller_methods, find_method
from .locate import is_controller_file, find_controller, list_controller_modules

__all__ = [
    "ControllerDocument",
    "list_controller_methods",
    "find_method",
    "is_controller_file",
    "find_controller",
    "list_controller_modules",
]
