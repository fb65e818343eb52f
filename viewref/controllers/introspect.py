"""
Best-effort listing of controller methods.

Parses a TypeScript/JavaScript controller with tree-sitter and reports the
public instance methods of its exported class. This is not type checking:
inherited methods, mixins and runtime-built handlers are not seen.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from tree_sitter import Language, Node

from .tree_sitter_support import TreeSitterDocument
from ..types import ControllerMethod

logger = logging.getLogger(__name__)

_CLASS_NODES = ("class_declaration", "abstract_class_declaration", "class")
_HIDDEN_MODIFIERS = {"private", "protected"}
_FUNCTION_VALUES = {"arrow_function", "function", "function_expression"}


class ControllerDocument(TreeSitterDocument):

    def get_language(self) -> Language:
        import tree_sitter_typescript as tsts
        # TSX grammar also accepts JSX in .js/.jsx controllers
        if self.ext in ("tsx", "jsx"):
            return Language(tsts.language_tsx())
        return Language(tsts.language_typescript())

    def exported_classes(self) -> List[Node]:
        """Classes exported from the module, default export first."""
        top_level: Dict[str, Node] = {}
        for node in self.get_children_by_type(self.root_node, *_CLASS_NODES):
            name = node.child_by_field_name("name")
            if name is not None:
                top_level[self.get_node_text(name)] = node

        default: List[Node] = []
        named: List[Node] = []
        for export in self.get_children_by_type(self.root_node, "export_statement"):
            is_default = any(c.type == "default" for c in export.children)
            target = self._export_target(export, top_level)
            if target is None:
                continue
            (default if is_default else named).append(target)
        return default + named

    def _export_target(self, export: Node, top_level: Dict[str, Node]) -> Optional[Node]:
        for child in export.children:
            if child.type in _CLASS_NODES:
                return child
        # export default UsersController
        value = export.child_by_field_name("value")
        if value is not None and value.type == "identifier":
            return top_level.get(self.get_node_text(value))
        return None

    def public_methods(self, class_node: Node) -> List[ControllerMethod]:
        body = class_node.child_by_field_name("body")
        if body is None:
            return []

        methods: List[ControllerMethod] = []
        for member in body.children:
            if member.type == "method_definition":
                if any(c.type in ("get", "set") for c in member.children):
                    continue
            elif member.type == "public_field_definition":
                value = member.child_by_field_name("value")
                if value is None or value.type not in _FUNCTION_VALUES:
                    continue
            else:
                continue

            if not self._is_public_instance_member(member):
                continue

            name_node = member.child_by_field_name("name")
            if name_node is None or name_node.type == "private_property_identifier":
                continue
            name = self.get_node_text(name_node).strip("'\"")
            if not name or name == "constructor":
                continue
            methods.append(ControllerMethod(name=name, line=member.start_point[0]))
        return methods

    def _is_public_instance_member(self, member: Node) -> bool:
        for child in member.children:
            if child.type == "static":
                return False
            if child.type == "accessibility_modifier" and self.get_node_text(child) in _HIDDEN_MODIFIERS:
                return False
        return True


def list_controller_methods(path: Path) -> List[ControllerMethod]:
    """
    Public methods of the controller exported from `path`.

    Any failure (unreadable file, missing grammar, unexpected tree)
    yields [] so callers can offer "module resolved, no methods".
    """
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
        doc = ControllerDocument(text, Path(path).suffix)
        if doc.has_error():
            logger.debug("Syntax errors in %s; listing methods best-effort", path)
        classes = doc.exported_classes()
        if not classes:
            return []
        return doc.public_methods(classes[0])
    except Exception as e:
        logger.debug("Controller introspection failed for %s: %s", path, e)
        return []


def find_method(path: Path, name: str) -> Optional[ControllerMethod]:
    return next((m for m in list_controller_methods(path) if m.name == name), None)


__all__ = ["ControllerDocument", "list_controller_methods", "find_method"]
