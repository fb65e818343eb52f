"""
Tree-sitter infrastructure for controller introspection.
Wraps grammar loading, parsing and node text access.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from tree_sitter import Language, Node, Parser, Tree


class TreeSitterDocument(ABC):
    """
    Parsed source file.

    Parsing is done once in the constructor; a tree with syntax errors is
    still usable, tree-sitter recovers around ERROR nodes.
    """

    def __init__(self, text: str, ext: str):
        self.text = text
        self.ext = ext.lstrip(".").lower()
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode("utf-8")
        self._parse()

    @abstractmethod
    def get_language(self) -> Language:
        """Language instance for this document's grammar."""
        pass

    def _parse(self) -> None:
        parser = Parser(self.get_language())
        self.tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    def get_node_text(self, node: Node) -> str:
        return self._text_bytes[node.start_byte:node.end_byte].decode("utf-8")

    @staticmethod
    def get_children_by_type(node: Node, *node_types: str) -> List[Node]:
        return [child for child in node.children if child.type in node_types]

    def has_error(self) -> bool:
        if not self.tree:
            return True
        return self.root_node.has_error


__all__ = ["TreeSitterDocument"]
