"""Rendering of node trees as JSON-like or XML-like text."""

import logging
from typing import List, Optional
from .models import Node


class TreeSerializer:
    """
    Serializer for node trees produced by either reader.

    Output is indented with one tab per level and uses ``\\n`` line breaks.
    An anonymous root with a single child is rendered as that child.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the serializer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def to_json(self, root: Node) -> str:
        """
        Render a tree as JSON-like text.

        Args:
            root: Root node, usually the anonymous node returned by a reader

        Returns:
            JSON-like text
        """
        node = root
        if not node.name.strip() and len(node.children) == 1:
            node = node.children[0]
        output = self._build_json(node, "", is_last=True, is_array_element=False)
        self.logger.debug(f"Rendered JSON ({len(output)} characters)")
        return output

    def to_xml(self, root: Node) -> str:
        """
        Render a tree as XML-like text.

        Args:
            root: Root node, usually the anonymous node returned by a reader

        Returns:
            XML-like text
        """
        output = self._build_xml(root, "")
        self.logger.debug(f"Rendered XML ({len(output)} characters)")
        return output

    def _build_xml(self, node: Node, tabs: str) -> str:
        name = node.name
        if not name.strip():
            if len(node.children) == 1:
                return self._build_xml(node.children[0], tabs)
            name = "root"

        attributes = "".join(f" {a.key}={a.value}" for a in node.attributes)

        if node.is_leaf():
            value = node.value.replace('"', '') if node.value is not None else None
            if value is None or value == "null":
                return f"{tabs}<{name}{attributes}/>"
            return f"{tabs}<{name}{attributes}>{value}</{name}>"

        lines = [f"{tabs}<{name}{attributes}>"]
        lines.extend(self._build_xml(child, tabs + "\t") for child in node.children)
        lines.append(f"{tabs}</{name}>")
        return "\n".join(lines)

    def _build_json(self, node: Node, tabs: str, is_last: bool, is_array_element: bool) -> str:
        name = node.name
        parts: List[str] = [tabs]
        if not is_array_element and name.strip():
            parts.append(f'"{name}": ')

        if not node.attributes:
            if node.is_array():
                parts.append("[")
                self._append_json_children(node, tabs, parts, True)
            elif node.is_leaf():
                parts.append(self._json_value(node))
            else:
                parts.append("{")
                self._append_json_children(node, tabs, parts, False)
        else:
            parts.append("{")
            for attribute in node.attributes:
                parts.append(f'\n{tabs}\t"@{attribute.key}": {attribute.value},')
            if node.is_leaf():
                parts.append(f'\n{tabs}\t"#{name}": {self._json_value(node)}\n{tabs}}}')
            else:
                is_array = node.is_array()
                parts.append(f'\n{tabs}\t"#{name}": {"[" if is_array else "{"}')
                self._append_json_children(node, tabs + "\t", parts, is_array)
                parts.append(f"\n{tabs}}}")

        if not is_last:
            parts.append(",")
        return "".join(parts)

    def _append_json_children(self, node: Node, tabs: str, parts: List[str], is_array: bool) -> None:
        children = node.children
        for index, child in enumerate(children):
            rendered = self._build_json(child, tabs + "\t", index == len(children) - 1, is_array)
            parts.append(f"\n{rendered}")
        parts.append(f"\n{tabs}{']' if is_array else '}'}")

    @staticmethod
    def _json_value(node: Node) -> str:
        return node.value if node.value is not None else "null"
