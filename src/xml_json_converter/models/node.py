"""Tree node model shared by the JSON and XML codecs."""

import re
from typing import Any, Dict, Iterator, List, Optional, Union
from ..types import Attribute


_ARRAY_PLACEHOLDER = re.compile(r'element\(\d+\)')
_QUOTED_OR_NULL = re.compile(r'".*"|null', re.DOTALL)


def format_value(value: Optional[str]) -> Optional[str]:
    """Wrap a raw scalar in double quotes unless it is already quoted or ``null``."""
    if value is None:
        return None
    if _QUOTED_OR_NULL.fullmatch(value):
        return value
    return f'"{value}"'


class Node:
    """
    Intermediate tree element produced by the readers and consumed by the serializer.

    A node carries a name, an optional pre-quoted scalar value, an ordered
    list of attributes and an ordered list of children. The array flag is
    derived: it is recomputed every time a child is attached.
    """

    def __init__(self, name: str, value: Optional[str] = None,
                 is_array: bool = False, parent: Optional["Node"] = None):
        """
        Initialize the node.

        Args:
            name: Element or key name; ``element(<n>)`` is normalized to ``element``
            value: Raw scalar value, quoted on the way in
            is_array: Initial array flag, overwritten by ``add_child``
            parent: Enclosing node, used only to derive ``path``
        """
        self._name = "element" if _ARRAY_PLACEHOLDER.fullmatch(name) else name
        if parent is None or not parent.path:
            self._path = name
        else:
            self._path = f"{parent.path}, {name}"
        self._value = format_value(value)
        self._attributes: List[Attribute] = []
        self._children: List["Node"] = []
        self._is_array = is_array

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> str:
        return self._path

    @property
    def value(self) -> Optional[str]:
        return self._value

    @property
    def attributes(self) -> List[Attribute]:
        return self._attributes

    @property
    def children(self) -> List["Node"]:
        return self._children

    def set_value(self, value: Optional[str]) -> None:
        """Overwrite the value as given, without quoting."""
        self._value = value

    def add_attribute(self, attribute: Union[Attribute, str]) -> None:
        """Append an attribute; ``key = "value"`` strings are accepted as well."""
        if isinstance(attribute, str):
            attribute = Attribute.parse(attribute)
        self._attributes.append(attribute)

    def add_child(self, child: "Node") -> None:
        """Append a child and recompute the array flag."""
        self._children.append(child)
        self._is_array = (
            len(self._children) > 1
            and all(c.name == child.name for c in self._children)
        )

    def is_array(self) -> bool:
        return self._is_array

    def is_leaf(self) -> bool:
        return not self._children

    def iter_nodes(self) -> Iterator["Node"]:
        """Walk this node and its descendants in pre-order."""
        yield self
        for child in self._children:
            yield from child.iter_nodes()

    def count_nodes(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def depth(self) -> int:
        """Number of levels below and including this node."""
        if self.is_leaf():
            return 1
        return 1 + max(child.depth() for child in self._children)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree to a dictionary for debugging output."""
        return {
            "name": self._name,
            "path": self._path,
            "value": self._value,
            "attributes": [str(a) for a in self._attributes],
            "isArray": self._is_array,
            "children": [child.to_dict() for child in self._children]
        }

    def describe(self) -> str:
        """
        Render a human-readable dump of the subtree.

        Each named node prints its path, its value when it is a leaf, and its
        attributes. The anonymous root contributes no block of its own.
        """
        lines: List[str] = []
        if self._path:
            lines.append("Element:")
            lines.append(f"path = {self._path}")
            if self.is_leaf():
                lines.append(f"value = {self._value}")
            if self._attributes:
                lines.append("attributes:")
                lines.extend(str(a) for a in self._attributes)
            lines.append("")
        text = "\n".join(lines) + ("\n" if lines else "")
        return text + "".join(child.describe() for child in self._children)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self._name == other._name
            and self._value == other._value
            and self._attributes == other._attributes
            and self._is_array == other._is_array
            and self._children == other._children
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (f"Node(name={self._name!r}, value={self._value!r}, "
                f"attributes={len(self._attributes)}, children={len(self._children)}, "
                f"is_array={self._is_array})")
