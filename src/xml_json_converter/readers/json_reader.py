"""Reader for the JSON-like input format."""

import logging
import re
from typing import Dict, Optional, Tuple
from ..models import Node, format_value
from ..types import (
    Attribute,
    ConversionError,
    DocumentReaderInterface,
    ErrorType,
    JsonSyntaxError
)


SCALAR = r'"(?:[^"\\]|\\.)*"|null|true|false|-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?'

_SCALAR = re.compile(SCALAR)
_STRING = re.compile(r'"(?:[^"\\]|\\.)*"')
_KEY = re.compile(r'"((?:[^"\\]|\\.)*)"')
_SIMPLE_VALUE = re.compile(r'\{\s*(' + SCALAR + r')\s*\}|\{\s*\}|\[\s*\]|(' + SCALAR + r')')
_SIMPLE_KEY_VALUE = re.compile(r'\{\s*"((?:[^"\\]|\\.)*)"\s*:\s*(' + SCALAR + r')\s*\}')
_PREFIX_KEY = re.compile(r'[@#](?:\w+\.)*[\w _]+')
_BARE_PREFIX_KEY = re.compile(r'[@#][\w _]+')
_VALUE_KEY = re.compile(r'#((?:\w+\.)*[\w _]+)')
_ATTRIBUTE_KEY = re.compile(r'@((?:\w+\.)*[\w _]+)')
_EMPTY_BRACKETS = re.compile(r'\{\s*\}|\[\s*\]')
_ATTRIBUTE_VALUE = re.compile(SCALAR + r'|\{\s*\}|\[\s*\]')

_CLOSING = {"{": "}", "[": "]"}

# key -> (raw value text, absolute offset of the value)
Members = Dict[str, Tuple[str, int]]


class _Cursor:
    """Read position over an immutable slice of the document."""

    def __init__(self, text: str, base: int = 0):
        self.text = text
        self.pos = 0
        self.base = base

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def error(self, message: str) -> JsonSyntaxError:
        return JsonSyntaxError(message, self.base + self.pos, self.text[self.pos:self.pos + 20])

    def expect(self, char: str) -> None:
        self.skip_whitespace()
        if self.peek() != char:
            raise self.error(f"Expected {char!r}")
        self.pos += 1

    def read_key(self) -> str:
        self.skip_whitespace()
        match = _KEY.match(self.text, self.pos)
        if not match:
            raise self.error("Expected a quoted key")
        self.pos = match.end()
        return match.group(1)

    def read_value(self) -> Tuple[str, int]:
        """Read a scalar token or a bracketed sub-document."""
        self.skip_whitespace()
        start = self.pos
        if self.peek() in _CLOSING:
            return self.read_nested(), self.base + start
        match = _SCALAR.match(self.text, self.pos)
        if not match:
            raise self.error("Unsupported value")
        self.pos = match.end()
        return match.group(), self.base + start

    def read_nested(self) -> str:
        """
        Bracket-balance scan: return the sub-document starting at the cursor.

        Opening brackets are pushed, closing brackets must match the top of
        the stack, and quoted strings are skipped whole. The scan stops when
        the stack is empty again.
        """
        start = self.pos
        stack = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == '"':
                match = _STRING.match(self.text, self.pos)
                if not match:
                    raise self.error("Unterminated string")
                self.pos = match.end()
                continue
            if char in _CLOSING:
                stack.append(_CLOSING[char])
            elif char in ("}", "]"):
                if not stack or stack.pop() != char:
                    raise self.error(f"Unbalanced {char!r}")
                if not stack:
                    self.pos += 1
                    return self.text[start:self.pos]
            self.pos += 1
        self.pos = start
        raise self.error("Unterminated bracket")


class JsonReader(DocumentReaderInterface):
    """
    Recursive reader for the JSON-like format.

    Builds a Node tree from objects, arrays and scalars. Keys prefixed with
    ``@`` become attributes of the enclosing node and a ``#<name>`` key holds
    the enclosing node's own value, so documents written by the XML side
    of the converter read back into the same tree.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, max_depth: int = 256):
        """
        Initialize the JSON reader.

        Args:
            logger: Optional logger instance
            max_depth: Maximum nesting depth accepted before giving up
        """
        self.logger = logger or logging.getLogger(__name__)
        self.max_depth = max_depth

    def parse(self, text: str) -> Node:
        """
        Parse JSON-like text into a node tree.

        Args:
            text: Document text

        Returns:
            Anonymous root node holding the parsed document

        Raises:
            JsonSyntaxError: If the text does not match the supported grammar
            ConversionError: If the document nests deeper than ``max_depth``
        """
        root = Node("")
        stripped = text.strip()
        base = len(text) - len(text.lstrip())

        # An unwrapped root is rendered as a bare "key": value member list
        if stripped.startswith('"') and not _SCALAR.fullmatch(stripped):
            stripped = "{" + stripped + "}"
            base -= 1

        self._parse_into(root, stripped, base, 0)
        self.logger.debug(f"Parsed JSON into {root.count_nodes()} nodes")
        return root

    def _parse_into(self, node: Node, content: str, base: int, depth: int) -> None:
        if depth > self.max_depth:
            raise ConversionError(
                f"JSON nesting exceeds maximum depth of {self.max_depth}",
                ErrorType.DEPTH,
                context={"offset": base, "path": node.path}
            )

        base += len(content) - len(content.lstrip())
        content = content.strip()

        simple = _SIMPLE_VALUE.fullmatch(content)
        if simple:
            node.set_value(self._simple_value(simple))
            return

        pair = _SIMPLE_KEY_VALUE.fullmatch(content)
        if pair:
            node.add_child(Node(pair.group(1), pair.group(2), parent=node))
            return

        members = self._scan_members(content, base, content.startswith("["))
        members = self._correct_keys(members, node)

        if self._has_parent_attributes(members):
            for key, (value, offset) in members.items():
                if _ATTRIBUTE_KEY.fullmatch(key):
                    node.add_attribute(self._format_attribute(key, value))
                elif _VALUE_KEY.fullmatch(key):
                    if _SCALAR.fullmatch(value):
                        node.set_value(value)
                    elif value:
                        self._parse_into(node, value, offset, depth + 1)
        else:
            for key, (value, offset) in members.items():
                child = Node(key, "", is_array=value.startswith("["), parent=node)
                self._parse_into(child, value, offset, depth + 1)
                node.add_child(child)

    def _scan_members(self, content: str, base: int, is_array: bool) -> Members:
        """
        Collect the top-level members of an object or array in document order.

        Array elements get the synthetic keys ``element(0)``, ``element(1)``...
        A repeated object key keeps its first position and its last value.
        """
        cursor = _Cursor(content, base)
        closer = "]" if is_array else "}"
        cursor.expect("[" if is_array else "{")

        members: Members = {}
        cursor.skip_whitespace()
        if cursor.peek() == closer:
            cursor.pos += 1
        else:
            index = 0
            while True:
                if is_array:
                    key = f"element({index})"
                else:
                    key = cursor.read_key()
                    cursor.expect(":")
                members[key] = cursor.read_value()
                index += 1
                cursor.skip_whitespace()
                if cursor.peek() == ",":
                    cursor.pos += 1
                    continue
                cursor.expect(closer)
                break

        cursor.skip_whitespace()
        if not cursor.at_end():
            raise cursor.error("Unexpected content after closing bracket")
        return members

    @staticmethod
    def _correct_keys(members: Members, node: Node) -> Members:
        """
        Decide whether prefixed keys describe the enclosing node or real children.

        The member set is read as attributes plus value of ``node`` only if
        every key is prefixed, at least one ``#`` key is present, every ``#``
        key is ``#<node name>`` and every ``@`` value is a scalar or empty
        bracket pair. Otherwise prefixes are stripped and each member becomes
        a child. Empty keys and bare ``@``/``#`` are dropped, as is a prefixed
        key whose unprefixed twin is also present.
        """
        keys = list(members)
        attributes = (all(_PREFIX_KEY.fullmatch(k) for k in keys)
                      and any(_VALUE_KEY.fullmatch(k) for k in keys))

        for key, (value, _) in members.items():
            if (len(key) > 1 and key.startswith("#") and key != "#" + node.name
                    or len(key) > 1 and key.startswith("@") and not _ATTRIBUTE_VALUE.fullmatch(value)):
                attributes = False

        corrected: Members = {}
        for key, (value, offset) in members.items():
            if key in ("", "@", "#"):
                continue
            if _BARE_PREFIX_KEY.fullmatch(key) and key[1:] in members:
                continue
            if attributes:
                if _EMPTY_BRACKETS.fullmatch(value):
                    value = ""
                corrected[key] = (value, offset)
            else:
                corrected[re.sub(r'[@#]', '', key)] = (value, offset)
        return corrected

    @staticmethod
    def _has_parent_attributes(members: Members) -> bool:
        return bool(members) and all(_PREFIX_KEY.fullmatch(k) for k in members)

    @staticmethod
    def _format_attribute(key: str, value: str) -> Attribute:
        if value == "null":
            value = '""'
        return Attribute(key=key[1:], value=format_value(value))

    @staticmethod
    def _simple_value(match: "re.Match") -> str:
        value = match.group(1) or match.group(2)
        if value is None:
            return '""'
        return format_value(value)
