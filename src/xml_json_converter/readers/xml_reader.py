"""Reader for the XML-like input format."""

import logging
import re
from typing import List, Optional
from ..models import Node
from ..types import (
    Attribute,
    ConversionError,
    DocumentReaderInterface,
    ErrorType,
    XmlSyntaxError
)


_NAME = r'\w[\w.\-]*'
# Values are re-emitted in double quotes, so neither quote style may hold a '"'.
_VALUE = r'"[^"]*"|\'[^\'"]*\''

_OPEN_TAG = re.compile(
    r'<(' + _NAME + r')((?:\s+' + _NAME + r'\s*=\s*(?:' + _VALUE + r'))*)\s*(/?)>'
)
_CLOSE_TAG = re.compile(r'</(' + _NAME + r')\s*>')
_ATTRIBUTE = re.compile(r'(' + _NAME + r')\s*=\s*(' + _VALUE + r')')
_PROLOG = re.compile(r'\s*<\?.*?\?>', re.DOTALL)


class XmlReader(DocumentReaderInterface):
    """
    Recursive reader for the XML-like format.

    Each opening tag is paired with its own closing tag through the call
    stack, so an element may contain descendants with the same name.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, max_depth: int = 256):
        """
        Initialize the XML reader.

        Args:
            logger: Optional logger instance
            max_depth: Maximum nesting depth accepted before giving up
        """
        self.logger = logger or logging.getLogger(__name__)
        self.max_depth = max_depth

    def parse(self, text: str) -> Node:
        """
        Parse XML-like text into a node tree.

        Args:
            text: Document text

        Returns:
            Anonymous root node whose children are the top-level elements

        Raises:
            XmlSyntaxError: If tags are malformed, mismatched or unterminated
            ConversionError: If the document nests deeper than ``max_depth``
        """
        root = Node("")
        pos = 0
        prolog = _PROLOG.match(text)
        if prolog:
            pos = prolog.end()

        pos = self._parse_siblings(root, text, pos, 0)
        if pos < len(text):
            raise XmlSyntaxError("Closing tag without an opening tag", pos, text[pos:pos + 20])

        self.logger.debug(f"Parsed XML into {root.count_nodes()} nodes")
        return root

    def _parse_siblings(self, parent: Node, text: str, pos: int, depth: int) -> int:
        """Parse consecutive elements into ``parent``; stop at a closing tag or the end."""
        while True:
            next_tag = text.find("<", pos)
            if next_tag == -1:
                next_tag = len(text)
            stray = text[pos:next_tag].strip()
            if stray:
                raise XmlSyntaxError("Unexpected text between elements", pos, stray[:20])
            pos = next_tag
            if pos >= len(text) or text.startswith("</", pos):
                return pos
            pos = self._parse_element(parent, text, pos, depth + 1)

    def _parse_element(self, parent: Node, text: str, pos: int, depth: int) -> int:
        if depth > self.max_depth:
            raise ConversionError(
                f"XML nesting exceeds maximum depth of {self.max_depth}",
                ErrorType.DEPTH,
                context={"offset": pos, "path": parent.path}
            )

        match = _OPEN_TAG.match(text, pos)
        if not match:
            raise XmlSyntaxError("Malformed opening tag", pos, text[pos:pos + 20])
        name = match.group(1)
        attributes = self._parse_attributes(match.group(2))
        pos = match.end()

        if match.group(3):
            element = Node(name, "null", parent=parent)
        else:
            next_tag = text.find("<", pos)
            if next_tag == -1:
                raise XmlSyntaxError(f"Unterminated element <{name}>", match.start(), match.group())
            if text.startswith("</", next_tag):
                element = Node(name, text[pos:next_tag], parent=parent)
                pos = next_tag
            else:
                element = Node(name, "", parent=parent)
                pos = self._parse_siblings(element, text, pos, depth)
            pos = self._expect_closing_tag(name, text, pos)

        for attribute in attributes:
            element.add_attribute(attribute)
        parent.add_child(element)
        return pos

    @staticmethod
    def _expect_closing_tag(name: str, text: str, pos: int) -> int:
        closing = _CLOSE_TAG.match(text, pos)
        if not closing:
            raise XmlSyntaxError(f"Expected </{name}>", pos, text[pos:pos + 20])
        if closing.group(1) != name:
            raise XmlSyntaxError(
                f"Mismatched closing tag </{closing.group(1)}> for <{name}>",
                pos,
                closing.group()
            )
        return closing.end()

    @staticmethod
    def _parse_attributes(raw: Optional[str]) -> List[Attribute]:
        """Normalize ``name = 'value'`` pairs to double-quoted attributes."""
        if not raw:
            return []
        return [
            Attribute(key=match.group(1), value=f'"{match.group(2)[1:-1]}"')
            for match in _ATTRIBUTE.finditer(raw)
        ]
