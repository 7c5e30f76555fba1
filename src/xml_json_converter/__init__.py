"""
XML/JSON Converter - Bidirectional document conversion tool.

Converts XML-like documents to JSON-like documents and back through a
shared node tree.
"""

from .converter import DocumentConverter
from .models import Node
from .readers import JsonReader, XmlReader
from .serializer import TreeSerializer
from .types import (
    Attribute,
    ConversionError,
    ConversionResult,
    InputFormat,
    JsonSyntaxError,
    XmlSyntaxError
)

__version__ = "1.0.0"
__all__ = [
    "DocumentConverter",
    "Node",
    "JsonReader",
    "XmlReader",
    "TreeSerializer",
    "Attribute",
    "ConversionError",
    "ConversionResult",
    "InputFormat",
    "JsonSyntaxError",
    "XmlSyntaxError",
]
