"""Core type definitions for the XML/JSON converter."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Node


class InputFormat(Enum):
    """Enumeration of supported document formats."""
    JSON = "json"
    XML = "xml"

    @property
    def opposite(self) -> "InputFormat":
        """Format a document of this format converts into."""
        return InputFormat.XML if self is InputFormat.JSON else InputFormat.JSON


class ErrorType(Enum):
    """Enumeration of error types."""
    EMPTY = "empty"
    FORMAT = "format"
    SYNTAX = "syntax"
    DEPTH = "depth"
    FILESYSTEM = "filesystem"


_LEGACY_ATTRIBUTE = re.compile(r'^\s*([^=\s]*)\s*=\s*(.*?)\s*$', re.DOTALL)


@dataclass(frozen=True)
class Attribute:
    """
    A single attribute of a node.

    The value is kept in its quoted form (``"30"``), the same way node
    values are stored, so JSON rendering can emit it verbatim.
    """
    key: str
    value: str

    @classmethod
    def parse(cls, text: str) -> "Attribute":
        """Build an attribute from the ``key = "value"`` form."""
        match = _LEGACY_ATTRIBUTE.match(text)
        if not match or not match.group(1):
            raise ValueError(f"Malformed attribute: {text!r}")
        value = match.group(2)
        if len(value) < 2 or not (value.startswith('"') and value.endswith('"')):
            value = f'"{value}"'
        return cls(key=match.group(1), value=value)

    def __str__(self) -> str:
        return f"{self.key} = {self.value}"


@dataclass
class ConversionResult:
    """Result of a single conversion."""
    success: bool
    output: str
    input_format: Optional[InputFormat] = None
    output_format: Optional[InputFormat] = None
    errors: Optional[List[str]] = None
    warnings: List[str] = field(default_factory=list)


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


@dataclass
class ErrorResponse:
    """Response for error handling."""
    can_recover: bool
    suggested_action: str
    partial_results: Optional[Any] = None


class ConversionError(Exception):
    """Custom exception for conversion errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class DocumentSyntaxError(ConversionError):
    """Raised when document text does not match the supported grammar."""

    def __init__(self, message: str, offset: int, fragment: str = ""):
        super().__init__(
            f"{message} at offset {offset}" + (f" near {fragment!r}" if fragment else ""),
            ErrorType.SYNTAX,
            context={"offset": offset, "fragment": fragment}
        )
        self.offset = offset
        self.fragment = fragment


class JsonSyntaxError(DocumentSyntaxError):
    """Grammar mismatch in JSON-like input."""


class XmlSyntaxError(DocumentSyntaxError):
    """Grammar mismatch in XML-like input."""


# Abstract base classes for interfaces

class DocumentReaderInterface(ABC):
    """Abstract interface for document readers."""

    @abstractmethod
    def parse(self, text: str) -> "Node":
        """Parse document text into a node tree rooted at an anonymous node."""
        pass


class ConverterInterface(ABC):
    """Abstract interface for the document converter."""

    @abstractmethod
    def convert(self, text: str, input_format: Optional[InputFormat] = None) -> ConversionResult:
        """Convert document text into the opposite format."""
        pass
