"""Validation utilities for document text."""

import re
from typing import List, Optional, Tuple
from ..types import ValidationResult, ValidationError, ErrorType, InputFormat


_FORMAT_MARKERS = {
    "<": InputFormat.XML,
    "{": InputFormat.JSON,
    "[": InputFormat.JSON,
    '"': InputFormat.JSON,
}

_XML_TAG = re.compile(r'<(/?)([\w.\-]+)[^<>]*?(/?)>|<\?.*?\?>', re.DOTALL)
_JSON_STRING = re.compile(r'"(?:[^"\\]|\\.)*"')


class ValidationUtils:
    """Utility class for quick structural checks before parsing."""

    @staticmethod
    def detect_format(text: str) -> Optional[InputFormat]:
        """
        Detect the document format from its first non-blank character.

        Args:
            text: Document text

        Returns:
            Detected InputFormat, or None if no marker matches
        """
        stripped = text.lstrip()
        if not stripped:
            return None
        return _FORMAT_MARKERS.get(stripped[0])

    @staticmethod
    def validate_document(text: str, input_format: Optional[InputFormat] = None,
                          max_depth: int = 256) -> ValidationResult:
        """
        Validate document text before conversion.

        Args:
            text: Document text to validate
            input_format: Expected format; detected from the text when omitted
            max_depth: Nesting depth above which a warning is issued

        Returns:
            ValidationResult with validation details
        """
        errors = []
        warnings = []

        if not text.strip():
            errors.append(ValidationError(
                type=ErrorType.EMPTY,
                message="Input is empty",
                location="input"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if input_format is None:
            input_format = ValidationUtils.detect_format(text)
        if input_format is None:
            errors.append(ValidationError(
                type=ErrorType.FORMAT,
                message=f"Unable to detect document format from leading character "
                        f"{text.lstrip()[0]!r}",
                location="offset 0"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=warnings)

        if input_format is InputFormat.JSON:
            balance_errors, depth = ValidationUtils._check_json_brackets(text)
        else:
            balance_errors, depth = ValidationUtils._check_xml_tags(text)
        errors.extend(balance_errors)

        if depth > max_depth:
            warnings.append(f"Deep nesting detected (depth: {depth}). "
                            f"Documents deeper than {max_depth} levels are rejected.")

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def _check_json_brackets(text: str) -> Tuple[List[ValidationError], int]:
        """Check bracket balance outside of quoted strings."""
        errors = []
        stack: List[Tuple[str, int]] = []
        max_depth = 0
        pos = 0
        while pos < len(text):
            char = text[pos]
            if char == '"':
                match = _JSON_STRING.match(text, pos)
                if not match:
                    errors.append(ValidationError(
                        type=ErrorType.SYNTAX,
                        message="Unterminated string",
                        location=f"offset {pos}"
                    ))
                    return errors, max_depth
                pos = match.end()
                continue
            if char in "{[":
                stack.append(("}" if char == "{" else "]", pos))
                max_depth = max(max_depth, len(stack))
            elif char in "}]":
                if not stack or stack.pop()[0] != char:
                    errors.append(ValidationError(
                        type=ErrorType.SYNTAX,
                        message=f"Unbalanced {char!r}",
                        location=f"offset {pos}"
                    ))
                    return errors, max_depth
            pos += 1

        for closer, offset in stack:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Bracket opened here is never closed with {closer!r}",
                location=f"offset {offset}"
            ))
        return errors, max_depth

    @staticmethod
    def _check_xml_tags(text: str) -> Tuple[List[ValidationError], int]:
        """Check that every opening tag has a matching closing tag."""
        errors = []
        stack: List[Tuple[str, int]] = []
        max_depth = 0
        for match in _XML_TAG.finditer(text):
            if match.group(2) is None or match.group(3):
                continue
            name = match.group(2)
            if not match.group(1):
                stack.append((name, match.start()))
                max_depth = max(max_depth, len(stack))
            elif not stack or stack[-1][0] != name:
                errors.append(ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Unexpected closing tag </{name}>",
                    location=f"offset {match.start()}"
                ))
                return errors, max_depth
            else:
                stack.pop()

        for name, offset in stack:
            errors.append(ValidationError(
                type=ErrorType.SYNTAX,
                message=f"Element <{name}> is never closed",
                location=f"offset {offset}"
            ))
        return errors, max_depth
