"""Error handling implementation for the XML/JSON converter."""

import logging
from typing import Optional
from .types import (
    ValidationResult,
    ValidationError,
    ErrorResponse,
    ConversionError,
    DocumentSyntaxError,
    ErrorType,
    InputFormat
)
from .utils.validation import ValidationUtils


class ErrorHandler:
    """
    Error handler for converter operations.

    Validates input before conversion and turns conversion errors into
    responses the caller can report.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, max_depth: int = 256):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance for error reporting
            max_depth: Nesting depth above which validation warns
        """
        self.logger = logger or logging.getLogger(__name__)
        self.max_depth = max_depth

    def validate_input(self, input_data: str,
                       input_format: Optional[InputFormat] = None) -> ValidationResult:
        """
        Validate input document text.

        Args:
            input_data: Document text to validate
            input_format: Expected format, detected when omitted

        Returns:
            ValidationResult with validation details
        """
        try:
            return ValidationUtils.validate_document(input_data, input_format, self.max_depth)
        except Exception as e:
            self.logger.error(f"Unexpected error during input validation: {e}")
            return ValidationResult(
                is_valid=False,
                errors=[ValidationError(
                    type=ErrorType.SYNTAX,
                    message=f"Validation failed with unexpected error: {str(e)}",
                    location="input"
                )],
                warnings=[]
            )

    def detect_format(self, input_data: str) -> InputFormat:
        """
        Detect the input format or fail.

        Args:
            input_data: Document text

        Returns:
            Detected InputFormat

        Raises:
            ConversionError: If the leading character matches no supported format
        """
        detected = ValidationUtils.detect_format(input_data)
        if detected is None:
            stripped = input_data.lstrip()
            raise ConversionError(
                f"Unsupported input: expected '<' or '{{' but found {stripped[:1]!r}",
                ErrorType.EMPTY if not stripped else ErrorType.FORMAT,
                context={"leading": stripped[:20]}
            )
        return detected

    def handle_conversion_error(self, error: ConversionError) -> ErrorResponse:
        """
        Handle conversion errors and provide suggestions.

        Args:
            error: ConversionError to handle

        Returns:
            ErrorResponse with recovery information
        """
        self.logger.error(f"Conversion error: {error.error_type.value} - {error}")

        if error.error_type == ErrorType.EMPTY:
            return ErrorResponse(
                can_recover=True,
                suggested_action="Input is empty. Nothing to convert."
            )
        elif error.error_type == ErrorType.FORMAT:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Input must start with '<' for XML or '{' for JSON. "
                               "Pass the format explicitly if the document has a preamble.",
                partial_results=error.context.get("leading") if error.context else None
            )
        elif error.error_type == ErrorType.SYNTAX:
            return self._handle_syntax_error(error)
        elif error.error_type == ErrorType.DEPTH:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Document nests too deeply. Raise the maximum depth "
                               "or flatten the document.",
                partial_results=error.context.get("path") if error.context else None
            )
        else:
            return ErrorResponse(
                can_recover=False,
                suggested_action="Check that the file exists and is readable, "
                               "and that the output location is writable."
            )

    def _handle_syntax_error(self, error: ConversionError) -> ErrorResponse:
        """Handle grammar mismatches."""
        location = ""
        if isinstance(error, DocumentSyntaxError):
            location = f" at offset {error.offset}"
        return ErrorResponse(
            can_recover=False,
            suggested_action=f"Fix the document{location}. Only simple scalars, nested "
                           "objects, arrays and attribute-prefixed keys are supported.",
            partial_results=error.context.get("fragment") if error.context else None
        )
