"""Main converter implementation."""

import logging
from typing import Optional
from .types import (
    ConverterInterface,
    ConversionResult,
    ConversionError,
    ErrorType,
    InputFormat
)
from .models import Node
from .readers import JsonReader, XmlReader
from .serializer import TreeSerializer
from .error_handler import ErrorHandler
from .profiler import ConversionProfiler


class DocumentConverter(ConverterInterface):
    """
    Main implementation of the converter interface.

    Reads a JSON-like or XML-like document into a node tree and renders the
    tree in the opposite format. Every call builds its own tree, so a failed
    conversion leaves nothing behind for the next one.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 max_depth: int = 256,
                 enable_profiling: bool = True):
        """
        Initialize the converter.

        Args:
            logger: Optional logger instance
            max_depth: Maximum nesting depth accepted by the readers
            enable_profiling: Collect timing and memory metrics per conversion
        """
        self.logger = logger or logging.getLogger(__name__)
        self.max_depth = max_depth

        self.error_handler = ErrorHandler(self.logger, max_depth=max_depth)
        self.json_reader = JsonReader(self.logger, max_depth=max_depth)
        self.xml_reader = XmlReader(self.logger, max_depth=max_depth)
        self.serializer = TreeSerializer(self.logger)
        self.profiler = ConversionProfiler(self.logger) if enable_profiling else None

    def detect_format(self, text: str) -> InputFormat:
        """Detect the format of ``text`` from its leading character."""
        return self.error_handler.detect_format(text)

    def parse(self, text: str, input_format: InputFormat) -> Node:
        """
        Parse document text into a node tree.

        Args:
            text: Document text
            input_format: Format of the text

        Returns:
            Anonymous root node
        """
        if input_format is InputFormat.JSON:
            return self.json_reader.parse(text)
        return self.xml_reader.parse(text)

    def render(self, root: Node, output_format: InputFormat) -> str:
        """Render a node tree in ``output_format``."""
        if output_format is InputFormat.JSON:
            return self.serializer.to_json(root)
        return self.serializer.to_xml(root)

    def convert(self, text: str, input_format: Optional[InputFormat] = None) -> ConversionResult:
        """
        Convert a document into the opposite format.

        Args:
            text: Document text
            input_format: Format of the text, detected from its first character when omitted

        Returns:
            ConversionResult with the output text or the errors
        """
        validation = self.error_handler.validate_input(text, input_format)
        if not validation.is_valid:
            if any(error.type == ErrorType.EMPTY for error in validation.errors):
                self.logger.info("Input is empty, nothing to convert")
                return ConversionResult(
                    success=True,
                    output="",
                    input_format=input_format,
                    warnings=["Input is empty"]
                )
            for error in validation.errors:
                self.logger.error(f"Validation error ({error.location}): {error.message}")
            return ConversionResult(
                success=False,
                output="",
                input_format=input_format,
                errors=[f"{error.message} ({error.location})" for error in validation.errors],
                warnings=validation.warnings
            )

        try:
            if input_format is None:
                input_format = self.detect_format(text)
            output_format = input_format.opposite

            self.logger.info(f"Converting {input_format.value} to {output_format.value} "
                             f"({len(text)} characters)")

            if self.profiler:
                operation = f"{input_format.value}_to_{output_format.value}"
                with self.profiler.profile_operation(operation, len(text.encode("utf-8"))) as profile:
                    root = self.parse(text, input_format)
                    profile.node_count = root.count_nodes()
                    output = self.render(root, output_format)
                    profile.output_size = len(output.encode("utf-8"))
            else:
                root = self.parse(text, input_format)
                output = self.render(root, output_format)

            return ConversionResult(
                success=True,
                output=output,
                input_format=input_format,
                output_format=output_format,
                warnings=validation.warnings
            )

        except ConversionError as e:
            response = self.error_handler.handle_conversion_error(e)
            return ConversionResult(
                success=False,
                output="",
                input_format=input_format,
                errors=[str(e), response.suggested_action],
                warnings=validation.warnings
            )

    def round_trip(self, text: str, input_format: Optional[InputFormat] = None) -> ConversionResult:
        """
        Convert a document to the opposite format and back again.

        Args:
            text: Document text
            input_format: Format of the text, detected when omitted

        Returns:
            ConversionResult holding text in the original format
        """
        forward = self.convert(text, input_format)
        if not forward.success or not forward.output:
            return forward
        return self.convert(forward.output, forward.output_format)
