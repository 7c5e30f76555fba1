"""File reader for converter input documents."""

import logging
from pathlib import Path
from typing import Optional, Union
from ..types import ConversionError, ErrorType


class FileReader:
    """
    Reader turning a document file into a single line of text.

    Each line is stripped of surrounding whitespace and the lines are
    concatenated, which is the layout the readers expect.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, encoding: str = "utf-8"):
        """
        Initialize the file reader.

        Args:
            logger: Optional logger instance
            encoding: Text encoding of input files
        """
        self.logger = logger or logging.getLogger(__name__)
        self.encoding = encoding

    def read_document(self, path: Union[str, Path]) -> str:
        """
        Read and normalize a document file.

        Args:
            path: File to read

        Returns:
            Concatenated, per-line stripped text

        Raises:
            ConversionError: If the file cannot be read
        """
        file_path = Path(path)
        try:
            with file_path.open("r", encoding=self.encoding) as handle:
                text = "".join(line.strip() for line in handle)
        except (OSError, UnicodeDecodeError) as e:
            raise ConversionError(
                f"Failed to read {file_path}: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"path": str(file_path)}
            )

        self.logger.debug(f"Read {len(text)} characters from {file_path}")
        return text
