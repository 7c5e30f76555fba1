"""File writer for converter output."""

import logging
import os
from pathlib import Path
from typing import Optional, Union
from ..types import ConversionError, ErrorType


class FileWriter:
    """Writer for converted documents."""

    def __init__(self, logger: Optional[logging.Logger] = None, encoding: str = "utf-8"):
        """
        Initialize the file writer.

        Args:
            logger: Optional logger instance
            encoding: Text encoding of output files
        """
        self.logger = logger or logging.getLogger(__name__)
        self.encoding = encoding

    def write_document(self, path: Union[str, Path], content: str) -> int:
        """
        Write converted text to a file, creating parent directories.

        Args:
            path: Destination file
            content: Text to write

        Returns:
            Number of bytes written

        Raises:
            ConversionError: If the file cannot be written
        """
        file_path = Path(path)
        self._ensure_directory_exists(file_path.parent)

        data = content if content.endswith("\n") else content + "\n"
        try:
            file_path.write_text(data, encoding=self.encoding)
        except OSError as e:
            raise ConversionError(
                f"Failed to write {file_path}: {str(e)}",
                ErrorType.FILESYSTEM,
                context={"path": str(file_path)}
            )

        size = len(data.encode(self.encoding))
        self.logger.info(f"Wrote {size} bytes to {file_path}")
        return size

    def _ensure_directory_exists(self, directory_path: Path) -> None:
        """
        Ensure that a directory exists, creating it if necessary.

        Args:
            directory_path: Path to directory

        Raises:
            ConversionError: If directory creation fails
        """
        try:
            directory_path.mkdir(parents=True, exist_ok=True)

            if not os.access(directory_path, os.W_OK):
                raise ConversionError(
                    f"Directory {directory_path} is not writable",
                    ErrorType.FILESYSTEM
                )

        except OSError as e:
            raise ConversionError(
                f"Failed to create directory {directory_path}: {str(e)}",
                ErrorType.FILESYSTEM
            )
