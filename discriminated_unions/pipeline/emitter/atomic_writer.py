"""
Atomic file writer for generated sources.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..config import OutputMode

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, validate_csharp: Callable[[str], None] | None = None, mode: OutputMode = OutputMode.ERROR_IF_EXISTS):
        """Initialize the atomic writer.

        Args:
            validate_csharp: Validation function for C# code, raising on invalid input
            mode: How to handle an existing target file
        """
        self._validate_csharp = validate_csharp
        self.mode = mode

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            FileExistsError: If the file exists and the mode does not allow overwriting
            EmissionError: If validation fails
            OSError: If file operations fail
        """
        if self.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)

            if validate and self._validate_csharp is not None:
                self._validate_csharp(content)

            temp_path.replace(path)
        except Exception:
            # Clean up temp file on any error
            temp_path.unlink(missing_ok=True)
            raise

        logger.info("Wrote %s", path)
