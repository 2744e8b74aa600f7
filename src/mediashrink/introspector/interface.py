"""Extractor interfaces for media metadata."""

from pathlib import Path
from typing import Protocol


class DimensionProbe(Protocol):
    """Protocol for anything that can report pixel dimensions of a file."""

    def get_dimensions(self, path: Path) -> tuple[int, int]:
        """Return (width, height) of the file.

        Raises:
            ToolInvocationError: If the underlying tool fails.
            ToolOutputUnparsableError: If its output has the wrong shape.
        """
        ...


class DurationProbe(Protocol):
    """Protocol for anything that can report the playback duration of a file."""

    def get_duration(self, path: Path) -> int:
        """Return the duration of the file in milliseconds.

        Raises:
            ToolInvocationError: If the underlying tool fails.
            ToolOutputUnparsableError: If its output has the wrong shape.
        """
        ...
