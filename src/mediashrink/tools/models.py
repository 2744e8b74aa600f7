"""Data models for external tools.

ToolCommands names the executables mediashrink shells out to; ToolInfo
records what detection found for one of them.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mediashrink.config.models import ToolsConfig


class ToolStatus(Enum):
    """Status of an external tool."""

    AVAILABLE = "available"  # Tool found and version detected
    MISSING = "missing"  # Tool not found in PATH or configured location
    ERROR = "error"  # Tool found but its version could not be read


@dataclass(frozen=True)
class ToolCommands:
    """Executable names (or paths) for each external tool.

    Defaults rely on PATH lookup; configuration can point any of them at a
    specific binary.
    """

    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"
    identify: str = "identify"
    convert: str = "convert"

    @classmethod
    def from_config(cls, tools: ToolsConfig) -> ToolCommands:
        return cls(
            ffmpeg=tools.ffmpeg,
            ffprobe=tools.ffprobe,
            identify=tools.identify,
            convert=tools.convert,
        )

    def items(self) -> list[tuple[str, str]]:
        """(tool name, executable) pairs in declaration order."""
        return [(f.name, getattr(self, f.name)) for f in fields(self)]


@dataclass
class ToolInfo:
    """Detection result for one external tool."""

    name: str
    executable: str
    path: Path | None = None
    version: str | None = None
    status: ToolStatus = ToolStatus.MISSING
    status_message: str | None = None
    detected_at: datetime | None = None

    def is_available(self) -> bool:
        """Return True if the tool is available and usable."""
        return self.status == ToolStatus.AVAILABLE

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "executable": self.executable,
            "path": str(self.path) if self.path else None,
            "version": self.version,
            "status": self.status.value,
            "status_message": self.status_message,
        }
