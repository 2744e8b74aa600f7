"""Configuration data models.

This module defines dataclasses for mediashrink configuration options.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ToolsConfig:
    """Configuration for external tools.

    Each entry is an executable name looked up in PATH or a path to a
    specific binary.
    """

    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"
    identify: str = "identify"
    convert: str = "convert"

    # Per-invocation timeout in seconds (None = wait for the tool to exit)
    timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("ffmpeg", "ffprobe", "identify", "convert"):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    # Log level: debug, info, warning, error
    level: str = "warning"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class MediaShrinkConfig:
    """Main configuration container for mediashrink."""

    tools: ToolsConfig = field(default_factory=ToolsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
