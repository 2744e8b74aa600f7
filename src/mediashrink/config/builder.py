"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building MediaShrinkConfig by
composing multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from mediashrink.config.env import EnvReader
from mediashrink.config.models import LoggingConfig, MediaShrinkConfig, ToolsConfig

logger = logging.getLogger(__name__)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Tools
    ffmpeg_path: str | None = None
    ffprobe_path: str | None = None
    identify_path: str | None = None
    convert_path: str | None = None
    tool_timeout: float | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds MediaShrinkConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config), source_name="file")
        builder.apply(source_from_env(reader), source_name="env")
        builder.apply(cli_source, source_name="cli")
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._origins: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded for each value this source sets.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                self._origins[field_obj.name] = source_name

    def origin_of(self, key: str) -> str:
        """Return which source supplied a value ("default" if none did)."""
        return self._origins.get(key, "default")

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> MediaShrinkConfig:
        """Build the final MediaShrinkConfig with defaults for unset values.

        Raises:
            ValueError: If a layered value fails model validation.
        """
        defaults = ToolsConfig()
        tools = ToolsConfig(
            ffmpeg=self._get("ffmpeg_path", defaults.ffmpeg),
            ffprobe=self._get("ffprobe_path", defaults.ffprobe),
            identify=self._get("identify_path", defaults.identify),
            convert=self._get("convert_path", defaults.convert),
            timeout_seconds=self._get("tool_timeout", None),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "warning"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        logger.debug(
            "Built configuration",
            extra={"origins": dict(self._origins)},
        )
        return MediaShrinkConfig(tools=tools, logging=logging_config)


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from parsed TOML config file.

    Args:
        file_config: Parsed configuration dictionary from TOML file.

    Returns:
        ConfigSource with values from the config file.
    """
    tools = file_config.get("tools", {})
    logging_conf = file_config.get("logging", {})

    log_file_str = logging_conf.get("file")
    log_file = Path(log_file_str).expanduser() if log_file_str else None

    timeout = tools.get("timeout_seconds")

    return ConfigSource(
        ffmpeg_path=_optional_str(tools.get("ffmpeg")),
        ffprobe_path=_optional_str(tools.get("ffprobe")),
        identify_path=_optional_str(tools.get("identify")),
        convert_path=_optional_str(tools.get("convert")),
        tool_timeout=float(timeout) if timeout is not None else None,
        logging_level=logging_conf.get("level"),
        logging_file=log_file,
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from MEDIASHRINK_* environment variables."""
    return ConfigSource(
        ffmpeg_path=_optional_str(reader.get_str("MEDIASHRINK_FFMPEG_PATH")),
        ffprobe_path=_optional_str(reader.get_str("MEDIASHRINK_FFPROBE_PATH")),
        identify_path=_optional_str(reader.get_str("MEDIASHRINK_IDENTIFY_PATH")),
        convert_path=_optional_str(reader.get_str("MEDIASHRINK_CONVERT_PATH")),
        tool_timeout=reader.get_float("MEDIASHRINK_TOOL_TIMEOUT"),
        logging_level=reader.get_str("MEDIASHRINK_LOG_LEVEL"),
        logging_file=reader.get_path("MEDIASHRINK_LOG_FILE"),
        logging_format=reader.get_str("MEDIASHRINK_LOG_FORMAT"),
        logging_include_stderr=reader.get_bool("MEDIASHRINK_LOG_INCLUDE_STDERR"),
    )
