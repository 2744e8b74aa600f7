"""Apply the global --log-* switches on top of the loaded configuration."""

from __future__ import annotations

import dataclasses
from pathlib import Path

from mediashrink.config.models import LoggingConfig, MediaShrinkConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    json_format: bool = False,
) -> LoggingConfig:
    """Return base with the command-line switches that were given applied.

    Switches left unset keep the configured value. ``--log-json`` can only
    turn JSON output on, so a config file asking for JSON keeps it.

    Raises:
        ValueError: If level is not a known level name.
    """
    overrides: dict[str, object] = {}
    if level is not None:
        overrides["level"] = level
    if file is not None:
        overrides["file"] = file
    if json_format:
        overrides["format"] = "json"
    # replace() reruns __post_init__ validation
    return dataclasses.replace(base, **overrides)


def configure_cli_logging(
    config: MediaShrinkConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    json_format: bool = False,
) -> LoggingConfig:
    """Install handlers for config.logging plus the command-line switches.

    Returns:
        The LoggingConfig that was applied.
    """
    from mediashrink.logging import configure_logging

    applied = build_logging_config(
        config.logging, level=level, file=file, json_format=json_format
    )
    configure_logging(applied)
    return applied
