"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (MEDIASHRINK_*)
3. Config file (~/.mediashrink/config.toml)
4. Default values

Environment variables:
- MEDIASHRINK_FFMPEG_PATH: ffmpeg executable
- MEDIASHRINK_FFPROBE_PATH: ffprobe executable
- MEDIASHRINK_IDENTIFY_PATH: ImageMagick identify executable
- MEDIASHRINK_CONVERT_PATH: ImageMagick convert executable
- MEDIASHRINK_TOOL_TIMEOUT: Seconds before a tool invocation is abandoned
- MEDIASHRINK_LOG_LEVEL / MEDIASHRINK_LOG_FILE / MEDIASHRINK_LOG_FORMAT
- MEDIASHRINK_CONFIG_PATH: Config file (overrides default location)
- MEDIASHRINK_DATA_DIR: Data directory (overrides ~/.mediashrink/)
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from mediashrink.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mediashrink.config.env import EnvReader
from mediashrink.config.models import MediaShrinkConfig
from mediashrink.config.toml_parser import load_toml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".mediashrink"
CONFIG_FILE_NAME = "config.toml"

# path -> (parsed dict, mtime)
_config_cache: dict[Path, tuple[dict, float]] = {}
_config_cache_lock = threading.Lock()


def get_data_dir() -> Path:
    """Get the mediashrink data directory.

    Can be overridden by MEDIASHRINK_DATA_DIR environment variable.
    Supports tilde expansion.

    Returns:
        Path to the data directory (~/.mediashrink/ by default).
    """
    env_path = os.environ.get("MEDIASHRINK_DATA_DIR")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_DIR


def get_default_config_path() -> Path:
    """Get the default config file path.

    MEDIASHRINK_CONFIG_PATH wins; otherwise config.toml in the data
    directory.
    """
    env_path = os.environ.get("MEDIASHRINK_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return get_data_dir() / CONFIG_FILE_NAME


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Results are cached with mtime-based invalidation: a modified file is
    re-read on the next call. Use clear_config_cache() to force a reload.

    Thread-safe: a lock protects the cache.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise TomlParseError on parse failures.
                If False (default), return empty dict on errors.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        TomlParseError: When strict=True and the file cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        result = load_toml_file(path, strict=strict)
        if result:
            logger.debug("Loaded config from %s", path)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    ffmpeg_path: str | None = None,
    ffprobe_path: str | None = None,
    identify_path: str | None = None,
    convert_path: str | None = None,
    tool_timeout: float | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> MediaShrinkConfig:
    """Get mediashrink configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides MEDIASHRINK_CONFIG_PATH).
        ffmpeg_path: CLI override for ffmpeg.
        ffprobe_path: CLI override for ffprobe.
        identify_path: CLI override for identify.
        convert_path: CLI override for convert.
        tool_timeout: CLI override for the tool timeout in seconds.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise TomlParseError on config file parse failures.

    Returns:
        MediaShrinkConfig with merged configuration.

    Raises:
        TomlParseError: When strict=True and the config file cannot be parsed.
        ValueError: When a merged value is invalid.
    """
    reader = env_reader or EnvReader()

    file_config = load_config_file(config_path, strict=strict)

    cli_source = ConfigSource(
        ffmpeg_path=ffmpeg_path,
        ffprobe_path=ffprobe_path,
        identify_path=identify_path,
        convert_path=convert_path,
        tool_timeout=tool_timeout,
    )

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    builder.apply(cli_source, source_name="cli")
    return builder.build()
