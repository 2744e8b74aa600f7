"""Configuration for mediashrink.

Loads settings from CLI flags, MEDIASHRINK_* environment variables and
~/.mediashrink/config.toml, in that order of precedence.
"""

from mediashrink.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from mediashrink.config.env import EnvReader
from mediashrink.config.loader import (
    clear_config_cache,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)
from mediashrink.config.logging_factory import (
    build_logging_config,
    configure_cli_logging,
)
from mediashrink.config.models import LoggingConfig, MediaShrinkConfig, ToolsConfig
from mediashrink.config.toml_parser import TomlParseError, load_toml_file

__all__ = [
    "ConfigBuilder",
    "ConfigSource",
    "EnvReader",
    "LoggingConfig",
    "MediaShrinkConfig",
    "TomlParseError",
    "ToolsConfig",
    "build_logging_config",
    "clear_config_cache",
    "configure_cli_logging",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
    "load_toml_file",
    "source_from_env",
    "source_from_file",
]
