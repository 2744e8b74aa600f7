"""TOML config file loading."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


class TomlParseError(Exception):
    """Raised when a config file exists but is not valid TOML."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to parse {path}: {message}")


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into a dictionary.

    Raises:
        tomllib.TOMLDecodeError: If content is not valid TOML.
    """
    return tomllib.loads(content)


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load a TOML file.

    Args:
        path: File to read. A missing file yields an empty dict.
        strict: Raise TomlParseError on unreadable or invalid files instead
            of logging a warning and returning an empty dict.

    Raises:
        TomlParseError: When strict=True and the file cannot be parsed.
    """
    if not path.exists():
        return {}

    try:
        return parse_toml(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise TomlParseError(path, str(e)) from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}
