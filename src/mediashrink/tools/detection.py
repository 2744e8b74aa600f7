"""External tool detection and version parsing.

Used by the doctor command to report which of ffmpeg, ffprobe, identify and
convert are reachable before running the compatibility check.
"""

from __future__ import annotations

import logging
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path

from mediashrink.errors import ToolInvocationError
from mediashrink.tools.models import ToolCommands, ToolInfo, ToolStatus
from mediashrink.tools.runner import SubprocessToolRunner, ToolRunner

logger = logging.getLogger(__name__)

# First line patterns of `<tool> -version`
_VERSION_PATTERNS: dict[str, str] = {
    "ffmpeg": r"ffmpeg version (\S+)",
    "ffprobe": r"ffprobe version (\S+)",
    "identify": r"Version: ImageMagick (\S+)",
    "convert": r"Version: ImageMagick (\S+)",
}


def parse_version_string(version_str: str) -> tuple[int, ...] | None:
    """Parse a version string into a comparable tuple.

    - "6.1.1" -> (6, 1, 1)
    - "n6.1.1" -> (6, 1, 1)  (ffmpeg nightlies)
    - "6.9.11-60" -> (6, 9, 11)  (ImageMagick)

    Returns:
        Tuple of version components, or None if parsing fails.
    """
    if not version_str:
        return None

    version_str = version_str.lstrip("nv")
    match = re.match(r"(\d+(?:\.\d+)*)", version_str)
    if not match:
        return None
    return tuple(int(p) for p in match.group(1).split("."))


def find_tool(executable: str) -> Path | None:
    """Resolve an executable name or path.

    Args:
        executable: Bare name looked up in PATH, or a path to a binary.

    Returns:
        Path to the executable, or None if not found.
    """
    candidate = Path(executable).expanduser()
    if candidate.is_absolute() or candidate.parent != Path("."):
        if candidate.is_file():
            return candidate
        logger.warning("Configured path for %s is not a file", executable)
        return None

    which_result = shutil.which(executable)
    if which_result:
        return Path(which_result)
    return None


def detect_tool(
    name: str, executable: str, runner: ToolRunner | None = None
) -> ToolInfo:
    """Detect one tool and its version.

    Args:
        name: Logical tool name (ffmpeg, ffprobe, identify, convert).
        executable: Name or path to run.
        runner: Runner used to query the version.

    Returns:
        ToolInfo describing what was found.
    """
    runner = runner or SubprocessToolRunner(timeout=10)
    info = ToolInfo(name=name, executable=executable)
    info.detected_at = datetime.now(timezone.utc)

    path = find_tool(executable)
    if path is None:
        info.status = ToolStatus.MISSING
        info.status_message = f"{executable} not found in PATH"
        return info
    info.path = path

    try:
        result = runner.invoke(str(path), ["-version"])
    except ToolInvocationError as e:
        info.status = ToolStatus.ERROR
        info.status_message = str(e)
        return info

    text = result.output.decode("utf-8", errors="replace")
    if not result.ok:
        info.status = ToolStatus.ERROR
        info.status_message = f"Failed to get {name} version: {text.strip()}"
        return info

    pattern = _VERSION_PATTERNS.get(name)
    version_match = re.search(pattern, text) if pattern else None
    if version_match:
        info.version = version_match.group(1)
        if parse_version_string(info.version) is None:
            logger.warning(
                "Could not parse %s version '%s' into comparable tuple",
                name,
                info.version,
            )

    info.status = ToolStatus.AVAILABLE
    return info


def detect_all_tools(
    commands: ToolCommands, runner: ToolRunner | None = None
) -> dict[str, ToolInfo]:
    """Detect every configured tool, keyed by logical name."""
    return {
        name: detect_tool(name, executable, runner)
        for name, executable in commands.items()
    }
