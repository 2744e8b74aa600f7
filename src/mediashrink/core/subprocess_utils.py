"""Subprocess utilities for external tool invocation.

This module provides the subprocess wrapper used by the tool runner for
consistent timeout handling and logging when invoking ffmpeg, ffprobe,
identify and convert. Output is captured as raw bytes with stderr merged
into stdout, because the extractors parse the combined stream and error
reports quote it verbatim.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - subprocess is required for tool invocation
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def run_command(
    args: list[str | Path],
    timeout: float | None = None,
    **kwargs: Any,
) -> tuple[bytes, int]:
    """Run an external command and capture its combined output.

    Args:
        args: Command and arguments. Path objects are converted to strings.
        timeout: Timeout in seconds, or None to wait indefinitely.
        **kwargs: Additional subprocess.run arguments.

    Returns:
        Tuple of (combined stdout/stderr bytes, returncode).

    Raises:
        FileNotFoundError: If the executable does not exist.
        subprocess.TimeoutExpired: If the command times out. subprocess.run()
            kills the child before raising, so nothing is left running.

    Example:
        >>> output, rc = run_command(["ffprobe", "-version"])
        >>> if rc == 0:
        ...     print(output.decode())
    """
    str_args = [str(arg) for arg in args]
    command_name = Path(str_args[0]).name if str_args else "unknown"

    logger.debug(
        "Executing command: %s",
        " ".join(str_args),
        extra={"command": command_name, "arg_count": len(str_args)},
    )

    start_time = time.monotonic()

    try:
        result = subprocess.run(  # nosec B603 - caller validates args
            str_args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            stdin=subprocess.DEVNULL,
            timeout=timeout,
            **kwargs,
        )
    except subprocess.TimeoutExpired:
        elapsed = time.monotonic() - start_time
        logger.warning(
            "Command timed out after %ss: %s",
            timeout,
            " ".join(str_args[:3]) + ("..." if len(str_args) > 3 else ""),
            extra={
                "command": command_name,
                "timeout_seconds": timeout,
                "elapsed_seconds": round(elapsed, 3),
            },
        )
        raise

    elapsed = time.monotonic() - start_time
    extra = {
        "command": command_name,
        "elapsed_seconds": round(elapsed, 3),
        "returncode": result.returncode,
    }
    if result.returncode != 0:
        extra["output"] = result.stdout or b""
    logger.debug("Command completed", extra=extra)

    return result.stdout or b"", result.returncode
