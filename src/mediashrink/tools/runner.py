"""Narrow interface for running external tools.

Everything that talks to ffmpeg, ffprobe or ImageMagick goes through a
ToolRunner. The production runner spawns processes; tests substitute a
runner that replays scripted output, so the parsing and decision logic can
be exercised without the tools installed.
"""

from __future__ import annotations

import logging
import subprocess  # nosec B404 - TimeoutExpired is raised by run_command
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from mediashrink.core.subprocess_utils import run_command
from mediashrink.errors import ToolInvocationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool invocation."""

    tool: str
    args: tuple[str, ...]
    output: bytes
    """Combined stdout and stderr."""
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def check(self, target: Path | str | None = None) -> bytes:
        """Return the output, or raise if the tool exited non-zero.

        Raises:
            ToolInvocationError: If returncode is not zero.
        """
        if not self.ok:
            raise ToolInvocationError(
                self.tool, self.returncode, output=self.output, target=target
            )
        return self.output


class ToolRunner(Protocol):
    """Protocol for external process invocation."""

    def invoke(self, tool: str, args: Sequence[str]) -> ToolResult:
        """Run tool with args and capture its combined output.

        Args:
            tool: Executable name or path.
            args: Arguments, not including the executable.

        Returns:
            ToolResult with output and exit status.

        Raises:
            ToolInvocationError: If the process could not be started.
        """
        ...


class SubprocessToolRunner:
    """ToolRunner backed by subprocess.run."""

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize the runner.

        Args:
            timeout: Per-invocation timeout in seconds; None waits forever.
        """
        self._timeout = timeout

    def invoke(self, tool: str, args: Sequence[str]) -> ToolResult:
        argv = [tool, *args]
        try:
            output, returncode = run_command(argv, timeout=self._timeout)
        except subprocess.TimeoutExpired as e:
            raise ToolInvocationError(
                tool,
                None,
                output=e.output or b"",
                detail=f"timed out after {e.timeout}s",
            ) from e
        except OSError as e:
            raise ToolInvocationError(tool, None, detail=str(e)) from e

        if returncode != 0:
            logger.debug("%s exited with status %d", tool, returncode)
        return ToolResult(
            tool=tool, args=tuple(args), output=output, returncode=returncode
        )
