"""External tool plumbing.

- ToolRunner / SubprocessToolRunner / ToolResult: process invocation seam
- ToolCommands: executable names for ffmpeg, ffprobe, identify, convert
- detect_all_tools / detect_tool: availability and version detection
"""

from mediashrink.tools.detection import (
    detect_all_tools,
    detect_tool,
    find_tool,
    parse_version_string,
)
from mediashrink.tools.models import ToolCommands, ToolInfo, ToolStatus
from mediashrink.tools.runner import SubprocessToolRunner, ToolResult, ToolRunner

__all__ = [
    # Runner
    "SubprocessToolRunner",
    "ToolResult",
    "ToolRunner",
    # Models
    "ToolCommands",
    "ToolInfo",
    "ToolStatus",
    # Detection
    "detect_all_tools",
    "detect_tool",
    "find_tool",
    "parse_version_string",
]
