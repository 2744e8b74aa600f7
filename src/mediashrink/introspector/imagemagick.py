"""ImageMagick identify based dimension extraction."""

import logging
from pathlib import Path

from mediashrink.introspector.parsers import parse_dimensions
from mediashrink.tools.models import ToolCommands
from mediashrink.tools.runner import SubprocessToolRunner, ToolRunner

logger = logging.getLogger(__name__)

IDENTIFY_FORMAT = "%[fx:w]\n%[fx:h]\n"


class ImageMagickIdentifier:
    """Reads image dimensions with `identify -format`."""

    def __init__(
        self,
        runner: ToolRunner | None = None,
        commands: ToolCommands | None = None,
    ) -> None:
        self._runner = runner or SubprocessToolRunner()
        self._identify = (commands or ToolCommands()).identify

    def get_dimensions(self, path: Path) -> tuple[int, int]:
        result = self._runner.invoke(
            self._identify, ["-format", IDENTIFY_FORMAT, str(path)]
        )
        width, height = parse_dimensions(result.check(target=path))
        logger.debug("identify dimensions for %s: %dx%d", path, width, height)
        return width, height
