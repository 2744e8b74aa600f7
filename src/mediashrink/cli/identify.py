"""CLI identify and decode commands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from mediashrink.cli.exit_codes import ExitCode
from mediashrink.cli.output import error_exit, fail_with
from mediashrink.errors import MediaShrinkError
from mediashrink.introspector import MediaIdentifier
from mediashrink.media.models import MediaInfo

logger = logging.getLogger(__name__)


def format_info_text(info: MediaInfo) -> str:
    """Human-readable multi-line rendering of a MediaInfo."""
    lines = [
        f"Kind:      {info.kind.value}",
        f"Extension: {info.ext}",
        f"Width:     {info.width}",
        f"Height:    {info.height}",
        f"Duration:  {info.duration} ms",
        f"Signature: {info.signature}",
    ]
    return "\n".join(lines)


def format_info_json(info: MediaInfo) -> str:
    data = info.to_dict()
    data["info"] = info.to_string()
    return json.dumps(data, indent=2)


@click.command("identify")
@click.argument("file", type=click.Path(exists=False, path_type=Path))
@click.option(
    "--signature",
    "-s",
    default=None,
    help="Hex signature to embed (default: MD5 of the file).",
)
@click.option(
    "--guess-ext",
    is_flag=True,
    help="Sniff the content when the file has no known extension.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text)",
)
@click.pass_context
def identify_command(
    ctx: click.Context,
    file: Path,
    signature: str | None,
    guess_ext: bool,
    output_format: str,
) -> None:
    """Identify a media file and print its info string.

    FILE is the path to the image, audio or video file to identify.
    """
    json_output = output_format == "json"
    if not file.is_file():
        error_exit(f"File not found: {file}", ExitCode.TARGET_NOT_FOUND, json_output)

    identifier = MediaIdentifier(
        runner=ctx.obj["runner"], commands=ctx.obj["commands"]
    )
    try:
        info = identifier.identify(file, signature, guess_missing_ext=guess_ext)
    except (MediaShrinkError, OSError) as e:
        logger.debug("Identification of %s failed", file, exc_info=True)
        fail_with(e, json_output)

    if json_output:
        click.echo(format_info_json(info))
    else:
        click.echo(info.to_string())


@click.command("decode")
@click.argument("info_string", metavar="INFO")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text)",
)
def decode_command(info_string: str, output_format: str) -> None:
    """Decode an info string such as 640x480x0x3f2a9c.png."""
    json_output = output_format == "json"
    try:
        info = MediaInfo.from_string(info_string)
    except MediaShrinkError as e:
        fail_with(e, json_output)

    if json_output:
        click.echo(format_info_json(info))
    else:
        click.echo(format_info_text(info))
