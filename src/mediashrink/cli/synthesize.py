"""CLI synthesize and shrink commands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from mediashrink.cli.exit_codes import ExitCode
from mediashrink.cli.output import error_exit, fail_with
from mediashrink.errors import MediaShrinkError
from mediashrink.introspector import MediaIdentifier
from mediashrink.media.models import MediaInfo
from mediashrink.synthesis import NullMediaSynthesizer, shrink

logger = logging.getLogger(__name__)


def _synthesizer(ctx: click.Context) -> NullMediaSynthesizer:
    return NullMediaSynthesizer(runner=ctx.obj["runner"], commands=ctx.obj["commands"])


@click.command("synthesize")
@click.argument("info_string", metavar="INFO")
@click.argument("output", type=click.Path(path_type=Path, dir_okay=False))
@click.pass_context
def synthesize_command(ctx: click.Context, info_string: str, output: Path) -> None:
    """Write a placeholder described by INFO to OUTPUT.

    INFO is an info string as printed by `mediashrink identify`.
    """
    try:
        info = MediaInfo.from_string(info_string)
        shrink(info, output, _synthesizer(ctx))
    except (MediaShrinkError, OSError) as e:
        logger.debug("Synthesis of %s failed", info_string, exc_info=True)
        fail_with(e)

    click.echo(f"Wrote {info.kind.value} placeholder to {output}")


@click.command("shrink")
@click.argument("file", type=click.Path(exists=False, path_type=Path))
@click.argument("output", type=click.Path(path_type=Path, dir_okay=False))
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
@click.pass_context
def shrink_command(
    ctx: click.Context,
    file: Path,
    output: Path,
    signature: str | None,
    guess_ext: bool,
) -> None:
    """Identify FILE and write a same-shaped placeholder to OUTPUT.

    OUTPUT may be FILE itself to replace the original in place.
    """
    if not file.is_file():
        error_exit(f"File not found: {file}", ExitCode.TARGET_NOT_FOUND)

    identifier = MediaIdentifier(
        runner=ctx.obj["runner"], commands=ctx.obj["commands"]
    )
    try:
        info = identifier.identify(file, signature, guess_missing_ext=guess_ext)
        shrink(info, output, _synthesizer(ctx))
    except (MediaShrinkError, OSError) as e:
        logger.debug("Shrinking %s failed", file, exc_info=True)
        fail_with(e)

    click.echo(f"{info.to_string()} -> {output}")
