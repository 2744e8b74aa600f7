"""mediashrink doctor command.

Reports which external tools are reachable, then round-trips a sample of
every supported format through synthesis and identification.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from mediashrink.cli.exit_codes import ExitCode
from mediashrink.compat import CompatibilityResult, check_compatibility
from mediashrink.introspector import MediaIdentifier
from mediashrink.synthesis import NullMediaSynthesizer
from mediashrink.tools import ToolInfo, detect_all_tools


def _format_status(available: bool) -> str:
    return "✓" if available else "✗"


def _format_version(version: str | None) -> str:
    return version if version else "not found"


def _echo_tools(tools: dict[str, ToolInfo], verbose: bool) -> None:
    click.echo("External Tools:")
    click.echo("-" * 20)
    for name, info in tools.items():
        status = _format_status(info.is_available())
        path_info = f" ({info.path})" if info.path and verbose else ""
        click.echo(f"  {status} {name:<9} {_format_version(info.version)}{path_info}")
        if not info.is_available() and info.status_message:
            click.echo(f"    └─ {info.status_message}")
    click.echo()


def _echo_results(results: list[CompatibilityResult]) -> None:
    click.echo("Format Round Trip:")
    click.echo("-" * 20)
    for result in results:
        status = _format_status(result.success)
        if result.success:
            detail = f"{result.info}  margin {result.duration_margin_ms}ms"
            if result.guessed_ext and result.guessed_ext != result.ext:
                detail += f"  sniffed as {result.guessed_ext}"
        else:
            detail = result.error or "failed"
        click.echo(f"  {status} {result.ext:<5} {detail}")
    click.echo()


@click.command("doctor")
@click.argument("export_dir", type=click.Path(path_type=Path, file_okay=False))
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show resolved tool paths",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON",
)
@click.pass_context
def doctor_command(
    ctx: click.Context, export_dir: Path, verbose: bool, json_output: bool
) -> None:
    """Check external tools and format support.

    Sample files are written to EXPORT_DIR and removed afterwards.

    Exit codes:
      0 - All tools available and every format round-trips
      30 - A required tool is missing
      60 - Some formats failed
    """
    runner = ctx.obj["runner"]
    commands = ctx.obj["commands"]

    tools = detect_all_tools(commands, runner)
    missing = [name for name, info in tools.items() if not info.is_available()]

    results: list[CompatibilityResult] = []
    if not missing:
        results = check_compatibility(
            export_dir,
            identifier=MediaIdentifier(runner=runner, commands=commands),
            synthesizer=NullMediaSynthesizer(runner=runner, commands=commands),
        )
    failed = [r for r in results if not r.success]

    if json_output:
        click.echo(
            json.dumps(
                {
                    "tools": {name: info.to_dict() for name, info in tools.items()},
                    "formats": [r.to_dict() for r in results],
                },
                indent=2,
            )
        )
    else:
        click.echo("mediashrink Health Check")
        click.echo("=" * 40)
        click.echo()
        _echo_tools(tools, verbose)
        if missing:
            click.echo(f"Skipping format checks, missing: {', '.join(missing)}")
        else:
            _echo_results(results)
            click.echo(f"{len(results) - len(failed)}/{len(results)} formats OK")

    if missing:
        sys.exit(ExitCode.TOOL_NOT_AVAILABLE)
    if failed:
        sys.exit(ExitCode.WARNINGS)
