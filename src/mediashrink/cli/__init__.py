"""CLI module for mediashrink."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from mediashrink.config import MediaShrinkConfig, TomlParseError, get_config
from mediashrink.tools.models import ToolCommands
from mediashrink.tools.runner import SubprocessToolRunner

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    config: MediaShrinkConfig,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from CLI options, once per process."""
    global _logging_configured
    if _logging_configured:
        return

    from mediashrink.config.logging_factory import configure_cli_logging

    configure_cli_logging(
        config, level=log_level, file=log_file, json_format=log_json
    )
    _logging_configured = True


def _load_config(config_path: Path | None) -> MediaShrinkConfig:
    from mediashrink.cli.exit_codes import ExitCode
    from mediashrink.cli.output import error_exit

    try:
        return get_config(config_path=config_path, strict=config_path is not None)
    except (TomlParseError, ValueError) as e:
        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR)


@click.group()
@click.version_option(package_name="mediashrink")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.mediashrink/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: warning).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """mediashrink - Identify media files and replace them with tiny stand-ins."""
    ctx.ensure_object(dict)

    config = _load_config(config_path)
    _configure_logging(config, log_level, log_file, log_json)

    ctx.obj["config"] = config
    # Preserve runner/commands passed in by tests
    if "commands" not in ctx.obj:
        ctx.obj["commands"] = ToolCommands.from_config(config.tools)
    if "runner" not in ctx.obj:
        ctx.obj["runner"] = SubprocessToolRunner(timeout=config.tools.timeout_seconds)

    logger.debug(
        "mediashrink starting",
        extra={"command": ctx.invoked_subcommand, "config_path": config_path},
    )


# Defer import to avoid circular dependency
def _register_commands():
    from mediashrink.cli.doctor import doctor_command
    from mediashrink.cli.identify import decode_command, identify_command
    from mediashrink.cli.synthesize import shrink_command, synthesize_command

    main.add_command(identify_command)
    main.add_command(decode_command)
    main.add_command(synthesize_command)
    main.add_command(shrink_command)
    main.add_command(doctor_command)


_register_commands()
