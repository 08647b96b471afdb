"""
Shared CLI plumbing for the sync and link commands.

Both commands exit with status 1 for ``--help``, unknown options, and
invalid or missing options, printing the problems and the usage text.
"""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, NoReturn

import typer
from typer.core import TyperCommand

from hcpmirror.config.loader import Config, load_config
from hcpmirror.config.options import RunOptions, Tool, resolve_options
from hcpmirror.exceptions import ConfigurationError
from hcpmirror.sync.types import RunSummary
from hcpmirror.utils.logging import get_logger, setup_logging_from_config

EXIT_OK = 0
EXIT_FAILURE = 1

logger = get_logger("hcpmirror.cli")


def show_usage(ctx: typer.Context) -> None:
    """Print the command's help text."""
    text = ctx.get_help()
    if text:
        typer.echo(text)


def fail(ctx: typer.Context, errors: list[str]) -> NoReturn:
    """Report configuration errors, show usage, and exit 1."""
    for error in errors:
        typer.echo(f"{ctx.command_path}: {error}", err=True)
    show_usage(ctx)
    raise typer.Exit(EXIT_FAILURE)


def _parser_usage_error() -> type[Exception]:
    """UsageError of the click package TyperCommand is built on.

    Recent typer releases bundle their own click (``typer._click``), whose
    exceptions are unrelated to the standalone ``click`` package.
    """
    command_base = next(cls for cls in TyperCommand.__mro__[1:] if cls.__name__ == "Command")
    package = command_base.__module__.rsplit(".", 1)[0]
    return importlib.import_module(f"{package}.exceptions").UsageError


UsageError = _parser_usage_error()


class StageCommand(TyperCommand):
    """Command that reports parse errors with usage text and exit status 1."""

    def parse_args(self, ctx: typer.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except UsageError as e:
            fail(ctx, [e.format_message()])


def help_callback(ctx: typer.Context, value: bool) -> None:
    if value and not ctx.resilient_parsing:
        show_usage(ctx)
        raise typer.Exit(EXIT_FAILURE)


HelpOption = typer.Option(
    False,
    "--help",
    is_eager=True,
    expose_value=False,
    callback=help_callback,
    help="Show this message and exit.",
)


def resolve_run(
    ctx: typer.Context, tool: Tool, config_file: Path | None, **option_values: Any
) -> tuple[RunOptions, Config]:
    """
    Load config and validate options, exiting on any configuration error.

    Errors from the config file and from the options are reported together.
    """
    errors: list[str] = []
    config: Config | None = None
    try:
        config = load_config(config_file)
    except ConfigurationError as e:
        errors.extend(e.errors)

    if tool is Tool.LINK and option_values.get("mode") is None and config is not None:
        option_values["mode"] = config.get("link.mode")

    try:
        options = resolve_options(tool, **option_values)
    except ConfigurationError as e:
        errors.extend(e.errors)

    if errors or config is None:
        fail(ctx, errors)

    setup_logging_from_config(config.data, program=ctx.command_path, quiet=options.quiet)
    return options, config


def log_summary(summary: RunSummary, noun: str) -> None:
    stats = summary.as_dict()
    logger.info(f"Done: {stats['subjects']} subject(s), {stats['items']} {noun}")
