"""
hcp-link - Build a per-project tree of references into a local HCP mirror.
"""

from pathlib import Path

import typer

from hcpmirror.cli.common import EXIT_FAILURE, HelpOption, StageCommand, log_summary, resolve_run
from hcpmirror.config.options import Tool
from hcpmirror.connections.filesystem import TreeRemover, build_materializer
from hcpmirror.exceptions import OverwriteDeclined
from hcpmirror.sync.link import run_local_link
from hcpmirror.utils.prompt import Confirm, console_confirm

app = typer.Typer(
    name="hcp-link",
    help="Link per-subject HCP directories from a local mirror into a project tree",
    add_completion=False,
)


def confirm_from_context(ctx: typer.Context) -> Confirm:
    """
    Prompt callback for overwrite confirmation.

    Callers may pass ``obj={"confirm": ...}`` when invoking the app to answer
    prompts programmatically; otherwise the console is asked.
    """
    settings = ctx.find_object(dict) or {}
    return settings.get("confirm", console_confirm)


def link(
    ctx: typer.Context,
    source: Path | None = typer.Option(None, "--source", help="Root of the local HCP mirror"),
    dest: Path | None = typer.Option(None, "--dest", help="Destination root (one directory per subject)"),
    subject: str | None = typer.Option(None, "--subject", help="Single subject ID"),
    subjlist: Path | None = typer.Option(None, "--subjlist", help="File of whitespace-separated subject IDs"),
    stage: str | None = typer.Option(None, "--stage", help="Data stage: unproc, struct or proc [default: unproc]"),
    quiet: bool = typer.Option(False, "--quiet", help="Don't log each copy, link and delete"),
    mode: str | None = typer.Option(None, "--mode", help="clone (copy-on-write) or symlink [default: clone]"),
    config_file: Path | None = typer.Option(None, "--config", help="YAML config file [default: ./hcpmirror.yaml]"),
    help_: bool = HelpOption,
) -> None:
    """
    Rebuild each subject's directory from the local mirror, scoped by stage.

    An existing subject directory is deleted only after confirmation;
    answering anything but yes stops the run.
    """
    options, _ = resolve_run(
        ctx,
        Tool.LINK,
        config_file,
        source=source,
        dest=dest,
        subject=subject,
        subject_list=subjlist,
        stage=stage,
        quiet=quiet,
        mode=mode,
    )

    try:
        summary = run_local_link(
            options,
            materializer=build_materializer(options.mode),
            confirm=confirm_from_context(ctx),
            remover=TreeRemover(),
        )
    except OverwriteDeclined as e:
        typer.echo(f"{ctx.command_path}: {e.message}; stopping without processing remaining subjects", err=True)
        raise typer.Exit(EXIT_FAILURE) from None

    log_summary(summary, "entries materialized")


app.command("hcp-link", cls=StageCommand, add_help_option=False)(link)


def main():
    """hcp-link entry point."""
    app()


if __name__ == "__main__":
    main()
