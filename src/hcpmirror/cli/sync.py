"""
hcp-sync - Mirror subject directories from the remote HCP dataset.
"""

from pathlib import Path

import typer

from hcpmirror.cli.common import HelpOption, StageCommand, log_summary, resolve_run
from hcpmirror.config.options import Tool
from hcpmirror.connections.filesystem import TreeRemover
from hcpmirror.connections.s3 import S3Connection
from hcpmirror.sync.remote import run_remote_sync

app = typer.Typer(
    name="hcp-sync",
    help="Sync per-subject HCP directories from S3 into a local destination",
    add_completion=False,
)


def sync(
    ctx: typer.Context,
    dest: Path | None = typer.Option(None, "--dest", help="Destination root (one directory per subject)"),
    subject: str | None = typer.Option(None, "--subject", help="Single subject ID"),
    subjlist: Path | None = typer.Option(None, "--subjlist", help="File of whitespace-separated subject IDs"),
    stage: str | None = typer.Option(None, "--stage", help="Data stage: unproc, struct or proc [default: unproc]"),
    config_file: Path | None = typer.Option(None, "--config", help="YAML config file [default: ./hcpmirror.yaml]"),
    help_: bool = HelpOption,
) -> None:
    """
    Sync the stage's subdirectories for each subject from the remote dataset.

    Sync is additive: files already present and unchanged are skipped, and
    nothing local is deleted except the stage's pruned paths.
    """
    options, config = resolve_run(
        ctx,
        Tool.SYNC,
        config_file,
        dest=dest,
        subject=subject,
        subject_list=subjlist,
        stage=stage,
    )

    with S3Connection(config.remote) as connection:
        summary = run_remote_sync(options, tree_sync=connection, remover=TreeRemover())

    log_summary(summary, "file(s) transferred")


app.command("hcp-sync", cls=StageCommand, add_help_option=False)(sync)


def main():
    """hcp-sync entry point."""
    app()


if __name__ == "__main__":
    main()
