"""
Main CLI entry point.

``hcpmirror sync`` and ``hcpmirror link`` are the same commands installed
standalone as ``hcp-sync`` and ``hcp-link``.
"""

import typer

from hcpmirror import __version__
from hcpmirror.cli import link, sync
from hcpmirror.cli.common import StageCommand


def version_callback(value: bool):
    """Callback to display version and exit."""
    if value:
        typer.echo(f"hcpmirror version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="hcpmirror",
    help="hcpmirror - Stage-scoped provisioning of per-subject HCP data",
    add_completion=False,
)

app.command("sync", cls=StageCommand, add_help_option=False)(sync.sync)
app.command("link", cls=StageCommand, add_help_option=False)(link.link)


@app.callback(invoke_without_command=True)
def entrypoint(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """
    hcpmirror - Stage-scoped provisioning of per-subject HCP data.

    Run 'hcpmirror <command> --help' for help on a specific command.
    """
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
