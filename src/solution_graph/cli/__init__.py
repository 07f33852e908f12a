"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="solution-graph",
    help="Solution Graph - project dependency levels for .sln solutions",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool):
    if value:
        console.print(f"solution-graph {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Visualize project-to-project references of a solution."""


# Import subcommands to register them
from .show import problems as _problems, show as _show  # noqa: F401, E402


def main():
    app()
