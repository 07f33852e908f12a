"""Dependency level display and problem listing."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..exceptions import SolutionGraphError
from ..logging_config import setup_logging
from ..solution import Solution
from . import app
from ._common import console, open_solution, resolve_config

_REFERENCED_BY = "«"
_DEPENDS_ON = "»"


def _solution_argument() -> Path:
    return typer.Argument(
        ...,
        help="Path to the solution (.sln) file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    )


@app.command()
def show(
    path: Path = _solution_argument(),
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json",
    ),
    show_references: bool = typer.Option(
        True,
        "--references/--no-references",
        help="List the projects referencing each project",
    ),
    show_dependencies: bool = typer.Option(
        True,
        "--dependencies/--no-dependencies",
        help="List the projects each project depends on",
    ),
    report_cycles: bool = typer.Option(
        False,
        "--report-cycles",
        help="Report reference cycles left out of the levels as problems",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress logging",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Threads used to read project files",
        min=1,
        max=32,
    ),
):
    """
    Show the projects of a solution arranged in dependency levels.

    Level 1 holds the projects nothing references; every later level holds
    projects whose referencing projects all appear above it.

    [bold cyan]Examples:[/bold cyan]

      solution-graph show MySolution.sln

      solution-graph show MySolution.sln --format json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            workers=workers,
            report_cycles=report_cycles,
            verbose=verbose,
            quiet=quiet,
        )
        solution = open_solution(path, settings)

        if fmt == "json":
            print(json.dumps(solution.to_dict(), indent=2))
        else:
            _output_rich(solution, show_references, show_dependencies)

    except typer.Exit:
        raise
    except SolutionGraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def problems(
    path: Path = _solution_argument(),
    report_cycles: bool = typer.Option(
        False,
        "--report-cycles",
        help="Count reference cycles as problems",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    List the problems found in a solution. Exits with 1 if there are any.
    """
    setup_logging(quiet=True)

    try:
        settings = resolve_config(config=config, report_cycles=report_cycles, quiet=True)
        solution = open_solution(path, settings)
    except SolutionGraphError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if not solution.problems:
        console.print(f"[green]No problems found in {solution.name}[/green]")
        return

    for problem in solution.problems:
        console.print(f"  {problem}", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(1)


def _output_rich(solution: Solution, show_references: bool, show_dependencies: bool):
    console.print()
    console.print(f"[bold cyan]Solution: {solution.name}[/bold cyan]")
    console.print(f"  [dim]{solution.directory}[/dim]")
    console.print()

    if solution.problems:
        console.print("[bold yellow]The following problems were found parsing the solution:[/bold yellow]")
        for problem in solution.problems:
            console.print(f"  - {problem}", markup=False, highlight=False, soft_wrap=True)
        console.print()

    for number, level in enumerate(solution.levels, start=1):
        table = Table(title=f"Level {number}", title_justify="left", show_lines=False)
        table.add_column("Project", style="bold")
        if show_references:
            table.add_column("Referenced by")
        if show_dependencies:
            table.add_column("Depends on")

        for project in level:
            row = [project.name]
            if show_references:
                row.append(
                    "\n".join(
                        f"{_REFERENCED_BY} {solution.safe_project_name(p)}"
                        for p in project.referenced_by
                    )
                )
            if show_dependencies:
                row.append(
                    "\n".join(
                        f"{_DEPENDS_ON} {solution.safe_project_name(p)}"
                        for p in project.depends_on
                    )
                )
            table.add_row(*(Text(cell) for cell in row))
        console.print(table)

    if solution.unplaced:
        names = escape(", ".join(p.name for p in solution.unplaced))
        console.print(
            f"[yellow]{len(solution.unplaced)} project(s) in or below a reference cycle "
            f"were not placed:[/yellow] {names}"
        )

    if solution.orphan_count:
        console.print(
            f"[dim]{solution.orphan_count} project(s) without references: "
            f"{escape(', '.join(solution.orphan_names))}[/dim]",
            soft_wrap=True,
        )
    console.print()
