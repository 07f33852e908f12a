"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ResolverConfig, load_config
from ..manifest import load_solution
from ..solution import Solution

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    report_cycles: Optional[bool] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ResolverConfig:
    """Build settings from CLI options."""
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if report_cycles:
        overrides["report_cycles"] = True
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)


def open_solution(path: Path, settings: ResolverConfig) -> Solution:
    """Load a solution file and resolve its dependencies."""
    solution = load_solution(str(path), settings)
    solution.read_dependencies()
    return solution
