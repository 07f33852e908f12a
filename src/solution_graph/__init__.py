"""
Solution Graph - project dependency layering for .sln solutions

Reads every project of a solution, links their ProjectReference entries,
reports what does not resolve and arranges the graph into display levels.
"""

__version__ = "0.1.0"

from .levels import assign_levels
from .manifest import load_solution, parse_manifest, sort_projects
from .models import ProjectRecord, ResolutionResult
from .resolver import DependencyResolver
from .solution import Solution

__all__ = [
    "load_solution",  # Main entry point
    "parse_manifest",
    "sort_projects",
    "Solution",
    "ProjectRecord",
    "ResolutionResult",
    "DependencyResolver",
    "assign_levels",
]
