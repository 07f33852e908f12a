"""A solution and its resolved project graph."""

import logging
import os
from collections.abc import Sequence
from typing import Optional

from .config import ResolverConfig
from .file_ops import FileSystem, LocalFileSystem
from .levels import assign_levels, find_cycles, find_unplaced
from .models import ProjectRecord
from .paths import directory_of, file_name_of
from .resolver import DependencyResolver

logger = logging.getLogger(__name__)


class Solution:
    """The projects of one solution file plus everything derived from them.

    Only ``read_dependencies`` mutates the derived state. Calling it again
    rebuilds the graph from scratch but keeps appending to ``problems``.
    """

    def __init__(
        self,
        path: str,
        projects: Sequence[ProjectRecord],
        config: Optional[ResolverConfig] = None,
        file_system: Optional[FileSystem] = None,
    ):
        self.path = path
        self.name = file_name_of(path)
        self.directory: Optional[str] = None
        self.projects: list[ProjectRecord] = list(projects)
        self.config = config or ResolverConfig()
        self.file_system = file_system or LocalFileSystem(
            encoding=self.config.encoding, max_file_size=self.config.max_file_size_bytes
        )

        self.projects_by_key: dict[str, ProjectRecord] = {}
        self.problems: list[str] = []
        self.missing_projects: list[str] = []
        self.levels: list[list[ProjectRecord]] = []
        self.unplaced: list[ProjectRecord] = []
        self.cycles: list[list[str]] = []

    def read_dependencies(self) -> None:
        """Resolve every project reference and lay the graph out in levels."""
        logger.info("Parsing solution %s...", self.path)
        self.directory = os.path.abspath(directory_of(self.path))

        resolver = DependencyResolver(self.file_system, workers=self.config.workers)
        result = resolver.resolve(self.projects, self.directory)

        self.projects_by_key = result.projects_by_key
        self.missing_projects = result.missing_projects
        self.problems.extend(result.problems)

        self.levels = assign_levels(self.projects)
        self.unplaced = find_unplaced(self.projects, self.levels)
        self.cycles = find_cycles(self.unplaced) if self.unplaced else []

        if self.unplaced:
            logger.warning(
                "%d project(s) could not be placed in any level", len(self.unplaced)
            )
        if self.config.report_cycles:
            for cycle in self.cycles:
                names = ", ".join(self.safe_project_name(p) for p in cycle)
                self.problems.append(
                    f"Projects in a reference cycle were not placed in any level: {names}"
                )

    # ── Lookups ──────────────────────────────────────────────────

    def project_by_path(self, path: str) -> Optional[ProjectRecord]:
        return self.projects_by_key.get(path)

    def safe_project_name(self, path: str) -> str:
        """Display name for a path.

        Unknown paths show as ``?<file name>``; a bare name without a directory
        is returned as it is.
        """
        project = self.project_by_path(path)
        if project is not None:
            return project.name
        name = file_name_of(path)
        if name == path:
            return path
        return "?" + name

    # ── Summary ──────────────────────────────────────────────────

    @property
    def orphans(self) -> list[ProjectRecord]:
        return [p for p in self.projects if p.is_orphan]

    @property
    def orphan_count(self) -> int:
        return len(self.orphans)

    @property
    def orphan_names(self) -> list[str]:
        return [p.name for p in self.orphans]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "directory": self.directory,
            "problems": list(self.problems),
            "levels": [[p.name for p in level] for level in self.levels],
            "orphans": self.orphan_names,
            "orphan_count": self.orphan_count,
            "unplaced": [p.name for p in self.unplaced],
            "cycles": [[self.safe_project_name(p) for p in cycle] for cycle in self.cycles],
            "projects": [p.to_dict() for p in self.projects],
        }
