"""Two-phase resolution of project references into a linked graph.

Phase 1 loads every project: canonical path, existence check, reference
extraction. Phase 2 links each reference to a known project. Phase 2 cannot
start earlier because a project may reference one declared after it.

Every failure becomes a problem string; a resolve pass never aborts.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence, Union

from .exceptions import (
    AnalysisError,
    FileAccessError,
    MalformedProjectContentError,
    MissingProjectFileError,
    UnresolvedReferenceError,
)
from .file_ops import FileSystem, LocalFileSystem
from .models import ProjectRecord, ResolutionResult
from .paths import directory_of, resolve
from .references import extract_references

logger = logging.getLogger(__name__)

_Loaded = Union[str, AnalysisError]


class DependencyResolver:
    """Links the projects of one solution to each other.

    Args:
        file_system: Source of project file contents (defaults to the local disk)
        workers: Threads used for Phase 1 reads; None or 1 reads sequentially
    """

    def __init__(self, file_system: Optional[FileSystem] = None, workers: Optional[int] = None):
        self.file_system = file_system if file_system is not None else LocalFileSystem()
        self.workers = workers

    def resolve(self, projects: Sequence[ProjectRecord], manifest_dir: str) -> ResolutionResult:
        """Fill ``canonical_path``, ``depends_on`` and ``referenced_by`` on every project.

        Returns:
            The problems found, the canonical paths of missing projects and
            the map of existing projects by canonical path.
        """
        result = ResolutionResult()

        for project in projects:
            project.reset_edges()
            project.canonical_path = resolve(manifest_dir, project.relative_path)

        loaded = self._load_all(projects)

        # Phase 1: register projects and their declared references
        for project, content in zip(projects, loaded):
            if isinstance(content, AnalysisError):
                self._record_problem(result, content)
                result.missing_projects.append(project.canonical_path)
                continue

            result.projects_by_key[project.canonical_path] = project
            try:
                project.depends_on = extract_references(
                    content, directory_of(project.canonical_path), project.canonical_path
                )
            except MalformedProjectContentError as e:
                self._record_problem(result, e)
                continue
            logger.debug(
                "%s: %d project reference(s)", project.name, len(project.depends_on)
            )

        # Phase 2: link references to the projects they name
        missing = set(result.missing_projects)
        for project in projects:
            for dep in project.depends_on:
                if dep in missing:
                    # Already reported in phase 1
                    continue
                target = result.projects_by_key.get(dep)
                if target is None:
                    self._record_problem(result, UnresolvedReferenceError(project.name, dep))
                else:
                    target.referenced_by.append(project.canonical_path)

        logger.info(
            "Resolved %d project(s), %d registered, %d problem(s)",
            len(projects),
            len(result.projects_by_key),
            len(result.problems),
        )
        return result

    def _load_all(self, projects: Sequence[ProjectRecord]) -> list[_Loaded]:
        """Read every project file, in list order. Never raises for a single file."""
        if self.workers and self.workers > 1 and len(projects) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                return list(executor.map(self._load, projects))
        return [self._load(project) for project in projects]

    def _load(self, project: ProjectRecord) -> _Loaded:
        path = project.canonical_path
        try:
            if not self.file_system.exists(path):
                return MissingProjectFileError(path)
            return self.file_system.read_text(path)
        except AnalysisError as e:
            # Not retried: an unreadable project is handled like a missing one
            return e
        except OSError as e:
            return FileAccessError(path, f"OS error: {e}")

    @staticmethod
    def _record_problem(result: ResolutionResult, error: AnalysisError) -> None:
        logger.warning("%s", error)
        result.problems.append(str(error))
