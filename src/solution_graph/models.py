"""Data models for a solution's project graph.

A ``ProjectRecord`` starts out holding only what the solution manifest
declares. The resolve pass fills in ``canonical_path`` (the identity key used
for every lookup) and the two edge lists.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from .exceptions import ManifestParseError
from .paths import file_name_of

_MANIFEST_FIELDS = ("kind", "name", "relative_path", "id")


@dataclass(eq=False)
class ProjectRecord:
    """One project of a solution.

    Records compare by identity: two entries with the same id or path are
    still two records.
    """

    # Declared by the solution manifest
    kind: str
    name: str
    relative_path: str
    id: str

    # Filled in by the resolve pass
    canonical_path: str = ""
    depends_on: list[str] = field(default_factory=list)
    referenced_by: list[str] = field(default_factory=list)

    @classmethod
    def from_captures(
        cls, captures: Mapping[str, Optional[str]], line: Optional[str] = None
    ) -> "ProjectRecord":
        """Build a record from untyped manifest captures.

        Raises:
            ManifestParseError: If a field is missing, not a string, or blank
        """
        values: dict[str, str] = {}
        for name in _MANIFEST_FIELDS:
            value = captures.get(name)
            if value is None:
                raise ManifestParseError(name, "missing", line)
            if not isinstance(value, str):
                raise ManifestParseError(name, f"expected text, got {type(value).__name__}", line)
            if not value.strip():
                raise ManifestParseError(name, "empty", line)
            values[name] = value
        return cls(**values)

    @property
    def is_orphan(self) -> bool:
        """Neither depends on nor is referenced by another project."""
        return not self.depends_on and not self.referenced_by

    @property
    def file_name(self) -> str:
        return file_name_of(self.canonical_path or self.relative_path)

    def reset_edges(self) -> None:
        self.depends_on = []
        self.referenced_by = []

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "id": self.id,
            "kind": self.kind,
            "relative_path": self.relative_path,
            "path": self.canonical_path,
            "depends_on": list(self.depends_on),
            "referenced_by": list(self.referenced_by),
        }


@dataclass
class ResolutionResult:
    """Output of ``DependencyResolver.resolve`` besides the edits to each record."""

    problems: list[str] = field(default_factory=list)
    missing_projects: list[str] = field(default_factory=list)
    projects_by_key: dict[str, ProjectRecord] = field(default_factory=dict)
