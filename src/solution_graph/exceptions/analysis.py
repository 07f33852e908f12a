"""Resolution-related exceptions: missing files, bad references, parsing.

The resolver downgrades most of these to problem strings with ``str(err)``,
so their messages are the exact text shown to the user and carry no details
suffix.
"""

from typing import Optional

from .base import SolutionGraphError


class AnalysisError(SolutionGraphError):
    """Base class for resolution-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: str, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class MissingProjectFileError(AnalysisError):
    """A project declared in the solution has no file on disk."""

    def __init__(self, filepath: str):
        super().__init__(f"Project file '{filepath}' does not exist")
        self.filepath = filepath


class UnresolvedReferenceError(AnalysisError):
    """A project references a path that is not a project of the solution."""

    def __init__(self, project_name: str, reference: str):
        super().__init__(
            f"Project '{project_name}' references unknown project '{reference}'. "
            "Add this project to the solution"
        )
        self.project_name = project_name
        self.reference = reference


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""
    pass


class MalformedProjectContentError(ParsingError):
    """Project file content is not well-formed XML."""

    def __init__(self, filepath: Optional[str], reason: str):
        where = f"'{filepath}'" if filepath else "content"
        super().__init__(f"Project file {where} could not be parsed: {reason}")
        self.filepath = filepath
        self.reason = reason


class ManifestParseError(ParsingError):
    """A solution manifest entry could not be turned into a project record."""

    def __init__(self, field_name: str, reason: str, line: Optional[str] = None):
        details = {"field": field_name, "reason": reason}
        if line:
            details["line"] = line
        super().__init__(f"Invalid project entry in solution: {field_name}", details=details)
        self.field_name = field_name
        self.reason = reason
        self.line = line
