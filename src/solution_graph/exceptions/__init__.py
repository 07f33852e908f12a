"""Exception hierarchy for Solution Graph."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    MalformedProjectContentError,
    ManifestParseError,
    MissingProjectFileError,
    ParsingError,
    UnresolvedReferenceError,
)
from .base import SolutionGraphError
from .config import (
    ConfigurationError,
    InvalidConfigError,
)

__all__ = [
    "SolutionGraphError",
    "AnalysisError",
    "FileAccessError",
    "MissingProjectFileError",
    "UnresolvedReferenceError",
    "ParsingError",
    "MalformedProjectContentError",
    "ManifestParseError",
    "ConfigurationError",
    "InvalidConfigError",
]
