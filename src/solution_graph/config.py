"""Configuration loading and management for Solution Graph.

Configuration sources are merged in priority order:
    1. Defaults (defined in ResolverConfig)
    2. Global config (~/.solution-graph.toml)
    3. Project config (./solution-graph.toml)
    4. Explicit config file (--config)
    5. Environment variables (SOLUTION_GRAPH_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(verbose=True, workers=4)
    >>> config.verbosity
    'verbose'
    >>> config.workers
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import InvalidConfigError, SolutionGraphError

Verbosity = Literal["quiet", "normal", "verbose"]

# Project type GUIDs that are placeholders rather than buildable projects
SOLUTION_FOLDER_KIND = "{2150E333-8FDC-42A3-9474-1A3956D46DE8}"
WEB_SITE_KIND = "{E24C65DC-7377-472B-9ABA-BC803B73C61A}"

ENV_PREFIX = "SOLUTION_GRAPH_"


@dataclass(frozen=True)
class ResolverConfig:
    """Configuration for a resolve pass.

    Attributes:
        workers: Threads used to read project files (None or 1 = sequential)
        max_file_size_mb: Project files larger than this are treated as unreadable
        encoding: Text encoding for solution and project files
        excluded_kinds: Project type GUIDs skipped when parsing the manifest
        report_cycles: Add a problem for every reference cycle left out of the levels
        verbosity: Logging verbosity level
    """

    workers: Optional[int] = None
    max_file_size_mb: float = 10.0
    encoding: str = "utf-8"
    excluded_kinds: list[str] = field(
        default_factory=lambda: [SOLUTION_FOLDER_KIND, WEB_SITE_KIND]
    )
    report_cycles: bool = False
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # bool is an int subclass; TOML true must not pass as a count
        if self.workers is not None:
            if isinstance(self.workers, bool) or not isinstance(self.workers, int):
                raise ValueError("workers must be an integer")
            if self.workers < 1:
                raise ValueError("workers must be at least 1")
        if isinstance(self.max_file_size_mb, bool) or not isinstance(
            self.max_file_size_mb, (int, float)
        ):
            raise ValueError("max_file_size_mb must be a number")
        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        if not isinstance(self.encoding, str) or not self.encoding:
            raise ValueError("encoding must be a non-empty string")
        if not isinstance(self.excluded_kinds, list) or not all(
            isinstance(kind, str) for kind in self.excluded_kinds
        ):
            raise ValueError("excluded_kinds must be a list of strings")
        if not isinstance(self.report_cycles, bool):
            raise ValueError("report_cycles must be true or false")
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> ResolverConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask file settings.

    Returns:
        Validated ResolverConfig instance

    Raises:
        SolutionGraphError: If a config file is missing or unreadable
        InvalidConfigError: If a value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".solution-graph.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except SolutionGraphError:
            raise
        except Exception as e:
            raise SolutionGraphError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "solution-graph.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except SolutionGraphError:
            raise
        except Exception as e:
            raise SolutionGraphError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise SolutionGraphError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except SolutionGraphError:
            raise
        except Exception as e:
            raise SolutionGraphError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    unknown = sorted(set(merged) - set(ResolverConfig.__dataclass_fields__))
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown configuration key")

    try:
        return ResolverConfig(**merged)
    except ValueError as e:
        key = str(e).split(" ", 1)[0]
        raise InvalidConfigError(key, merged.get(key), str(e))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from SOLUTION_GRAPH_* environment variables.

    Supported environment variables:
        SOLUTION_GRAPH_WORKERS: int
        SOLUTION_GRAPH_MAX_FILE_SIZE_MB: float
        SOLUTION_GRAPH_ENCODING: str
        SOLUTION_GRAPH_REPORT_CYCLES: bool (true/false/1/0)
        SOLUTION_GRAPH_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any SOLUTION_GRAPH_* vars found.
    """
    type_hints = get_type_hints(ResolverConfig)

    result: dict[str, Any] = {}

    for field_name in ResolverConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint, field_name)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any, field_name: str) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Handle Optional[X] which is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    # Comma separated list (excluded_kinds)
    if origin is list or type_hint is list:
        return [item.strip() for item in value.split(",") if item.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        SolutionGraphError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise SolutionGraphError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
