"""Solution manifest (.sln) parsing.

Only the ``Project(...)`` lines matter here::

    Project("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") = "Core", "src\\Core\\Core.csproj", "{5D2C...}"

Each match yields the project type GUID, display name, relative path and
project GUID. Solution folders and web sites are declared the same way but
have no project file to read, so their type GUIDs are filtered out.
"""

import locale
import logging
import re
from collections.abc import Iterable, Sequence
from typing import Optional

from .config import ResolverConfig
from .file_ops import FileSystem, LocalFileSystem
from .models import ProjectRecord
from .solution import Solution

logger = logging.getLogger(__name__)

PROJECT_LINE = re.compile(
    r'^Project\("(?P<kind>[^"]+)"\) = "(?P<name>[^"]+)", "(?P<relative_path>[^"]+)", "(?P<id>[^"]+)"',
    re.IGNORECASE | re.MULTILINE,
)


def parse_manifest(
    text: str, excluded_kinds: Optional[Iterable[str]] = None
) -> list[ProjectRecord]:
    """Return the buildable projects declared in ``text``, in file order.

    Args:
        text: Solution file content
        excluded_kinds: Project type GUIDs to drop, compared case-insensitively.
            Defaults to solution folders and web sites.

    Raises:
        ManifestParseError: If a matched line does not yield a valid record
    """
    if excluded_kinds is None:
        excluded_kinds = ResolverConfig().excluded_kinds
    excluded = {kind.upper() for kind in excluded_kinds}

    projects: list[ProjectRecord] = []
    for match in PROJECT_LINE.finditer(text):
        record = ProjectRecord.from_captures(match.groupdict(), line=match.group(0))
        if record.kind.upper() in excluded:
            logger.debug("Skipping %s (type %s)", record.name, record.kind)
            continue
        projects.append(record)
    return projects


def _name_key(name: str) -> str:
    return locale.strxfrm(name.casefold())


def sort_projects(projects: Sequence[ProjectRecord]) -> list[ProjectRecord]:
    """Order projects by display name, case-insensitively and locale-aware."""
    return sorted(projects, key=lambda p: (_name_key(p.name), p.name))


def load_solution(
    path: str,
    config: Optional[ResolverConfig] = None,
    file_system: Optional[FileSystem] = None,
) -> Solution:
    """Read and parse a solution file into an unresolved ``Solution``.

    Raises:
        FileAccessError: If the solution file cannot be read
        ManifestParseError: If a project line is invalid
    """
    config = config or ResolverConfig()
    if file_system is None:
        file_system = LocalFileSystem(
            encoding=config.encoding, max_file_size=config.max_file_size_bytes
        )

    text = file_system.read_text(path)
    projects = sort_projects(parse_manifest(text, config.excluded_kinds))
    logger.info("Parsed %d project(s) from %s", len(projects), path)
    return Solution(path, projects, config=config, file_system=file_system)
