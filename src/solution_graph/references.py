"""Project-to-project reference extraction from MSBuild project files."""

import xml.etree.ElementTree as ET
from typing import Optional

from .exceptions import MalformedProjectContentError
from .paths import resolve

BOM = "\ufeff"
REFERENCE_TAG = "ProjectReference"
REFERENCE_ATTRIBUTE = "Include"


def _local_name(tag) -> str:
    # "{http://schemas.microsoft.com/developer/msbuild/2003}ProjectReference"
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def extract_references(
    content: str, project_dir: str, filepath: Optional[str] = None
) -> list[str]:
    """Return the canonical paths of every ``<ProjectReference Include=...>``.

    Paths are resolved against ``project_dir``, the directory of the project
    declaring them. Output follows document order with duplicates kept.
    References without an ``Include`` attribute are skipped.

    Raises:
        MalformedProjectContentError: If ``content`` is not well-formed XML
    """
    if content.startswith(BOM):
        content = content[1:]

    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise MalformedProjectContentError(filepath, str(e)) from e

    references: list[str] = []
    for element in root.iter():
        if element is root or _local_name(element.tag) != REFERENCE_TAG:
            continue
        include = element.get(REFERENCE_ATTRIBUTE)
        if not include:
            continue
        references.append(resolve(project_dir, include))
    return references
