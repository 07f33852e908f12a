"""Canonical project paths.

Every path used as a project key passes through ``resolve`` so that
``depends_on`` entries and ``projects_by_key`` keys compare equal however the
solution or project file spelled them. Case is left alone: keys are compared
with plain string equality.
"""

import os

_FOREIGN_SEP = "/" if os.sep == "\\" else "\\"


def normalize(path: str) -> str:
    """Rewrite the foreign path separator to ``os.sep``."""
    return path.replace(_FOREIGN_SEP, os.sep)


def resolve(base_dir: str, relative_path: str) -> str:
    """Join ``relative_path`` onto ``base_dir`` and collapse ``.``/``..``.

    Absolute ``relative_path`` values win over the base, as with ``os.path.join``.
    """
    base = os.path.abspath(normalize(base_dir))
    return os.path.normpath(os.path.join(base, normalize(relative_path)))


def directory_of(path: str) -> str:
    return os.path.dirname(normalize(path))


def file_name_of(path: str) -> str:
    return os.path.basename(normalize(path))
