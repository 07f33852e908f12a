"""Shared test fixtures for Solution Graph tests."""

import os

import pytest

from solution_graph.exceptions import FileAccessError
from solution_graph.models import ProjectRecord
from solution_graph.paths import resolve

CSHARP_KIND = "{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}"
MSBUILD_NS = "http://schemas.microsoft.com/developer/msbuild/2003"

# Absolute directory the in-memory solutions live in
WORK_DIR = os.path.abspath(os.sep + "work")


class MemoryFileSystem:
    """Dict-backed stand-in for the local disk.

    A value that is an exception is raised by ``read_text`` instead of
    being returned.
    """

    def __init__(self, files=None):
        self.files = dict(files or {})
        self.reads = []

    def exists(self, path):
        return path in self.files

    def read_text(self, path):
        self.reads.append(path)
        content = self.files[path]
        if isinstance(content, Exception):
            raise content
        return content


def make_csproj(*references, namespaced=False):
    """Project file text declaring ``references`` as ProjectReference items."""
    items = "\n".join(f'    <ProjectReference Include="{ref}" />' for ref in references)
    ns = f' xmlns="{MSBUILD_NS}"' if namespaced else ""
    return (
        f'<Project Sdk="Microsoft.NET.Sdk"{ns}>\n'
        "  <ItemGroup>\n"
        f"{items}\n"
        "  </ItemGroup>\n"
        "</Project>\n"
    )


def make_project(name, relative_path=None, guid=None):
    return ProjectRecord(
        kind=CSHARP_KIND,
        name=name,
        relative_path=relative_path or f"{name}\\{name}.csproj",
        id=guid or "{" + name.upper() + "-0000}",
    )


def project_path(name):
    """Canonical path of ``make_project(name)`` inside WORK_DIR."""
    return resolve(WORK_DIR, f"{name}\\{name}.csproj")


@pytest.fixture
def memory_fs():
    return MemoryFileSystem()


@pytest.fixture
def unreadable():
    """An error the file system raises for a file it cannot read."""
    return FileAccessError("locked.csproj", "OS error: permission denied")


@pytest.fixture
def chain_files():
    """A references B, B references C, C references nothing."""
    return {
        project_path("A"): make_csproj("..\\B\\B.csproj"),
        project_path("B"): make_csproj("..\\C\\C.csproj"),
        project_path("C"): make_csproj(),
    }


@pytest.fixture
def solution_tree(tmp_path):
    """Write a real solution with projects to disk.

    Returns a function ``build(projects, extra_lines=())`` where ``projects``
    maps a project name to the relative paths it references (or to None to
    declare the project without creating its file).
    """

    def build(projects, extra_lines=()):
        lines = [
            "Microsoft Visual Studio Solution File, Format Version 12.00",
            "# Visual Studio Version 17",
        ]
        for name, refs in projects.items():
            guid = "{" + f"{len(lines):08d}-1111-2222-3333-444444444444" + "}"
            lines.append(
                f'Project("{CSHARP_KIND}") = "{name}", "{name}\\{name}.csproj", "{guid}"'
            )
            lines.append("EndProject")
            if refs is None:
                continue
            project_dir = tmp_path / name
            project_dir.mkdir(parents=True, exist_ok=True)
            (project_dir / f"{name}.csproj").write_text(make_csproj(*refs), encoding="utf-8")
        lines.extend(extra_lines)
        lines.append("Global")
        lines.append("EndGlobal")
        sln = tmp_path / "Sample.sln"
        sln.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
        return sln

    return build
