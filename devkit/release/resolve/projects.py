"""Projects known to devkit, read from `projects.toml`.

    [projects.admin-bundle]
    repository = "sonata-project/SonataAdminBundle"
    branches = ["5.x", "4.x"]

Branches are listed newest first: the first one is the unstable branch, the
second (if any) the stable branch releases default to.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from devkit.core.config import ConfigError, parse_toml
from devkit.core.result import Err, Ok, Result
from devkit.core.structured import as_str_dict, get_list, get_str, get_table
from devkit.release.domain.project import Branch, Project
from devkit.release.errors import ReleaseError

_REPOSITORY_RE = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


@dataclass(frozen=True, slots=True)
class ProjectsConfig:
    projects: tuple[Project, ...]

    def names(self) -> list[str]:
        return sorted(p.name for p in self.projects)

    def by_name(self, name: str) -> Result[Project, ReleaseError]:
        wanted = name.strip()
        for p in self.projects:
            if p.name == wanted:
                return Ok(p)
        return Err(
            ReleaseError(
                kind="unknown_project",
                message=f"unknown project: {wanted!r}",
                hint="run `devkit projects` to list configured projects",
            )
        )


def projects_from_dict(
    data: Mapping[str, object], *, path: Path | None = None
) -> Result[ProjectsConfig, ConfigError]:
    table = get_table(data, "projects")
    if table is None:
        return Err(ConfigError("missing [projects] table", path=path))

    projects: list[Project] = []
    for name in sorted(table):
        entry = as_str_dict(table[name])
        if entry is None:
            return Err(ConfigError(f"[projects.{name}] must be a table", path=path))

        repository = get_str(entry, "repository")
        if repository is None or _REPOSITORY_RE.match(repository) is None:
            return Err(
                ConfigError(
                    f"[projects.{name}].repository must look like owner/name: {repository!r}",
                    path=path,
                )
            )

        raw_branches = get_list(entry, "branches") or []
        branches: list[Branch] = []
        for raw in raw_branches:
            if not isinstance(raw, str) or not raw.strip():
                return Err(
                    ConfigError(f"[projects.{name}].branches must be strings", path=path)
                )
            branches.append(Branch(raw.strip()))
        if not branches:
            return Err(ConfigError(f"[projects.{name}].branches must not be empty", path=path))

        projects.append(Project(name=name, repository=repository, branches=tuple(branches)))

    return Ok(ProjectsConfig(projects=tuple(projects)))


def load_projects(path: Path) -> Result[ProjectsConfig, ConfigError]:
    data = parse_toml(path)
    if isinstance(data, Err):
        return data
    return projects_from_dict(data.value, path=path)
