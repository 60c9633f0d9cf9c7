from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from devkit.core.config import resolve_config_path
from devkit.core.errors import ErrorCode
from devkit.core.result import Err
from devkit.output.console import ConsoleProtocol, RichConsole
from devkit.release.resolve.projects import ProjectsConfig, load_projects


@dataclass(frozen=True, slots=True)
class CLIContext:
    cwd: Path
    projects: ProjectsConfig
    console: ConsoleProtocol


def build_context(projects_file: Path | None = None) -> CLIContext:
    cwd = Path.cwd()
    path = resolve_config_path(projects_file, cwd=cwd)

    loaded = load_projects(path)
    if isinstance(loaded, Err):
        typer.echo(f"error: {loaded.error.message}", err=True)
        code = ErrorCode.USER_ERROR if path.is_file() else ErrorCode.IO_ERROR
        raise typer.Exit(code=int(code))

    return CLIContext(cwd=cwd, projects=loaded.value, console=RichConsole())
