from __future__ import annotations

from pathlib import Path

import typer

from devkit.cli.commands.release_common import exit_release, exit_release_error
from devkit.cli.context import build_context
from devkit.core.errors import ErrorCode
from devkit.core.result import Err
from devkit.output.console import ConsoleProtocol, Style
from devkit.release.domain.project import Branch, Project
from devkit.release.flow.determine import (
    DetermineNextRelease,
    Determined,
    NothingToRelease,
    ReleaseSource,
)
from devkit.release.infra.gh import ensure_gh_auth, ensure_gh_available
from devkit.release.infra.github_source import GithubReleaseSource
from devkit.release.resolve.projects import ProjectsConfig
from devkit.release.view.render import render_next_release

MAX_ATTEMPTS = 3


def make_source(cwd: Path) -> ReleaseSource:
    return GithubReleaseSource(cwd=cwd)


def preflight(cwd: Path) -> None:
    available = ensure_gh_available()
    if isinstance(available, Err):
        exit_release_error(available.error)
    auth = ensure_gh_auth(cwd=cwd)
    if isinstance(auth, Err):
        exit_release_error(auth.error)


def _select_project(
    projects: ProjectsConfig,
    console: ConsoleProtocol,
    name: str | None,
    *,
    interactive: bool,
) -> Project:
    if name is not None:
        found = projects.by_name(name)
        if isinstance(found, Err):
            exit_release_error(found.error)
        return found.value

    if not interactive:
        exit_release(
            "missing PROJECT argument (or run without --no-interactive)",
            code=ErrorCode.USER_ERROR,
        )

    console.print(f"Projects: {', '.join(projects.names())}", Style.DIM)
    for _ in range(MAX_ATTEMPTS):
        answer = console.ask("Please enter the name of the project to release")
        found = projects.by_name(answer)
        if isinstance(found, Err):
            console.error(found.error.message)
            continue
        return found.value

    exit_release("no valid project selected", code=ErrorCode.USER_ERROR)


def _select_branch(
    project: Project,
    console: ConsoleProtocol,
    name: str | None,
    *,
    interactive: bool,
) -> Branch:
    if name is not None:
        found = project.branch(name)
        if isinstance(found, Err):
            exit_release_error(found.error)
        return found.value

    default = project.default_branch()
    if not interactive:
        return default

    console.print(f"Branches: {', '.join(project.branch_names_reverse())}", Style.DIM)
    for _ in range(MAX_ATTEMPTS):
        answer = console.ask(
            "Please select the branch of the project to release", default=default.name
        )
        found = project.branch(answer)
        if isinstance(found, Err):
            console.error(found.error.pretty())
            continue
        return found.value

    exit_release("no valid branch selected", code=ErrorCode.USER_ERROR)


def release(
    project: str | None = typer.Argument(None, help="Project name from projects.toml."),
    branch: str | None = typer.Option(
        None, "--branch", "-b", help="Branch to release (default: stable branch)."
    ),
    projects_file: Path | None = typer.Option(
        None, "--projects", help="Projects file (default: $DEVKIT_PROJECTS or ./projects.toml)."
    ),
    interactive: bool = typer.Option(
        True, "--interactive/--no-interactive", help="Prompt for missing project/branch."
    ),
) -> None:
    """Determine the next release of a project: version, readiness and changelog."""
    ctx = build_context(projects_file)
    console = ctx.console

    selected = _select_project(ctx.projects, console, project, interactive=interactive)
    selected_branch = _select_branch(selected, console, branch, interactive=interactive)
    console.header(f"{selected.name} ({selected.repository}@{selected_branch.name})")

    preflight(ctx.cwd)

    determine = DetermineNextRelease(make_source(ctx.cwd))
    result = determine(selected, selected_branch)
    if isinstance(result, Err):
        exit_release_error(result.error)

    match result.value:
        case NothingToRelease() as nothing:
            console.warning(nothing.message())
            return
        case Determined(next_release=next_release):
            if not next_release.is_needed():
                console.warning("Release is not needed")
                return

            render_next_release(next_release, console)
            if not next_release.can_be_released():
                raise typer.Exit(code=int(ErrorCode.USER_ERROR))
