from __future__ import annotations

from pathlib import Path

import typer

from devkit.cli.context import build_context
from devkit.output.console import Style


def projects(
    projects_file: Path | None = typer.Option(
        None, "--projects", help="Projects file (default: $DEVKIT_PROJECTS or ./projects.toml)."
    ),
) -> None:
    """List configured projects and their branches."""
    ctx = build_context(projects_file)
    console = ctx.console

    if not ctx.projects.projects:
        console.warning("no projects configured")
        return

    for project in ctx.projects.projects:
        console.print(f"{project.name} ({project.repository})", Style.BOLD)
        stable = project.stable_branch()
        for b in project.branches:
            marker = ""
            if b == project.unstable_branch():
                marker = " [unstable]"
            elif b == stable:
                marker = " [stable]"
            console.print(f"  - {b.name}{marker}", Style.DIM)
