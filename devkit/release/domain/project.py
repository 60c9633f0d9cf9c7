from __future__ import annotations

from dataclasses import dataclass

from devkit.core.result import Err, Ok, Result
from devkit.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class Branch:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class Project:
    """A released project and its maintained branches, newest first."""

    name: str
    repository: str  # owner/name
    branches: tuple[Branch, ...]

    def unstable_branch(self) -> Branch:
        return self.branches[0]

    def stable_branch(self) -> Branch | None:
        if len(self.branches) > 1:
            return self.branches[1]
        return None

    def default_branch(self) -> Branch:
        return self.stable_branch() or self.unstable_branch()

    def branch_names(self) -> list[str]:
        return [b.name for b in self.branches]

    def branch_names_reverse(self) -> list[str]:
        return list(reversed(self.branch_names()))

    def branch(self, name: str) -> Result[Branch, ReleaseError]:
        wanted = name.strip()
        for b in self.branches:
            if b.name == wanted:
                return Ok(b)
        return Err(
            ReleaseError(
                kind="unknown_branch",
                message=f"unknown branch {wanted!r} for {self.name}",
                hint=f"available: {', '.join(self.branch_names())}",
            )
        )
