"""Next release decision engine.

Given a project and a branch, ask a `ReleaseSource` for the last release tag,
the pull requests merged since, and the CI snapshot of the branch tip, then
derive the next version, the changelog and whether the release may ship.

The engine performs no I/O of its own and never prints. Failures from the
source and from payload validation come back as `Err` unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeAlias

from devkit.core.result import Err, Ok, Result
from devkit.release.domain.changelog import Changelog
from devkit.release.domain.check_runs import CheckRuns
from devkit.release.domain.next_release import NextRelease
from devkit.release.domain.project import Branch, Project
from devkit.release.domain.pull_request import PullRequest
from devkit.release.domain.semver import INITIAL_VERSION, SemVer
from devkit.release.domain.stability import Stability
from devkit.release.domain.status import CombinedStatus
from devkit.release.errors import ReleaseError


class ReleaseSource(Protocol):
    """Read-only view of a hosting service, as the engine needs it."""

    def last_release_tag(self, project: Project, branch: Branch) -> Result[SemVer, ReleaseError]:
        """Latest release on the branch, or INITIAL_VERSION if there is none."""
        ...

    def merged_pull_requests_since(
        self, project: Project, branch: Branch, tag: SemVer
    ) -> Result[list[object], ReleaseError]:
        """Raw pull request records merged into branch after tag, in merge order."""
        ...

    def combined_status(self, project: Project, ref: str) -> Result[object, ReleaseError]:
        ...

    def check_runs(self, project: Project, ref: str) -> Result[object, ReleaseError]:
        ...


@dataclass(frozen=True, slots=True)
class Determined:
    next_release: NextRelease


@dataclass(frozen=True, slots=True)
class NothingToRelease:
    """No pull request was merged into the branch since the last release."""

    project: Project
    branch: Branch
    tag: SemVer

    def message(self) -> str:
        return (
            f"No pull requests merged since last release {self.tag.to_tag()} "
            f"of {self.project.name} on branch {self.branch.name}."
        )


Determination: TypeAlias = Determined | NothingToRelease


def aggregate_stability(pull_requests: list[PullRequest]) -> Stability:
    """Bump size for the release; unknown stabilities do not count.

    When no pull request has a known stability this falls back to patch; the
    release is still blocked by `NextRelease.can_be_released()`.
    """
    return Stability.max_of(pr.stability for pr in pull_requests) or Stability.PATCH


class DetermineNextRelease:
    def __init__(self, source: ReleaseSource) -> None:
        self._source = source

    def __call__(self, project: Project, branch: Branch) -> Result[Determination, ReleaseError]:
        tag_r = self._source.last_release_tag(project, branch)
        if isinstance(tag_r, Err):
            return tag_r
        current_tag = tag_r.value

        raw_prs = self._source.merged_pull_requests_since(project, branch, current_tag)
        if isinstance(raw_prs, Err):
            return raw_prs
        if not raw_prs.value:
            return Ok(NothingToRelease(project=project, branch=branch, tag=current_tag))

        pull_requests: list[PullRequest] = []
        for raw in raw_prs.value:
            pr = PullRequest.from_response(raw)
            if isinstance(pr, Err):
                return pr
            pull_requests.append(pr.value)

        next_tag = current_tag.bump(aggregate_stability(pull_requests))

        status_raw = self._source.combined_status(project, branch.name)
        if isinstance(status_raw, Err):
            return status_raw
        combined_status = CombinedStatus.from_response(status_raw.value)
        if isinstance(combined_status, Err):
            return combined_status

        runs_raw = self._source.check_runs(project, branch.name)
        if isinstance(runs_raw, Err):
            return runs_raw
        check_runs = CheckRuns.from_response(runs_raw.value)
        if isinstance(check_runs, Err):
            return check_runs

        changelog = Changelog.from_pull_requests(
            pull_requests,
            tag=next_tag,
            previous_tag=None if current_tag == INITIAL_VERSION else current_tag,
            repository=project.repository,
        )

        return Ok(
            Determined(
                NextRelease(
                    current_tag=current_tag,
                    next_tag=next_tag,
                    pull_requests=tuple(pull_requests),
                    combined_status=combined_status.value,
                    check_runs=check_runs.value,
                    changelog=changelog,
                )
            )
        )
