from __future__ import annotations

from dataclasses import dataclass

from devkit.release.domain.changelog import Changelog
from devkit.release.domain.check_runs import CheckRuns
from devkit.release.domain.pull_request import PullRequest
from devkit.release.domain.semver import SemVer
from devkit.release.domain.status import CombinedStatus


@dataclass(frozen=True, slots=True)
class NextRelease:
    """Outcome of one release computation.

    `is_needed()` and `can_be_released()` are recomputed from the snapshot on
    every call; nothing is cached on the instance.
    """

    current_tag: SemVer
    next_tag: SemVer
    pull_requests: tuple[PullRequest, ...]
    combined_status: CombinedStatus
    check_runs: CheckRuns
    changelog: Changelog

    def is_needed(self) -> bool:
        return any(pr.warrants_release() for pr in self.pull_requests)

    def can_be_released(self) -> bool:
        if not self.combined_status.is_successful():
            return False
        if not self.check_runs.all_successful():
            return False
        return all(pr.is_release_ready() for pr in self.pull_requests)

    def blockers(self) -> tuple[str, ...]:
        out: list[str] = []
        if not self.combined_status.is_successful():
            out.append(f"combined status is {self.combined_status.state}")
        for run in self.check_runs.failing():
            out.append(f"check run {run.name!r} concluded {run.conclusion or 'not completed'}")
        for pr in self.pull_requests:
            if not pr.has_labels():
                out.append(f"#{pr.number} has no labels")
            elif pr.stability.is_unknown:
                out.append(f"#{pr.number} has no stability label")
            if not (pr.changelog_fulfilled or pr.changelog_not_needed):
                out.append(f"#{pr.number} has no changelog")
        return tuple(out)
