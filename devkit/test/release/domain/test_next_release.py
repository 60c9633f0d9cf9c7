from __future__ import annotations

from devkit.core.result import Ok
from devkit.release.domain.changelog import Changelog
from devkit.release.domain.check_runs import CheckRuns
from devkit.release.domain.next_release import NextRelease
from devkit.release.domain.pull_request import PullRequest
from devkit.release.domain.semver import SemVer
from devkit.release.domain.status import CombinedStatus
from devkit.test.factories import check_run, check_runs, combined_status, pull_request


def _release(
    prs: list[dict[str, object]],
    *,
    status: dict[str, object] | None = None,
    runs: dict[str, object] | None = None,
) -> NextRelease:
    pull_requests = []
    for raw in prs:
        pr = PullRequest.from_response(raw)
        assert isinstance(pr, Ok)
        pull_requests.append(pr.value)

    cs = CombinedStatus.from_response(status or combined_status())
    cr = CheckRuns.from_response(runs or check_runs())
    assert isinstance(cs, Ok)
    assert isinstance(cr, Ok)

    return NextRelease(
        current_tag=SemVer(1, 0, 0),
        next_tag=SemVer(1, 0, 1),
        pull_requests=tuple(pull_requests),
        combined_status=cs.value,
        check_runs=cr.value,
        changelog=Changelog.from_pull_requests(pull_requests, tag=SemVer(1, 0, 1)),
    )


def test_releasable() -> None:
    release = _release([pull_request(1), pull_request(2, labels=["minor"])])

    assert release.is_needed()
    assert release.can_be_released()
    assert release.blockers() == ()


def test_pending_status_blocks() -> None:
    release = _release([pull_request(1)], status=combined_status(state="pending", statuses=[]))

    assert not release.can_be_released()
    assert release.blockers() == ("combined status is pending",)


def test_failing_check_run_blocks() -> None:
    runs = check_runs(check_run(name="lint"), check_run(name="test", conclusion="failure"))
    release = _release([pull_request(1)], runs=runs)

    assert not release.can_be_released()
    assert release.blockers() == ("check run 'test' concluded failure",)


def test_unlabeled_pull_request_blocks() -> None:
    release = _release([pull_request(1), pull_request(2, labels=[], body="")])

    assert not release.can_be_released()
    assert release.blockers() == ("#2 has no labels", "#2 has no changelog")


def test_unknown_stability_blocks() -> None:
    release = _release([pull_request(1, labels=["dependencies"])])

    assert not release.can_be_released()
    assert release.blockers() == ("#1 has no stability label",)


def test_docs_only_release_is_not_needed() -> None:
    release = _release([pull_request(1, labels=["docs"], body=""), pull_request(2, labels=["pedantic"], body="")])

    assert not release.is_needed()


def test_predicates_are_stable_across_calls() -> None:
    release = _release([pull_request(1)])

    assert release.can_be_released() == release.can_be_released()
    assert release.is_needed() == release.is_needed()
