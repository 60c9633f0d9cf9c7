from __future__ import annotations

from devkit.core.result import Err, Ok
from devkit.release.domain.pull_request import PullRequest
from devkit.release.domain.semver import INITIAL_VERSION, SemVer
from devkit.release.domain.stability import Stability
from devkit.release.errors import ReleaseError
from devkit.release.flow.determine import (
    Determined,
    DetermineNextRelease,
    NothingToRelease,
    aggregate_stability,
)
from devkit.test.factories import (
    FakeReleaseSource,
    check_run,
    check_runs,
    combined_status,
    project,
    pull_request,
    status,
)


def _determine(source: FakeReleaseSource) -> Determined:
    p = project()
    result = DetermineNextRelease(source)(p, p.unstable_branch())
    assert isinstance(result, Ok)
    assert isinstance(result.value, Determined)
    return result.value


def test_minor_release_is_computed_and_releasable() -> None:
    source = FakeReleaseSource(
        tag=SemVer(1, 4, 0),
        pull_requests=[
            pull_request(10, labels=["Bug fix"]),
            pull_request(11, labels=["Feature"]),
        ],
    )

    release = _determine(source).next_release

    assert release.current_tag == SemVer(1, 4, 0)
    assert release.next_tag == SemVer(1, 5, 0)
    assert release.is_needed()
    assert release.can_be_released()
    assert release.changelog.as_markdown().startswith(
        "## [v1.5.0](https://github.com/o/r/compare/v1.4.0...v1.5.0)\n"
    )
    assert source.calls == [
        "last_release_tag",
        "merged_pull_requests_since",
        "combined_status",
        "check_runs",
    ]


def test_nothing_merged_since_last_release() -> None:
    source = FakeReleaseSource(tag=SemVer(1, 4, 0), pull_requests=[])
    p = project()

    result = DetermineNextRelease(source)(p, p.unstable_branch())

    assert isinstance(result, Ok)
    assert isinstance(result.value, NothingToRelease)
    assert result.value.message() == (
        "No pull requests merged since last release v1.4.0 of admin-bundle on branch 5.x."
    )
    assert source.calls == ["last_release_tag", "merged_pull_requests_since"]


def test_unlabeled_pull_request_blocks_release() -> None:
    source = FakeReleaseSource(pull_requests=[pull_request(10, labels=[])])

    release = _determine(source).next_release

    assert release.next_tag == SemVer(1, 4, 1)
    assert not release.can_be_released()
    assert "#10 has no labels" in release.blockers()


def test_failing_status_blocks_release() -> None:
    source = FakeReleaseSource(
        pull_requests=[pull_request(10)],
        status=combined_status(state="failure", statuses=[status(state="failure")]),
    )

    release = _determine(source).next_release

    assert not release.can_be_released()
    assert release.blockers() == ("combined status is failure",)


def test_failing_check_run_blocks_release() -> None:
    source = FakeReleaseSource(
        pull_requests=[pull_request(10)],
        runs=check_runs(check_run(conclusion="timed_out")),
    )

    assert not _determine(source).next_release.can_be_released()


def test_major_wins() -> None:
    source = FakeReleaseSource(
        tag=SemVer(2, 3, 4),
        pull_requests=[
            pull_request(1, labels=["patch"]),
            pull_request(2, labels=["BC Break"]),
            pull_request(3, labels=["minor"]),
        ],
    )

    assert _determine(source).next_release.next_tag == SemVer(3, 0, 0)


def test_all_unknown_stabilities_fall_back_to_patch() -> None:
    source = FakeReleaseSource(pull_requests=[pull_request(1, labels=["dependencies"])])

    release = _determine(source).next_release

    assert release.next_tag == SemVer(1, 4, 1)
    assert not release.can_be_released()


def test_docs_only_changes_do_not_need_a_release() -> None:
    source = FakeReleaseSource(pull_requests=[pull_request(1, labels=["docs"], body="")])

    release = _determine(source).next_release

    assert not release.is_needed()


def test_first_release_has_no_compare_link() -> None:
    source = FakeReleaseSource(tag=INITIAL_VERSION, pull_requests=[pull_request(1)])

    release = _determine(source).next_release

    assert release.next_tag == SemVer(0, 0, 1)
    assert release.changelog.as_markdown().startswith("## v0.0.1\n")


def test_source_error_propagates() -> None:
    error = ReleaseError(kind="network", message="gh api failed")
    source = FakeReleaseSource(error=error)
    p = project()

    result = DetermineNextRelease(source)(p, p.unstable_branch())

    assert isinstance(result, Err)
    assert result.error is error
    assert source.calls == ["last_release_tag"]


def test_invalid_pull_request_payload_is_an_error() -> None:
    source = FakeReleaseSource(pull_requests=[{"number": 1}])
    p = project()

    result = DetermineNextRelease(source)(p, p.unstable_branch())

    assert isinstance(result, Err)
    assert result.error.kind == "invalid_payload"


def test_invalid_status_payload_is_an_error() -> None:
    source = FakeReleaseSource(pull_requests=[pull_request(1)], status={"statuses": []})
    p = project()

    result = DetermineNextRelease(source)(p, p.unstable_branch())

    assert isinstance(result, Err)
    assert result.error.kind == "invalid_payload"


def test_aggregate_stability() -> None:
    def pr(*labels: str) -> PullRequest:
        r = PullRequest.from_response(pull_request(labels=list(labels)))
        assert isinstance(r, Ok)
        return r.value

    assert aggregate_stability([pr("patch"), pr("minor")]) is Stability.MINOR
    assert aggregate_stability([pr("docs")]) is Stability.PATCH
    assert aggregate_stability([]) is Stability.PATCH
