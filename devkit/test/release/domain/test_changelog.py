from __future__ import annotations

from devkit.core.result import Ok
from devkit.release.domain.changelog import Changelog
from devkit.release.domain.pull_request import PullRequest
from devkit.release.domain.semver import SemVer
from devkit.test.factories import changelog_body, pull_request


def _pr(number: int, title: str, labels: list[str], body: str) -> PullRequest:
    result = PullRequest.from_response(
        pull_request(number, title=title, labels=labels, body=body)
    )
    assert isinstance(result, Ok)
    return result.value


def _sample() -> list[PullRequest]:
    return [
        _pr(12, "Fix crash", ["patch"], changelog_body("Fixed", "Fixed crash on empty list.")),
        _pr(13, "Add export", ["minor"], changelog_body("Added", "Added CSV export.")),
        _pr(14, "Fix typo", ["docs"], "Docs only."),
        _pr(15, "Translate", ["patch"], changelog_body("Translations", "Added Czech.")),
    ]


def test_as_markdown() -> None:
    changelog = Changelog.from_pull_requests(
        _sample(), tag=SemVer(1, 5, 0), previous_tag=SemVer(1, 4, 0), repository="o/r"
    )

    assert changelog.as_markdown() == (
        "## [v1.5.0](https://github.com/o/r/compare/v1.4.0...v1.5.0)\n"
        "\n"
        "### Added\n"
        "- [[#13](https://github.com/o/r/pull/13)] Added CSV export."
        " ([@jdoe](https://github.com/jdoe))\n"
        "\n"
        "### Fixed\n"
        "- [[#12](https://github.com/o/r/pull/12)] Fixed crash on empty list."
        " ([@jdoe](https://github.com/jdoe))\n"
        "\n"
        "### Translations\n"
        "- [[#15](https://github.com/o/r/pull/15)] Added Czech."
        " ([@jdoe](https://github.com/jdoe))\n"
        "\n"
        "### Pull Requests\n"
        "- [[#12](https://github.com/o/r/pull/12)] Fix crash (patch)\n"
        "- [[#13](https://github.com/o/r/pull/13)] Add export (minor)\n"
        "- [[#14](https://github.com/o/r/pull/14)] Fix typo (unknown)\n"
        "- [[#15](https://github.com/o/r/pull/15)] Translate (patch)\n"
    )


def test_as_markdown_is_idempotent() -> None:
    changelog = Changelog.from_pull_requests(_sample(), tag=SemVer(1, 5, 0))

    assert changelog.as_markdown() == changelog.as_markdown()


def test_same_input_renders_identically() -> None:
    a = Changelog.from_pull_requests(_sample(), tag=SemVer(1, 5, 0), repository="o/r")
    b = Changelog.from_pull_requests(_sample(), tag=SemVer(1, 5, 0), repository="o/r")

    assert a.as_markdown() == b.as_markdown()


def test_header_without_previous_tag() -> None:
    changelog = Changelog.from_pull_requests([], tag=SemVer(0, 0, 1), repository="o/r")

    assert changelog.as_markdown() == "## v0.0.1\n"


def test_section_names_are_canonicalized() -> None:
    prs = [
        _pr(1, "a", ["patch"], changelog_body("fixed", "Fixed a.")),
        _pr(2, "b", ["patch"], changelog_body("FIXED", "Fixed b.")),
    ]
    sections = Changelog.from_pull_requests(prs, tag=SemVer(1, 0, 1)).sections()

    assert [name for name, _ in sections] == ["Fixed"]
    assert len(sections[0][1]) == 2
