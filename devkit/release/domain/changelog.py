from __future__ import annotations

from dataclasses import dataclass

from devkit.release.domain.pull_request import PullRequest
from devkit.release.domain.semver import SemVer

# Keep a Changelog ordering; unknown section names follow in first-seen order.
SECTION_ORDER: tuple[str, ...] = (
    "Added",
    "Changed",
    "Deprecated",
    "Removed",
    "Fixed",
    "Security",
)


def _pr_ref(pr: PullRequest) -> str:
    return f"[[#{pr.number}]({pr.html_url})]"


def _author_ref(pr: PullRequest) -> str:
    if pr.author is None:
        return ""
    return f" ([@{pr.author.login}]({pr.author.html_url}))"


def _canonical_section(name: str) -> str:
    for known in SECTION_ORDER:
        if known.lower() == name.strip().lower():
            return known
    return name.strip()


@dataclass(frozen=True, slots=True)
class Changelog:
    tag: SemVer
    previous_tag: SemVer | None
    repository: str | None
    pull_requests: tuple[PullRequest, ...]

    @classmethod
    def from_pull_requests(
        cls,
        pull_requests: list[PullRequest] | tuple[PullRequest, ...],
        *,
        tag: SemVer,
        previous_tag: SemVer | None = None,
        repository: str | None = None,
    ) -> Changelog:
        return cls(
            tag=tag,
            previous_tag=previous_tag,
            repository=repository,
            pull_requests=tuple(pull_requests),
        )

    def _header(self) -> str:
        if self.repository and self.previous_tag is not None:
            url = (
                f"https://github.com/{self.repository}/compare/"
                f"{self.previous_tag.to_tag()}...{self.tag.to_tag()}"
            )
            return f"## [{self.tag.to_tag()}]({url})"
        return f"## {self.tag.to_tag()}"

    def sections(self) -> list[tuple[str, list[str]]]:
        """Changelog entries grouped by section, in rendering order."""
        grouped: dict[str, list[str]] = {}
        extra: list[str] = []
        for pr in self.pull_requests:
            for section in pr.changelog:
                name = _canonical_section(section.name)
                if name not in grouped:
                    grouped[name] = []
                    if name not in SECTION_ORDER:
                        extra.append(name)
                for entry in section.entries:
                    grouped[name].append(f"- {_pr_ref(pr)} {entry}{_author_ref(pr)}")

        order = [name for name in SECTION_ORDER if name in grouped] + extra
        return [(name, grouped[name]) for name in order]

    def as_markdown(self) -> str:
        lines: list[str] = [self._header()]

        for name, entries in self.sections():
            lines.append("")
            lines.append(f"### {name}")
            lines.extend(entries)

        if self.pull_requests:
            lines.append("")
            lines.append("### Pull Requests")
            for pr in self.pull_requests:
                lines.append(f"- {_pr_ref(pr)} {pr.title} ({pr.stability})")

        return "\n".join(lines) + "\n"
