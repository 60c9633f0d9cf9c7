"""Merged pull requests and the changelog block of their description.

Pull request descriptions follow a template with a dedicated section:

    ## Changelog

    ```markdown
    ### Added
    - Added `Foo::bar()` to do great things.
    ### Fixed
    - Fixed crash when `baz` is empty.
    ```

A pull request "fulfills" its changelog when that block holds at least one
section with at least one entry. Pull requests labeled as pedantic or docs
may legitimately skip it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from devkit.core.result import Err, Ok, Result
from devkit.core.structured import (
    as_obj_list,
    as_str_dict,
    get_int,
    get_opt_str,
    get_str,
    get_table,
)
from devkit.release.domain.label import Label
from devkit.release.domain.stability import Stability, classify
from devkit.release.errors import ReleaseError, invalid_payload

CHANGELOG_NOT_NEEDED_LABELS: frozenset[str] = frozenset(
    {"pedantic", "docs", "documentation", "changelog not needed"}
)

_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_CHANGELOG_HEADING_RE = re.compile(r"^\s{0,3}#{1,3}\s*changelog\s*#*\s*$", re.IGNORECASE)
_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_SECTION_RE = re.compile(r"^\s*###\s+(.+?)\s*#*\s*$")
_ENTRY_RE = re.compile(r"^\s*[-*]\s+(.+?)\s*$")


@dataclass(frozen=True, slots=True)
class User:
    login: str
    html_url: str


@dataclass(frozen=True, slots=True)
class ChangelogSection:
    name: str
    entries: tuple[str, ...]


def _changelog_block(body: str) -> list[str] | None:
    """Lines of the fenced block following the Changelog heading, if any."""
    lines = _HTML_COMMENT_RE.sub("", body).splitlines()

    start = None
    for i, line in enumerate(lines):
        if _CHANGELOG_HEADING_RE.match(line):
            start = i + 1
            break
    if start is None:
        return None

    block: list[str] = []
    inside = False
    for line in lines[start:]:
        if _FENCE_RE.match(line):
            if inside:
                return block
            inside = True
            continue
        if inside:
            block.append(line)
        elif line.lstrip().startswith("#"):
            # Next heading before any fence: the section was left empty.
            return None
    return block if inside else None


def parse_changelog(body: str) -> tuple[ChangelogSection, ...]:
    block = _changelog_block(body)
    if block is None:
        return ()

    sections: list[ChangelogSection] = []
    name: str | None = None
    entries: list[str] = []
    for line in block:
        m = _SECTION_RE.match(line)
        if m is not None:
            if name is not None and entries:
                sections.append(ChangelogSection(name=name, entries=tuple(entries)))
            name = m.group(1)
            entries = []
            continue

        m = _ENTRY_RE.match(line)
        if m is not None and name is not None:
            entries.append(m.group(1))

    if name is not None and entries:
        sections.append(ChangelogSection(name=name, entries=tuple(entries)))
    return tuple(sections)


@dataclass(frozen=True, slots=True)
class PullRequest:
    number: int
    title: str
    html_url: str
    labels: tuple[Label, ...]
    author: User | None
    stability: Stability
    changelog: tuple[ChangelogSection, ...]
    changelog_fulfilled: bool
    changelog_not_needed: bool

    @classmethod
    def create(
        cls,
        *,
        number: int,
        title: str,
        html_url: str,
        labels: tuple[Label, ...] = (),
        body: str = "",
        author: User | None = None,
    ) -> PullRequest:
        unique: list[Label] = []
        for label in labels:
            if label not in unique:
                unique.append(label)

        changelog = parse_changelog(body)
        fulfilled = len(changelog) > 0
        not_needed = (not fulfilled) and any(
            label.normalized_name in CHANGELOG_NOT_NEEDED_LABELS for label in unique
        )

        return cls(
            number=number,
            title=title,
            html_url=html_url,
            labels=tuple(unique),
            author=author,
            stability=classify(unique),
            changelog=changelog,
            changelog_fulfilled=fulfilled,
            changelog_not_needed=not_needed,
        )

    @classmethod
    def from_response(cls, raw: object) -> Result[PullRequest, ReleaseError]:
        data = as_str_dict(raw)
        if data is None:
            return Err(invalid_payload("pull request must be an object"))

        number = get_int(data, "number")
        if number is None:
            return Err(invalid_payload("pull request is missing a number"))

        title = get_str(data, "title")
        if title is None:
            return Err(invalid_payload(f"pull request #{number} is missing a title"))

        html_url = get_str(data, "html_url")
        if html_url is None:
            return Err(invalid_payload(f"pull request #{number} is missing html_url"))

        raw_labels = as_obj_list(data.get("labels", []))
        if raw_labels is None:
            return Err(invalid_payload(f"pull request #{number} has invalid labels"))

        labels: list[Label] = []
        for item in raw_labels:
            label = Label.from_response(item)
            if isinstance(label, Err):
                return label
            labels.append(label.value)

        author: User | None = None
        user = get_table(data, "user")
        if user is not None:
            login = get_str(user, "login")
            if login is not None:
                author = User(
                    login=login,
                    html_url=get_str(user, "html_url") or f"https://github.com/{login}",
                )

        return Ok(
            cls.create(
                number=number,
                title=title,
                html_url=html_url,
                labels=tuple(labels),
                body=get_opt_str(data, "body"),
                author=author,
            )
        )

    def has_labels(self) -> bool:
        return len(self.labels) > 0

    def is_release_ready(self) -> bool:
        """Labels set, changelog handled and a known stability."""
        return (
            self.has_labels()
            and (self.changelog_fulfilled or self.changelog_not_needed)
            and not self.stability.is_unknown
        )

    def warrants_release(self) -> bool:
        return not self.stability.is_unknown or not self.changelog_not_needed
