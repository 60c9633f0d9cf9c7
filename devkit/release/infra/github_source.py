"""`ReleaseSource` backed by the GitHub REST API through `gh api`."""

from __future__ import annotations

import re
from dataclasses import dataclass
from itertools import count
from pathlib import Path
from urllib.parse import quote

from devkit.core.result import Err, Ok, Result
from devkit.core.structured import as_obj_list, as_str_dict, get_int, get_list, get_str, get_table
from devkit.release.domain.project import Branch, Project
from devkit.release.domain.semver import INITIAL_VERSION, SemVer, parse_tag
from devkit.release.errors import ReleaseError, invalid_payload
from devkit.release.infra.gh import gh_api_json

PER_PAGE = 100
# GitHub search never returns more than 1000 results for one query.
SEARCH_MAX_PAGES = 10

_MAJOR_BRANCH_RE = re.compile(r"^(\d+)\.x$")
_MINOR_BRANCH_RE = re.compile(r"^(\d+)\.(\d+)\.x$")


@dataclass(frozen=True, slots=True)
class RepoTag:
    name: str
    version: SemVer


def tag_matches_branch(version: SemVer, branch: Branch) -> bool:
    """Whether a release line branch (`4.x`, `4.2.x`) can own this version.

    Other branch names (main, master) accept every version.
    """
    m = _MINOR_BRANCH_RE.match(branch.name)
    if m is not None:
        return version.major == int(m.group(1)) and version.minor == int(m.group(2))
    m = _MAJOR_BRANCH_RE.match(branch.name)
    if m is not None:
        return version.major == int(m.group(1))
    return True


def _merged_at(item: object) -> tuple[str, int]:
    data = as_str_dict(item) or {}
    pr = get_table(data, "pull_request") or {}
    return (get_str(pr, "merged_at") or "", get_int(data, "number") or 0)


class GithubReleaseSource:
    def __init__(self, *, cwd: Path) -> None:
        self._cwd = cwd

    def _tags(self, project: Project) -> Result[list[RepoTag], ReleaseError]:
        # The tags endpoint is not ordered by version: read every page.
        raw: list[object] = []
        for page in count(1):
            endpoint = f"repos/{project.repository}/tags?per_page={PER_PAGE}&page={page}"
            obj = gh_api_json(cwd=self._cwd, endpoint=endpoint)
            if isinstance(obj, Err):
                return obj

            items = as_obj_list(obj.value)
            if items is None:
                return Err(invalid_payload(f"unexpected tags payload: {project.repository}"))
            raw.extend(items)
            if len(items) < PER_PAGE:
                break

        out: list[RepoTag] = []
        for item in raw:
            d = as_str_dict(item)
            if d is None:
                continue
            name = get_str(d, "name")
            if name is None:
                continue
            version = parse_tag(name)
            # Pre-releases and foreign tags never count as a release.
            if version is None:
                continue
            out.append(RepoTag(name=name, version=version))
        return Ok(out)

    def last_release_tag(self, project: Project, branch: Branch) -> Result[SemVer, ReleaseError]:
        tags = self._tags(project)
        if isinstance(tags, Err):
            return tags

        candidates = [t.version for t in tags.value if tag_matches_branch(t.version, branch)]
        return Ok(max(candidates, default=INITIAL_VERSION))

    def _tag_date(self, project: Project, tag: SemVer) -> Result[str | None, ReleaseError]:
        if tag == INITIAL_VERSION:
            return Ok(None)

        tags = self._tags(project)
        if isinstance(tags, Err):
            return tags
        names = [t.name for t in tags.value if t.version == tag]
        if not names:
            return Err(
                ReleaseError(
                    kind="invalid_input",
                    message=f"tag {tag.to_tag()} not found in {project.repository}",
                )
            )

        endpoint = f"repos/{project.repository}/commits/{quote(names[0], safe='')}"
        obj = gh_api_json(cwd=self._cwd, endpoint=endpoint)
        if isinstance(obj, Err):
            return obj

        data = as_str_dict(obj.value)
        commit = get_table(data, "commit") if data is not None else None
        committer = get_table(commit, "committer") if commit is not None else None
        date = get_str(committer, "date") if committer is not None else None
        if date is None:
            return Err(invalid_payload(f"missing commit date for tag {names[0]}", hint=endpoint))
        return Ok(date)

    def merged_pull_requests_since(
        self, project: Project, branch: Branch, tag: SemVer
    ) -> Result[list[object], ReleaseError]:
        date = self._tag_date(project, tag)
        if isinstance(date, Err):
            return date

        query = f"repo:{project.repository} is:pr is:merged base:{branch.name}"
        if date.value is not None:
            query += f" merged:>{date.value}"
        base = f"search/issues?q={quote(query, safe='/:>')}&per_page={PER_PAGE}"

        collected: list[object] = []
        total: int | None = None
        for page in range(1, SEARCH_MAX_PAGES + 1):
            endpoint = f"{base}&page={page}"
            obj = gh_api_json(cwd=self._cwd, endpoint=endpoint)
            if isinstance(obj, Err):
                return obj

            data = as_str_dict(obj.value)
            items = get_list(data, "items") if data is not None else None
            if data is None or items is None:
                return Err(invalid_payload(f"unexpected search payload: {project.repository}"))
            if data.get("incomplete_results") is True:
                return Err(
                    invalid_payload(
                        f"GitHub search returned incomplete results for {project.repository}",
                        hint="retry later",
                    )
                )

            collected.extend(items)
            page_total = get_int(data, "total_count")
            if page_total is not None:
                total = page_total
            if len(items) < PER_PAGE or (total is not None and len(collected) >= total):
                break

        if total is not None and len(collected) < total:
            return Err(
                invalid_payload(
                    f"only {len(collected)} of {total} merged pull requests could be read "
                    f"for {project.repository}@{branch.name}",
                    hint=base,
                )
            )

        return Ok(sorted(collected, key=_merged_at))

    def combined_status(self, project: Project, ref: str) -> Result[object, ReleaseError]:
        return gh_api_json(
            cwd=self._cwd,
            endpoint=f"repos/{project.repository}/commits/{quote(ref, safe='')}/status",
        )

    def check_runs(self, project: Project, ref: str) -> Result[object, ReleaseError]:
        return gh_api_json(
            cwd=self._cwd,
            endpoint=(
                f"repos/{project.repository}/commits/{quote(ref, safe='')}/check-runs"
                f"?per_page={PER_PAGE}"
            ),
        )
