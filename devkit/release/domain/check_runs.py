"""Check run snapshots (GitHub's checks API)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, cast

from devkit.core.result import Err, Ok, Result
from devkit.core.structured import as_obj_list, as_str_dict, get_opt_str, get_str
from devkit.release.domain.status import format_context
from devkit.release.errors import ReleaseError, invalid_payload

CheckConclusion = Literal[
    "success",
    "failure",
    "neutral",
    "cancelled",
    "skipped",
    "timed_out",
    "action_required",
    "stale",
]

_CONCLUSIONS: tuple[str, ...] = (
    "success",
    "failure",
    "neutral",
    "cancelled",
    "skipped",
    "timed_out",
    "action_required",
    "stale",
)

ACCEPTED_CONCLUSIONS: frozenset[str] = frozenset({"success", "neutral", "skipped"})


@dataclass(frozen=True, slots=True)
class CheckRun:
    name: str
    details_url: str
    # None while the run is queued or in progress.
    conclusion: CheckConclusion | None

    @classmethod
    def from_response(cls, raw: object) -> Result[CheckRun, ReleaseError]:
        data = as_str_dict(raw)
        if data is None:
            return Err(invalid_payload("check run must be an object"))

        name = get_str(data, "name")
        if name is None:
            return Err(invalid_payload("check run is missing a name"))

        conclusion_obj = data.get("conclusion")
        if conclusion_obj is not None and not isinstance(conclusion_obj, str):
            return Err(invalid_payload(f"check run {name!r} has an invalid conclusion"))
        if conclusion_obj is not None and conclusion_obj not in _CONCLUSIONS:
            return Err(
                invalid_payload(f"check run {name!r} has an unknown conclusion: {conclusion_obj!r}")
            )

        return Ok(
            cls(
                name=name,
                details_url=get_opt_str(data, "details_url"),
                conclusion=cast(CheckConclusion | None, conclusion_obj),
            )
        )

    def is_successful(self) -> bool:
        return self.conclusion in ACCEPTED_CONCLUSIONS

    def name_formatted(self) -> str:
        return format_context(self.name)


@dataclass(frozen=True, slots=True)
class CheckRuns:
    runs: tuple[CheckRun, ...]

    @classmethod
    def from_response(cls, raw: object) -> Result[CheckRuns, ReleaseError]:
        data = as_str_dict(raw)
        if data is None:
            return Err(invalid_payload("check runs payload must be an object"))

        raw_runs = as_obj_list(data.get("check_runs"))
        if raw_runs is None:
            return Err(invalid_payload("check runs payload is missing 'check_runs'"))

        runs: list[CheckRun] = []
        for item in raw_runs:
            run = CheckRun.from_response(item)
            if isinstance(run, Err):
                return run
            runs.append(run.value)

        return Ok(cls(runs=tuple(runs)))

    def all(self) -> tuple[CheckRun, ...]:
        return self.runs

    def all_successful(self) -> bool:
        return all(run.is_successful() for run in self.runs)

    def failing(self) -> tuple[CheckRun, ...]:
        return tuple(run for run in self.runs if not run.is_successful())
