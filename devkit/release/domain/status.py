"""Commit status snapshots (GitHub's legacy status API)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, cast

from devkit.core.result import Err, Ok, Result
from devkit.core.structured import as_obj_list, as_str_dict, get_opt_str, get_str
from devkit.release.errors import ReleaseError, invalid_payload

StatusState = Literal["success", "failure", "pending", "error"]
CombinedState = Literal["success", "failure", "pending"]

_STATUS_STATES: tuple[str, ...] = ("success", "failure", "pending", "error")
_COMBINED_STATES: tuple[str, ...] = ("success", "failure", "pending")


def format_context(context: str) -> str:
    """Readable name for a status context.

    `continuous-integration/travis-ci/push` becomes `Travis Ci (push)`.
    """
    parts = [p for p in context.split("/") if p]
    if not parts:
        return context
    if parts[0] == "continuous-integration":
        parts = parts[1:] or parts

    name = parts[0].replace("-", " ").replace("_", " ").title()
    if len(parts) > 1:
        return f"{name} ({'/'.join(parts[1:])})"
    return name


@dataclass(frozen=True, slots=True)
class Status:
    context: str
    description: str
    target_url: str
    state: StatusState

    @classmethod
    def from_response(cls, raw: object) -> Result[Status, ReleaseError]:
        data = as_str_dict(raw)
        if data is None:
            return Err(invalid_payload("status must be an object"))

        context = get_str(data, "context")
        if context is None:
            return Err(invalid_payload("status is missing a context"))

        state = get_str(data, "state")
        if state not in _STATUS_STATES:
            return Err(invalid_payload(f"status {context!r} has an unknown state: {state!r}"))

        return Ok(
            cls(
                context=context,
                description=get_opt_str(data, "description"),
                target_url=get_opt_str(data, "target_url"),
                state=cast(StatusState, state),
            )
        )

    def is_successful(self) -> bool:
        return self.state == "success"

    def context_formatted(self) -> str:
        return format_context(self.context)


@dataclass(frozen=True, slots=True)
class CombinedStatus:
    state: CombinedState
    statuses: tuple[Status, ...]

    @classmethod
    def from_response(cls, raw: object) -> Result[CombinedStatus, ReleaseError]:
        data = as_str_dict(raw)
        if data is None or not data:
            return Err(invalid_payload("combined status must be a non-empty object"))

        if "state" not in data:
            return Err(invalid_payload("combined status is missing 'state'"))

        state = get_str(data, "state")
        if state is None:
            return Err(invalid_payload("combined status has an empty state"))
        if state not in _COMBINED_STATES:
            return Err(invalid_payload(f"combined status has an unknown state: {state!r}"))

        raw_statuses = as_obj_list(data.get("statuses"))
        if raw_statuses is None:
            return Err(invalid_payload("combined status is missing 'statuses'"))

        # An aggregate success or failure has to be backed by a concrete check.
        if not raw_statuses and state != "pending":
            return Err(
                invalid_payload(f"combined status is {state!r} but lists no statuses")
            )

        statuses: list[Status] = []
        for item in raw_statuses:
            status = Status.from_response(item)
            if isinstance(status, Err):
                return status
            statuses.append(status.value)

        return Ok(cls(state=cast(CombinedState, state), statuses=tuple(statuses)))

    def is_successful(self) -> bool:
        return self.state == "success"
