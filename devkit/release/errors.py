"""Error payload shared by every layer of the release context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "gh_missing",
    "gh_auth_required",
    "invalid_input",
    "invalid_payload",
    "unknown_project",
    "unknown_branch",
    "network",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error.

    `invalid_payload` means GitHub returned data that breaks the documented
    record shapes; `network` means the read itself failed.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def invalid_payload(message: str, *, hint: str | None = None) -> ReleaseError:
    return ReleaseError(kind="invalid_payload", message=message, hint=hint)
