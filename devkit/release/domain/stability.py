"""Change severity derived from pull request labels."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from devkit.release.domain.label import Label


class Stability(Enum):
    UNKNOWN = "unknown"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int | None:
        """Position in patch < minor < major; unknown is outside the order."""
        return _RANK.get(self)

    @property
    def is_unknown(self) -> bool:
        return self is Stability.UNKNOWN

    def to_uppercase_string(self) -> str:
        return self.value.upper()

    @staticmethod
    def max_of(stabilities: Iterable[Stability]) -> Stability | None:
        """Highest ordered stability, ignoring unknown; None if there is none."""
        best: Stability | None = None
        for s in stabilities:
            rank = s.rank
            if rank is None:
                continue
            if best is None or rank > _RANK[best]:
                best = s
        return best


_RANK: dict[Stability, int] = {
    Stability.PATCH: 0,
    Stability.MINOR: 1,
    Stability.MAJOR: 2,
}


# Checked in order; names are compared lowercased.
STABILITY_LABELS: tuple[tuple[Stability, frozenset[str]], ...] = (
    (Stability.MAJOR, frozenset({"major", "bc break", "breaking change"})),
    (Stability.MINOR, frozenset({"minor", "feature", "enhancement"})),
    (Stability.PATCH, frozenset({"patch", "bug fix", "bug", "fix"})),
)


def classify(labels: Iterable[Label]) -> Stability:
    names = {label.normalized_name for label in labels}
    for stability, label_names in STABILITY_LABELS:
        if names & label_names:
            return stability
    return Stability.UNKNOWN
