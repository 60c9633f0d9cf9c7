from __future__ import annotations

import re
from dataclasses import dataclass

from devkit.release.domain.stability import Stability


_TAG_RE = re.compile(r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def to_tag(self) -> str:
        return f"v{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.to_tag()

    def bump(self, stability: Stability) -> SemVer:
        match stability:
            case Stability.MAJOR:
                return SemVer(self.major + 1, 0, 0)
            case Stability.MINOR:
                return SemVer(self.major, self.minor + 1, 0)
            case Stability.PATCH:
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"cannot bump a version by {stability} stability")


INITIAL_VERSION = SemVer(0, 0, 0)


def parse_tag(tag: str) -> SemVer | None:
    """Parse `vX.Y.Z` or `X.Y.Z`; pre-release and build suffixes are rejected."""
    m = _TAG_RE.match(tag.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))
