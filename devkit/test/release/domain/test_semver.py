from __future__ import annotations

import pytest

from devkit.release.domain.semver import INITIAL_VERSION, SemVer, parse_tag
from devkit.release.domain.stability import Stability


def test_bump() -> None:
    v = SemVer(1, 2, 3)
    assert v.bump(Stability.PATCH) == SemVer(1, 2, 4)
    assert v.bump(Stability.MINOR) == SemVer(1, 3, 0)
    assert v.bump(Stability.MAJOR) == SemVer(2, 0, 0)


def test_bump_unknown_is_a_programming_error() -> None:
    with pytest.raises(AssertionError):
        SemVer(1, 2, 3).bump(Stability.UNKNOWN)


def test_to_tag() -> None:
    assert SemVer(1, 5, 0).to_tag() == "v1.5.0"
    assert str(INITIAL_VERSION) == "v0.0.0"


def test_parse_tag() -> None:
    assert parse_tag("v1.2.3") == SemVer(1, 2, 3)
    assert parse_tag("4.10.0") == SemVer(4, 10, 0)


def test_parse_tag_rejects_prereleases_and_garbage() -> None:
    assert parse_tag("v1.2.3-beta.1") is None
    assert parse_tag("1.2") is None
    assert parse_tag("v01.2.3") is None
    assert parse_tag("latest") is None


def test_ordering() -> None:
    assert max([SemVer(1, 10, 0), SemVer(1, 9, 9), SemVer(0, 99, 0)]) == SemVer(1, 10, 0)
