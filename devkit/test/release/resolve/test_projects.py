from __future__ import annotations

from pathlib import Path

from devkit.core.result import Err, Ok
from devkit.release.domain.project import Branch
from devkit.release.resolve.projects import load_projects, projects_from_dict


def _data(**entries: object) -> dict[str, object]:
    return {"projects": entries}


def test_projects_from_dict() -> None:
    result = projects_from_dict(
        _data(
            block={"repository": "o/block", "branches": ["5.x"]},
            admin={"repository": "o/admin", "branches": ["5.x", "4.x"]},
        )
    )

    assert isinstance(result, Ok)
    config = result.value
    assert config.names() == ["admin", "block"]

    admin = config.by_name("admin")
    assert isinstance(admin, Ok)
    assert admin.value.repository == "o/admin"
    assert admin.value.unstable_branch() == Branch("5.x")
    assert admin.value.stable_branch() == Branch("4.x")
    assert admin.value.default_branch() == Branch("4.x")
    assert admin.value.branch_names_reverse() == ["4.x", "5.x"]

    block = config.by_name("block")
    assert isinstance(block, Ok)
    assert block.value.stable_branch() is None
    assert block.value.default_branch() == Branch("5.x")


def test_unknown_project_and_branch() -> None:
    result = projects_from_dict(_data(admin={"repository": "o/admin", "branches": ["5.x"]}))
    assert isinstance(result, Ok)

    missing = result.value.by_name("nope")
    assert isinstance(missing, Err)
    assert missing.error.kind == "unknown_project"

    admin = result.value.by_name("admin")
    assert isinstance(admin, Ok)
    branch = admin.value.branch("3.x")
    assert isinstance(branch, Err)
    assert branch.error.kind == "unknown_branch"
    assert branch.error.hint == "available: 5.x"


def test_rejects_bad_entries() -> None:
    assert isinstance(projects_from_dict({}), Err)
    assert isinstance(projects_from_dict(_data(a="o/a")), Err)
    assert isinstance(projects_from_dict(_data(a={"repository": "nope", "branches": ["1.x"]})), Err)
    assert isinstance(projects_from_dict(_data(a={"repository": "o/a", "branches": []})), Err)
    assert isinstance(projects_from_dict(_data(a={"repository": "o/a", "branches": [1]})), Err)


def test_load_projects(tmp_path: Path) -> None:
    path = tmp_path / "projects.toml"
    path.write_text(
        '[projects.admin-bundle]\nrepository = "o/admin"\nbranches = ["5.x", "4.x"]\n',
        encoding="utf-8",
    )

    result = load_projects(path)
    assert isinstance(result, Ok)
    assert result.value.names() == ["admin-bundle"]
