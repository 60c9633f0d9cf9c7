from __future__ import annotations

import re
from dataclasses import dataclass, field

from devkit.core.result import Err, Ok, Result
from devkit.core.structured import as_str_dict, get_str
from devkit.release.errors import ReleaseError, invalid_payload

_COLOR_RE = re.compile(r"^[0-9a-fA-F]{6}$")


@dataclass(frozen=True, slots=True)
class Label:
    """A GitHub issue label. Two labels are the same label if their names match."""

    name: str
    color: str = field(compare=False)

    @classmethod
    def from_response(cls, raw: object) -> Result[Label, ReleaseError]:
        data = as_str_dict(raw)
        if data is None:
            return Err(invalid_payload("label must be an object"))

        name = get_str(data, "name")
        if name is None:
            return Err(invalid_payload("label is missing a name"))

        color = (get_str(data, "color") or "").lstrip("#")
        if _COLOR_RE.match(color) is None:
            return Err(invalid_payload(f"label {name!r} has an invalid color: {color!r}"))

        return Ok(cls(name=name, color=color.lower()))

    @property
    def normalized_name(self) -> str:
        return self.name.strip().lower()

    def as_hex_code(self) -> str:
        return f"#{self.color}"
