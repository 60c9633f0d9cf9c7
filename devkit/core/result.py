"""Result type for explicit error handling.

Every boundary of devkit (GitHub reads, payload validation, config loading)
returns a Result instead of raising, so callers decide how a failure is
reported:

    status = CombinedStatus.from_response(payload)
    match status:
        case Ok(value):
            print(value.state)
        case Err(error):
            print(error.pretty())

Callers narrow with `isinstance(result, Err)` and return the Err unchanged
to propagate it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying a value."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result carrying an error payload."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
