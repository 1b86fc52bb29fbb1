"""Result type used at every component boundary.

Components of the release workflow never raise across their public API.
They return ``Ok(value)`` or ``Err(failure)`` and the caller decides what to
do, which keeps the mapping from failure to exit code in one place.

Usage:
    match resolver.lookup("app-1", "1.0.0"):
        case Ok(None):
            print("new release")
        case Ok(release):
            print(f"existing release {release.id}")
        case Err(failure):
            print(f"lookup failed: {failure.message}")

Callers that only need to bail out use ``isinstance(result, Err)`` and
return early.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Translate the failure, e.g. an ``ApiError`` into a workflow failure."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
