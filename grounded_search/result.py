"""Explicit success/failure outcome returned at every call boundary."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar, Union

if TYPE_CHECKING:
    from app.exceptions import AgentError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """A failed call; ``error`` carries the typed cause."""

    error: AgentError

    @property
    def ok(self) -> bool:
        return False

    @property
    def value(self) -> None:
        return None

    @property
    def reason(self) -> str:
        return str(self.error) or type(self.error).__name__

    def unwrap(self):
        raise self.error


Result = Union[Success[T], Failure]
