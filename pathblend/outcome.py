"""Explicit success/failure results for operations the geometry engine can refuse.

Wrapped engine calls never return ``None`` to mean "no path". They return
``Success(value)`` or ``Failure(reason)``; callers branch on ``.ok``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class FailureReason(enum.Enum):
    INCOMPATIBLE = "incompatible"  # command sequences cannot be blended
    REJECTED = "rejected"  # engine refused the buffer or operation


class OutcomeError(RuntimeError):
    """Raised when unwrapping a Failure."""


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    reason: FailureReason
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise OutcomeError(f"{self.reason.value}: {self.detail}" if self.detail else self.reason.value)


Outcome = Union[Success[T], Failure]
