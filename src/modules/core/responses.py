"""Uniform outcome envelope returned by every repository operation.

A repository never raises store faults to its callers.  Instead, each
operation answers with an ``Outcome``:

- ``flag``: ``True`` when the operation ran to completion.
- ``message``: human-readable summary, safe to show to API clients.
- ``data``: the payload (entity, list of entities, or ``None``).
- ``failure``: classification of a failed operation.

A read that finds nothing is **not** a failure: it is ``flag=True`` with
``data=None``.  The view decides how to translate that into a 404.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FailureKind(str, Enum):
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    INFRASTRUCTURE = "infrastructure"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Immutable result of a repository call."""

    flag: bool
    message: str = ""
    data: Optional[T] = None
    failure: Optional[FailureKind] = None

    @classmethod
    def ok(cls, message: str = "", data: Optional[T] = None) -> Outcome[T]:
        return cls(flag=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, failure: FailureKind) -> Outcome[T]:
        return cls(flag=False, message=message, failure=failure)

    @property
    def is_infrastructure_failure(self) -> bool:
        return self.failure is FailureKind.INFRASTRUCTURE

    def as_envelope(self) -> dict:
        """Wire form of a mutation outcome: ``{"flag", "message"}``."""
        return {"flag": self.flag, "message": self.message}
