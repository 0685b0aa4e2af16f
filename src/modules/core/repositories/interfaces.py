"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  View code depends on
this abstraction, never on Django ORM directly.

Every operation answers with an ``Outcome`` so that callers deal with a
single result channel for reads and writes alike.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, List, Optional, TypeVar

from modules.core.responses import Outcome

T = TypeVar("T")

Predicate = Callable[[T], bool]


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the entity managed by the
    repository (e.g. ``Product``).
    """

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @abstractmethod
    def create(self, entity: T) -> Outcome[T]:
        """Persist a new entity."""

    @abstractmethod
    def update(self, entity: T) -> Outcome[T]:
        """Replace an existing entity, matched by primary key."""

    @abstractmethod
    def delete(self, entity: T) -> Outcome[T]:
        """Remove an existing entity, matched by primary key."""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @abstractmethod
    def find_by_id(self, id: int) -> Outcome[Optional[T]]:
        """Retrieve an entity by its primary key (``data=None`` if absent)."""

    @abstractmethod
    def get_all(self) -> Outcome[List[T]]:
        """Return a detached snapshot of every entity."""

    @abstractmethod
    def get_by_predicate(self, predicate: Predicate[T]) -> Outcome[Optional[T]]:
        """Return the first entity matching ``predicate`` (``data=None`` if none)."""
