"""Repository interfaces and implementations.

This package defines the generic repository contract shared by every entity
kind and its concrete implementation over SQLite under
:mod:`personalos.repositories.sqlite`. Repositories never expose the store
connection; every call is routed through the store serializer.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, Optional, TypeVar

from personalos.domain.entities import Entity

E = TypeVar("E", bound=Entity)

Predicate = Callable[[E], bool]


class Repository(ABC, Generic[E]):
    """CRUD surface over one entity kind."""

    @abstractmethod
    def save(self, entity: E) -> E:
        """Insert or update ``entity`` by identity and return the stored copy."""

    @abstractmethod
    def delete(self, entity: E) -> bool:
        """Remove the row with ``entity.id``; ``False`` if it was already absent."""

    @abstractmethod
    def fetch_all(self) -> list[E]:
        """Return every row of this kind in insertion order."""

    @abstractmethod
    def fetch(self, predicate: Optional[Predicate[E]] = None) -> list[E]:
        """Return the rows accepted by ``predicate``, in insertion order."""

    @abstractmethod
    def delete_all(self) -> int:
        """Remove every row of this kind in one serialized pass."""

    @abstractmethod
    def get(self, entity_id: str) -> Optional[E]:
        """Retrieve an entity by identifier."""

    @abstractmethod
    def insert(self, entity: E) -> E:
        """Persist a new entity; an existing identity is a constraint violation."""

    @abstractmethod
    def save_all(self, entities: Iterable[E]) -> list[E]:
        """Save several entities atomically."""

    @abstractmethod
    def delete_where(self, predicate: Predicate[E]) -> int:
        """Remove the rows accepted by ``predicate`` in one serialized pass."""

    @abstractmethod
    def count(self, predicate: Optional[Predicate[E]] = None) -> int:
        """Count rows, optionally only those accepted by ``predicate``."""

    def fetch_one(self, predicate: Predicate[E]) -> Optional[E]:
        """Return the first row accepted by ``predicate``."""
        rows = self.fetch(predicate)
        return rows[0] if rows else None

    def exists(self, predicate: Predicate[E]) -> bool:
        return self.count(predicate) > 0
