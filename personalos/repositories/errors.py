"""Error types raised by the store and its repositories."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator


class StoreNotConfiguredError(RuntimeError):
    """Raised when the store is used before ``configure`` or after ``close``.

    This signals broken initialisation ordering and is not meant to be caught.
    """


class StoreError(Exception):
    """Base class for failures surfaced by repository operations."""

    def __init__(self, message: str, *, table: str | None = None) -> None:
        super().__init__(message)
        self.table = table


class ConstraintViolationError(StoreError):
    """An identity collision or other integrity constraint failure."""


class StorageIOError(StoreError):
    """The storage medium is unreachable, locked or holds unreadable data."""


@contextmanager
def translate_store_errors(table: str) -> Iterator[None]:
    """Re-raise SQLite errors as :class:`StoreError` subclasses.

    The original exception is kept as ``__cause__``.
    """
    try:
        yield
    except sqlite3.IntegrityError as exc:
        raise ConstraintViolationError(f"{table}: {exc}", table=table) from exc
    except sqlite3.Error as exc:
        raise StorageIOError(f"{table}: {exc}", table=table) from exc
