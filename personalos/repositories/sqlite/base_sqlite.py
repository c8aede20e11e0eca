from __future__ import annotations

import re
import sqlite3
from datetime import datetime
from typing import Callable, ClassVar, Iterable, Optional, TypeVar, cast

from pydantic import ValidationError

from ...domain.entities import Entity, utc_now
from ...logging_config import DATA, get_logger
from .. import E, Predicate, Repository
from ..errors import StorageIOError, translate_store_errors
from .serializer import StoreSerializer

T = TypeVar("T")

_TABLE_NAME = re.compile(r"^[a-z_][a-z0-9_]*$")


class SqliteRepository(Repository[E]):
    """SQLite implementation of :class:`Repository` shared by all entity kinds.

    Each kind gets its own table holding the entity as a JSON payload next to
    its identity and timestamps. ``seq`` records insertion order and survives
    updates. Subclasses only set ``entity_type`` and ``table``.
    """

    entity_type: ClassVar[type[Entity]]
    table: ClassVar[str]

    def __init__(self, serializer: StoreSerializer) -> None:
        if not _TABLE_NAME.match(self.table):
            raise ValueError(f"Invalid table name: {self.table!r}")
        self._serializer = serializer
        self._logger = get_logger(DATA)
        self._run(self._create_table)

    def _create_table(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                entity_id TEXT NOT NULL UNIQUE,
                payload TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )

    # -- public API ----------------------------------------------------------

    def save(self, entity: E) -> E:
        stored = self._run(lambda conn: self._upsert(conn, entity))
        self._logger.debug("Entity saved", extra={"table": self.table, "entity_id": stored.id})
        return stored

    def save_all(self, entities: Iterable[E]) -> list[E]:
        batch = list(entities)

        def op(conn: sqlite3.Connection) -> list[E]:
            return [self._upsert(conn, entity) for entity in batch]

        stored = self._run(op)
        self._logger.debug("Entities saved", extra={"table": self.table, "count": len(stored)})
        return stored

    def insert(self, entity: E) -> E:
        stored = cast(E, entity.model_copy(deep=True))

        def op(conn: sqlite3.Connection) -> None:
            conn.execute(
                f"INSERT INTO {self.table} (entity_id, payload, created_at, updated_at)"
                " VALUES (?, ?, ?, ?)",
                self._row_params(stored),
            )

        self._run(op)
        return stored

    def delete(self, entity: E) -> bool:
        removed = self._run(lambda conn: self._delete_id(conn, entity.id))
        if not removed:
            self._logger.debug(
                "Entity not found for deletion",
                extra={"table": self.table, "entity_id": entity.id},
            )
        return removed

    def delete_all(self) -> int:
        def op(conn: sqlite3.Connection) -> int:
            ids = [
                row[0]
                for row in conn.execute(f"SELECT entity_id FROM {self.table} ORDER BY seq")
            ]
            for entity_id in ids:
                self._delete_id(conn, entity_id)
            return len(ids)

        removed = self._run(op)
        self._logger.info("Table cleared", extra={"table": self.table, "removed": removed})
        return removed

    def delete_where(self, predicate: Predicate[E]) -> int:
        def op(conn: sqlite3.Connection) -> int:
            victims = [e for e in self._select_all(conn) if predicate(e)]
            for entity in victims:
                self._delete_id(conn, entity.id)
            return len(victims)

        return self._run(op)

    def fetch_all(self) -> list[E]:
        return self._run(self._select_all)

    def fetch(self, predicate: Optional[Predicate[E]] = None) -> list[E]:
        if predicate is None:
            return self.fetch_all()
        return self._run(lambda conn: [e for e in self._select_all(conn) if predicate(e)])

    def get(self, entity_id: str) -> Optional[E]:
        def op(conn: sqlite3.Connection) -> Optional[E]:
            row = conn.execute(
                f"SELECT payload FROM {self.table} WHERE entity_id = ?",
                (entity_id,),
            ).fetchone()
            return self._decode(row[0]) if row else None

        return self._run(op)

    def count(self, predicate: Optional[Predicate[E]] = None) -> int:
        if predicate is None:
            return self._run(
                lambda conn: int(conn.execute(f"SELECT COUNT(*) FROM {self.table}").fetchone()[0])
            )
        return len(self.fetch(predicate))

    # -- helpers, always called on the store worker -----------------------

    def _run(self, operation: Callable[[sqlite3.Connection], T]) -> T:
        with translate_store_errors(self.table):
            return self._serializer.run(operation)

    def _select_all(self, conn: sqlite3.Connection) -> list[E]:
        cur = conn.execute(f"SELECT payload FROM {self.table} ORDER BY seq")
        return [self._decode(row[0]) for row in cur.fetchall()]

    def _upsert(self, conn: sqlite3.Connection, entity: E) -> E:
        row = conn.execute(
            f"SELECT created_at, updated_at FROM {self.table} WHERE entity_id = ?",
            (entity.id,),
        ).fetchone()
        if row is None:
            stored = cast(E, entity.model_copy(deep=True))
        else:
            # Creation time is fixed by the first save; updates only move forward.
            created_at = datetime.fromisoformat(row[0])
            updated_at = max(utc_now(), datetime.fromisoformat(row[1]), entity.updated_at)
            stored = cast(
                E,
                entity.model_copy(
                    update={"created_at": created_at, "updated_at": updated_at}, deep=True
                ),
            )
        conn.execute(
            f"INSERT INTO {self.table} (entity_id, payload, created_at, updated_at)"
            " VALUES (?, ?, ?, ?)"
            " ON CONFLICT(entity_id) DO UPDATE SET"
            " payload = excluded.payload, updated_at = excluded.updated_at",
            self._row_params(stored),
        )
        return stored

    def _delete_id(self, conn: sqlite3.Connection, entity_id: str) -> bool:
        cur = conn.execute(f"DELETE FROM {self.table} WHERE entity_id = ?", (entity_id,))
        return cur.rowcount > 0

    def _decode(self, payload: str) -> E:
        try:
            return cast(E, self.entity_type.model_validate_json(payload))
        except ValidationError as exc:
            raise StorageIOError(
                f"{self.table}: unreadable {self.entity_type.__name__} payload", table=self.table
            ) from exc

    @staticmethod
    def _row_params(entity: Entity) -> tuple[str, str, str, str]:
        return (
            entity.id,
            entity.model_dump_json(),
            entity.created_at.isoformat(),
            entity.updated_at.isoformat(),
        )
