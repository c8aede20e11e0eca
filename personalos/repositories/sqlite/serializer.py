from __future__ import annotations

import asyncio
import os
import sqlite3
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from types import TracebackType
from typing import Callable, Optional, TypeVar

from ...logging_config import DATA, get_logger
from ..errors import StoreNotConfiguredError, translate_store_errors

T = TypeVar("T")

MEMORY_DB = ":memory:"


class StoreSerializer:
    """Single-writer gate in front of the SQLite store.

    - One worker thread owns the connection; every operation runs there, one
      at a time, in submission order.
    - Each operation runs inside a transaction that is committed when it
      returns and rolled back when it raises. Its exception reaches the
      caller unchanged.
    - An operation that calls back into the serializer runs inline within the
      current turn instead of queueing behind itself.
    - Once submitted, an operation always runs to completion, even if the
      caller stops waiting for it.
    """

    def __init__(self, db_path: Optional[str | os.PathLike[str]] = None) -> None:
        self._state_lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None
        self._conn: Optional[sqlite3.Connection] = None
        self._worker_ident: Optional[int] = None
        self._db_path: Optional[str] = None
        self._logger = get_logger(DATA)
        if db_path is not None:
            self.configure(db_path)

    @property
    def db_path(self) -> Optional[str]:
        return self._db_path

    @property
    def is_configured(self) -> bool:
        return self._executor is not None

    def configure(self, db_path: str | os.PathLike[str]) -> None:
        """Open the store at ``db_path`` and start the worker thread."""
        path = os.fspath(db_path)
        with self._state_lock:
            if self._executor is not None:
                raise RuntimeError(f"Store already configured for {self._db_path}")
            if path != MEMORY_DB:
                Path(path).parent.mkdir(parents=True, exist_ok=True)
            executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="personalos-store")
            try:
                executor.submit(self._open, path).result()
            except BaseException:
                executor.shutdown(wait=True)
                raise
            self._executor = executor
            self._db_path = path
        self._logger.info("Store configured", extra={"db_path": path})

    def run(self, operation: Callable[[sqlite3.Connection], T]) -> T:
        """Run ``operation`` with exclusive access to the store and return its result."""
        return self.submit(operation).result()

    def submit(self, operation: Callable[[sqlite3.Connection], T]) -> "Future[T]":
        """Queue ``operation`` and return a future for its result."""
        if self._in_worker():
            future: Future[T] = Future()
            try:
                future.set_result(operation(self._conn))  # type: ignore[arg-type]
            except Exception as exc:
                future.set_exception(exc)
            return future

        executor = self._executor
        if executor is None:
            raise StoreNotConfiguredError(
                "Store not configured. Call configure(db_path) before using repositories."
            )
        try:
            return executor.submit(self._execute, operation)
        except RuntimeError as exc:
            # Lost a race with close(): the executor no longer accepts work.
            raise StoreNotConfiguredError("Store has been closed") from exc

    async def run_async(self, operation: Callable[[sqlite3.Connection], T]) -> T:
        """Awaitable variant of :meth:`run`.

        Cancelling the awaiting task does not cancel the store operation.
        """
        future = asyncio.wrap_future(self.submit(operation))
        return await asyncio.shield(future)

    def close(self) -> None:
        """Drain queued operations, then close the connection."""
        if self._in_worker():
            raise RuntimeError("close() cannot be called from inside a store operation")
        with self._state_lock:
            executor = self._executor
            if executor is None:
                return
            self._executor = None
            executor.submit(self._close_connection)
            executor.shutdown(wait=True)
            path, self._db_path = self._db_path, None
        self._logger.info("Store closed", extra={"db_path": path})

    def __enter__(self) -> "StoreSerializer":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # -- worker-side helpers -------------------------------------------------

    def _in_worker(self) -> bool:
        return self._conn is not None and threading.get_ident() == self._worker_ident

    def _open(self, path: str) -> None:
        with translate_store_errors(path):
            conn = sqlite3.connect(path)
            conn.execute("PRAGMA foreign_keys = ON;")
        self._conn = conn
        self._worker_ident = threading.get_ident()

    def _execute(self, operation: Callable[[sqlite3.Connection], T]) -> T:
        conn = self._conn
        if conn is None:
            raise StoreNotConfiguredError("Store connection is closed")
        with conn:
            return operation(conn)

    def _close_connection(self) -> None:
        if self._conn is not None:
            self._conn.close()
        self._conn = None
        self._worker_ident = None
