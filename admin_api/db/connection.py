"""
admin_api/db/connection.py
--------------------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so concurrent requests can share it.
The ``Database`` handle is built by the entry point and handed to every
repository; nothing connects at import time.
"""

import threading
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import psycopg2
from psycopg2 import extras, pool

from admin_api.db.query import FilterSet, ListQuery, Page, Pagination
from admin_api.utils.logger import get_logger

logger = get_logger(__name__)


class Database:
    """Explicitly constructed handle around a psycopg2 connection pool."""

    def __init__(self, dsn: str, min_conn: int = 1, max_conn: int = 10,
                 connection_pool: Optional[pool.AbstractConnectionPool] = None):
        self.dsn = dsn
        self.min_conn = min_conn
        self.max_conn = max_conn
        self._pool = connection_pool
        # At most max_conn checkouts; further callers wait for a release.
        self._slots = threading.BoundedSemaphore(max_conn)

    # ── LIFECYCLE ─────────────────────────────────────────

    def open(self) -> None:
        """
        Initialize the connection pool.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.ThreadedConnectionPool(self.min_conn, self.max_conn, self.dsn)
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    # ── CONNECTIONS ───────────────────────────────────────

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """
        Check a connection out of the pool for the duration of the block.
        Blocks while ``max_conn`` connections are already checked out.

        Raises:
            RuntimeError: If the pool has not been opened.
        """
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call open() first.")
        self._slots.acquire()
        try:
            conn = self._pool.getconn()
            try:
                yield conn
            finally:
                self._pool.putconn(conn)
        finally:
            self._slots.release()

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        """
        Run a block of statements on one connection as a single transaction.

        Yields a dict cursor. Commits when the block exits normally and rolls
        back on any exception, which is re-raised.
        """
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    yield cur
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    # ── QUERY HELPERS ─────────────────────────────────────

    def fetch_all(self, sql: str, params: Any = None) -> list[dict]:
        with self.connection() as conn:
            try:
                with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                    cur.execute(sql, params)
                    return [dict(row) for row in cur.fetchall()]
            finally:
                conn.rollback()

    def fetch_one(self, sql: str, params: Any = None) -> Optional[dict]:
        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None

    def execute_returning(self, sql: str, params: Any = None) -> Optional[dict]:
        """Run a single write statement with RETURNING and commit it."""
        with self.transaction() as cur:
            cur.execute(sql, params)
            row = cur.fetchone()
        return dict(row) if row else None

    def fetch_page(self, query: ListQuery, filters: FilterSet, page: Pagination) -> Page:
        """
        Fetch one page of a filtered list plus the size of the whole set.

        The count runs with the filter parameters only, so ``total`` does not
        depend on ``limit``/``offset``.
        """
        page_sql, page_params = query.page_sql(filters, page)
        count_sql, count_params = query.count_sql(filters)
        rows = self.fetch_all(page_sql, page_params)
        count_row = self.fetch_one(count_sql, count_params)
        total = int(count_row["count"]) if count_row else 0
        return Page(rows=rows, total=total, limit=page.limit, offset=page.offset)
