"""Process-wide Postgres connection pool.

One ProviderPool is opened at startup, handed to ProviderQuery, and closed at
shutdown. Requests borrow a connection for the length of one query.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
import psycopg2.pool

from .config import Config

logger = logging.getLogger(__name__)


class ProviderQueryError(Exception):
    """Data-store failure: connection, pool exhaustion, timeout or bad query."""


class ProviderPool:
    """Bounded psycopg2 ThreadedConnectionPool with borrow/return handling."""

    def __init__(self, config: Config):
        self.config = config
        self._pool: Optional[psycopg2.pool.ThreadedConnectionPool] = None

    def open(self):
        """Create the pool. With pool_min=0 no connection is made until first use."""
        if self.is_open:
            return
        try:
            self._pool = psycopg2.pool.ThreadedConnectionPool(
                self.config.pool_min,
                self.config.pool_max,
                **self.config.connect_kwargs(),
            )
        except psycopg2.Error as e:
            raise ProviderQueryError(f"Could not open connection pool: {e}") from e
        logger.info(
            f"Connection pool open (min={self.config.pool_min}, max={self.config.pool_max})"
        )

    def close(self):
        if self._pool is not None and not self._pool.closed:
            self._pool.closeall()
            logger.info("Connection pool closed")
        self._pool = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None and not self._pool.closed

    @contextmanager
    def connection(self) -> Iterator["psycopg2.extensions.connection"]:
        """Borrow a connection; it goes back to the pool (or is discarded if broken)."""
        if not self.is_open:
            raise ProviderQueryError("Connection pool is not open")

        # close() may drop self._pool while this connection is still out
        pool = self._pool
        try:
            conn = pool.getconn()
        except psycopg2.pool.PoolError as e:
            raise ProviderQueryError(f"Connection pool exhausted: {e}") from e
        except psycopg2.Error as e:
            raise ProviderQueryError(f"Database connection failed: {e}") from e

        try:
            conn.autocommit = True
            yield conn
        finally:
            if pool.closed:
                if not conn.closed:
                    conn.close()
            else:
                pool.putconn(conn, close=bool(conn.closed))
