"""
Shared aiosqlite connections for the ledger stores.

One `ConnectionPool` is built per process (`ConnectionPool.from_settings`),
passed to each store and closed at shutdown.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from siteledger.config import Settings, get_logger, get_settings

logger = get_logger(__name__)

_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class ConnectionPool:
    """A fixed set of connections, each lent to one task at a time."""

    def __init__(self, db_path: Path, pool_size: int = 5, busy_timeout: int = 30000):
        if pool_size < 1:
            raise ValueError("pool_size must be at least 1")
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] | None = None
        self._opened: list[aiosqlite.Connection] = []
        self._guard = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ConnectionPool":
        storage = (settings or get_settings()).storage
        return cls(storage.db_path, storage.pool_size, storage.busy_timeout)

    @property
    def is_initialized(self) -> bool:
        return self._idle is not None

    @property
    def open_connections(self) -> int:
        return len(self._opened)

    async def initialize(self) -> None:
        async with self._guard:
            if self._idle is not None:
                return
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

            idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
            try:
                for _ in range(self.pool_size):
                    conn = await self._open()
                    self._opened.append(conn)
                    idle.put_nowait(conn)
            except BaseException:
                await self._close_opened()
                raise

            self._idle = idle
            logger.info("connection_pool_opened", db_path=str(self.db_path), size=self.pool_size)

    async def _open(self) -> aiosqlite.Connection:
        # sqlite3's timeout doubles as the busy handler for locked writes
        conn = await aiosqlite.connect(self.db_path, timeout=self.busy_timeout / 1000)
        for pragma in _PRAGMAS:
            await conn.execute(pragma)
        conn.row_factory = aiosqlite.Row
        return conn

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Borrow a connection for the duration of the block."""
        if self._idle is None:
            await self.initialize()
        idle = self._idle
        assert idle is not None

        conn = await idle.get()
        try:
            yield conn
        finally:
            idle.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection inside a write transaction.

        BEGIN IMMEDIATE takes the write lock before the first read, so a
        check-then-write in the block cannot interleave with another writer.
        The block commits on exit and rolls back if it raises.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def _close_opened(self) -> None:
        opened, self._opened = self._opened, []
        for conn in opened:
            await conn.close()

    async def close(self) -> None:
        async with self._guard:
            was_open = self._idle is not None
            self._idle = None
            await self._close_opened()
        if was_open:
            logger.info("connection_pool_closed", db_path=str(self.db_path))

    async def __aenter__(self) -> "ConnectionPool":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
