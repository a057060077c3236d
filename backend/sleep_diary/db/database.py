import asyncio
import aiosqlite
from contextlib import asynccontextmanager
from typing import Optional

from .schema import ALL_TABLES, INDEXES


class Database:
    """Single shared aiosqlite connection with serialized write transactions"""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._connection: Optional[aiosqlite.Connection] = None
        self._write_lock = asyncio.Lock()

    async def connect(self):
        """Create database connection"""
        if not self._connection:
            self._connection = await aiosqlite.connect(self.db_path)
            self._connection.row_factory = aiosqlite.Row
            await self._connection.execute("PRAGMA foreign_keys = ON")
            await self._connection.execute("PRAGMA journal_mode = WAL")

    async def disconnect(self):
        """Close database connection"""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def execute(self, query: str, params: tuple = ()):
        """Execute a query"""
        if not self._connection:
            await self.connect()
        return await self._connection.execute(query, params)

    async def fetch_one(self, query: str, params: tuple = ()):
        """Fetch one row"""
        cursor = await self.execute(query, params)
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def fetch_all(self, query: str, params: tuple = ()):
        """Fetch all rows"""
        cursor = await self.execute(query, params)
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def commit(self):
        """Commit transaction"""
        if self._connection:
            await self._connection.commit()

    async def rollback(self):
        """Rollback transaction"""
        if self._connection:
            await self._connection.rollback()

    @asynccontextmanager
    async def transaction(self):
        """
        Run statements and commit them as one unit.

        Writers share one connection, so only one transaction may be open at
        a time; a failing block is rolled back before the error propagates.
        """
        async with self._write_lock:
            try:
                yield self
                await self.commit()
            except BaseException:
                await self.rollback()
                raise

    async def create_tables(self):
        """Create all database tables"""
        async with self.transaction():
            for table_sql in ALL_TABLES:
                await self.execute(table_sql)

            for index_sql in INDEXES:
                await self.execute(index_sql)
