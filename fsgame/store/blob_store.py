"""
FSGAME Blob Store
Durable path -> typed blob mapping backed by SQLite.
Opened lazily, reused across puts, one transaction per put.
"""
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from ..config import config
from ..errors import StoreOpenError, StoreWriteError
from ..utils.checksum import calculate_bytes_checksum
from ..utils.logger import logger


@dataclass(frozen=True)
class Blob:
    data: bytes
    content_type: str = 'application/octet-stream'

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class StoreEntry:
    key: str
    content_type: str
    size: int
    sha256: str
    stored_at: float


class BlobStore:
    MEMORY = ':memory:'

    def __init__(self, path: str = None, table: str = None):
        self.path = str(path) if path is not None else config.db_path
        self.table = table or config.table
        if not self.table.isidentifier():
            raise ValueError(f"Invalid table name: {self.table!r}")
        self._conn = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> 'BlobStore':
        """Establish the connection and key space once; later calls are no-ops"""
        if self._conn is not None:
            return self

        conn = None
        try:
            if self.path != self.MEMORY:
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.path)
            conn.execute("PRAGMA journal_mode=WAL")
            with conn:
                conn.execute(
                    f"""CREATE TABLE IF NOT EXISTS {self.table} (
                            path TEXT PRIMARY KEY,
                            content_type TEXT NOT NULL,
                            data BLOB NOT NULL,
                            size INTEGER NOT NULL,
                            sha256 TEXT NOT NULL,
                            stored_at REAL NOT NULL
                        )"""
                )
        except (sqlite3.Error, OSError) as e:
            if conn is not None:
                conn.close()
            raise StoreOpenError(self.path, e)

        self._conn = conn
        logger.debug(f"Opened blob store {self.path} [{self.table}]")
        return self

    def close(self):
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def put(self, key: str, blob: Blob):
        """Upsert a blob; durable once this call returns"""
        self.open()
        try:
            with self._conn:
                self._conn.execute(
                    f"""INSERT INTO {self.table} (path, content_type, data, size, sha256, stored_at)
                        VALUES (?, ?, ?, ?, ?, ?)
                        ON CONFLICT(path) DO UPDATE SET
                            content_type=excluded.content_type,
                            data=excluded.data,
                            size=excluded.size,
                            sha256=excluded.sha256,
                            stored_at=excluded.stored_at""",
                    (key, blob.content_type, sqlite3.Binary(blob.data), blob.size,
                     calculate_bytes_checksum(blob.data), time.time())
                )
        except sqlite3.Error as e:
            raise StoreWriteError(key, e)

    def get(self, key: str) -> Optional[Blob]:
        """Return the stored blob, or None when the key is absent"""
        self.open()
        row = self._conn.execute(
            f"SELECT data, content_type FROM {self.table} WHERE path = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return Blob(data=bytes(row[0]), content_type=row[1])

    def entry(self, key: str) -> Optional[StoreEntry]:
        self.open()
        row = self._conn.execute(
            f"SELECT path, content_type, size, sha256, stored_at FROM {self.table} WHERE path = ?",
            (key,)
        ).fetchone()
        return StoreEntry(*row) if row else None

    def entries(self) -> Iterator[StoreEntry]:
        self.open()
        cur = self._conn.execute(
            f"SELECT path, content_type, size, sha256, stored_at FROM {self.table} ORDER BY path"
        )
        for row in cur:
            yield StoreEntry(*row)

    def keys(self) -> List[str]:
        self.open()
        return [row[0] for row in self._conn.execute(
            f"SELECT path FROM {self.table} ORDER BY path"
        )]

    def __len__(self) -> int:
        self.open()
        return self._conn.execute(f"SELECT COUNT(*) FROM {self.table}").fetchone()[0]

    def __contains__(self, key: str) -> bool:
        self.open()
        return self._conn.execute(
            f"SELECT 1 FROM {self.table} WHERE path = ?", (key,)
        ).fetchone() is not None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()


__all__ = ["Blob", "StoreEntry", "BlobStore"]
