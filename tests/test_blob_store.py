"""
Blob store: lazy open, upsert semantics, durability, error mapping.
"""
import sqlite3

import pytest

from fsgame.errors import StoreOpenError, StoreWriteError
from fsgame.store.blob_store import Blob, BlobStore
from fsgame.utils.checksum import calculate_bytes_checksum


def test_open_is_lazy_and_idempotent(tmp_path) -> None:
    store = BlobStore(str(tmp_path / "nested" / "store.db"))
    assert not store.is_open

    assert store.open() is store
    conn = store._conn
    store.open()

    assert store._conn is conn
    assert (tmp_path / "nested" / "store.db").exists()
    store.close()


def test_put_then_get(store) -> None:
    store.put("index.html", Blob(b"<html></html>", "text/html"))

    blob = store.get("index.html")
    assert blob == Blob(b"<html></html>", "text/html")
    assert blob.size == 13


def test_get_missing_key_returns_none(store) -> None:
    assert store.get("nope.js") is None
    assert "nope.js" not in store


def test_put_overwrites_existing_key(store) -> None:
    store.put("app.js", Blob(b"v1", "text/javascript"))
    store.put("app.js", Blob(b"version two", "text/javascript"))

    assert len(store) == 1
    assert store.get("app.js").data == b"version two"
    assert store.entry("app.js").size == len(b"version two")


def test_entries_carry_metadata(store) -> None:
    store.put("b.png", Blob(b"\x89PNG", "image/png"))
    store.put("a.css", Blob(b"body{}", "text/css"))

    entries = list(store.entries())
    assert [e.key for e in entries] == ["a.css", "b.png"]
    assert entries[1].content_type == "image/png"
    assert entries[1].sha256 == calculate_bytes_checksum(b"\x89PNG")
    assert store.keys() == ["a.css", "b.png"]


def test_blobs_survive_reopen(tmp_path) -> None:
    path = str(tmp_path / "store.db")
    with BlobStore(path) as store:
        store.put("index.html", Blob(b"persisted", "text/html"))

    with BlobStore(path) as reopened:
        assert reopened.get("index.html").data == b"persisted"


def test_memory_store() -> None:
    with BlobStore(BlobStore.MEMORY) as store:
        store.put("x", Blob(b"1"))
        assert store.get("x").content_type == "application/octet-stream"


def test_open_failure_raises_store_open_error(tmp_path) -> None:
    # A directory cannot be opened as a database file
    store = BlobStore(str(tmp_path))

    with pytest.raises(StoreOpenError) as exc:
        store.open()
    assert exc.value.path == str(tmp_path)
    assert not store.is_open


def test_invalid_table_name_is_refused(tmp_path) -> None:
    with pytest.raises(ValueError):
        BlobStore(str(tmp_path / "s.db"), table="files; DROP TABLE files")


class BrokenConnection:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, *args):
        raise sqlite3.OperationalError("database is locked")

    def close(self):
        pass


def test_write_failure_raises_store_write_error(store) -> None:
    store.open()
    store._conn.close()
    store._conn = BrokenConnection()

    with pytest.raises(StoreWriteError) as exc:
        store.put("index.html", Blob(b"x", "text/html"))
    assert exc.value.key == "index.html"
    assert "locked" in str(exc.value)
