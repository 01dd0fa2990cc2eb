"""
FSGAME Viewer Hand-off
What happens once an ingest completes: something resolves the entry key.
"""
from pathlib import Path, PurePosixPath
from typing import Optional, Protocol

from ..store.blob_store import BlobStore
from ..utils.logger import logger


class Viewer(Protocol):
    def launch(self, store: BlobStore, entry: str) -> None: ...


def sanitize_path(raw: str) -> str:
    """
    Reject absolute paths, '..' traversal and backslashes so a stored key
    can never be written outside the export directory.
    """
    if not raw or raw.strip() == "":
        raise ValueError(f"Invalid empty path {raw!r}")
    if "\\" in raw:
        raise ValueError(f"Backslash not allowed: {raw}")

    p = PurePosixPath(raw)
    if p.is_absolute():
        raise ValueError(f"Absolute path not allowed: {raw}")
    if any(part == ".." for part in p.parts):
        raise ValueError(f"Traversal not allowed: {raw}")

    return "/".join(p.parts)


def export_store(store: BlobStore, output_dir: str) -> int:
    """Write every stored blob under output_dir. Returns the file count."""
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = 0

    for key in store.keys():
        try:
            rel = sanitize_path(key)
        except ValueError as e:
            logger.warning(f"Skipping {key!r}: {e}")
            continue

        target = out_dir / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(store.get(key).data)
        written += 1

    logger.info(f"Exported {written} file(s) to {out_dir}")
    return written


class DirectoryViewer:
    """
    Exports the store to a directory and points at the entry file there.
    entry_path stays None when the store has no such entry.
    """

    def __init__(self, output_dir: str):
        self.output_dir = Path(output_dir)
        self.entry_path: Optional[Path] = None

    def launch(self, store: BlobStore, entry: str) -> None:
        export_store(store, str(self.output_dir))
        if entry not in store:
            self.entry_path = None
            logger.warning(f"No entry file {entry} to open in {self.output_dir}")
            return
        self.entry_path = self.output_dir / sanitize_path(entry)
        logger.info(f"🚀 Entry ready: {self.entry_path}")


__all__ = ["Viewer", "DirectoryViewer", "export_store", "sanitize_path"]
