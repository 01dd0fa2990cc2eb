"""
FSGAME Packager
Builds container archives and splits them into manifest-described fragments.
"""
import os
import time
import shutil
import struct
import tempfile
import zlib
from pathlib import Path
from typing import Iterable, List, Optional, Callable, Tuple

from ..config import config
from ..fetcher.manifest import create_manifest, save_manifest
from ..utils.checksum import calculate_file_checksum
from ..utils.logger import logger


class Packager:
    MAX_NAME_BYTES = 0xFFFF
    MAX_SIZE = 0xFFFFFFFF
    MANIFEST_NAME = 'manifest.json'

    def __init__(self, compression_level: int = None, version: int = None):
        self.compression_level = (
            compression_level if compression_level is not None else config.compression_level
        )
        self.version = version if version is not None else config.archive_version

    def encode_record(self, name: str, data: bytes, timestamp: int = 0) -> bytes:
        name_bytes = name.encode('utf-8')
        if not name_bytes:
            raise ValueError("Record name must not be empty")
        if len(name_bytes) > self.MAX_NAME_BYTES:
            raise ValueError(f"Record name too long: {name}")
        if len(data) > self.MAX_SIZE:
            raise ValueError(f"File too large for archive: {name}")

        compressed = zlib.compress(data, self.compression_level)
        if len(compressed) > self.MAX_SIZE:
            raise ValueError(f"Compressed payload too large for archive: {name}")

        return b''.join([
            struct.pack('<H', len(name_bytes)),
            name_bytes,
            struct.pack('<III', len(compressed), len(data), timestamp & 0xFFFFFFFF),
            compressed
        ])

    def encode(self, files: Iterable[Tuple[str, bytes]], timestamp: int = None) -> bytes:
        """Encode (name, data) pairs into one archive buffer, in the given order"""
        if timestamp is None:
            timestamp = int(time.time())
        records = [self.encode_record(name, data, timestamp) for name, data in files]
        return struct.pack('<II', self.version, len(records)) + b''.join(records)

    @staticmethod
    def split(archive: bytes, fragment_size: int) -> List[bytes]:
        if fragment_size <= 0:
            raise ValueError(f"Fragment size must be positive: {fragment_size}")
        return [
            archive[i:i + fragment_size]
            for i in range(0, len(archive), fragment_size)
        ] or [archive]

    def collect_files(self, input_dir: str) -> List[Tuple[str, bytes]]:
        """Read every file under input_dir, keyed by forward-slash relative path"""
        root = Path(input_dir)
        if not root.is_dir():
            raise ValueError(f"Input directory not found: {input_dir}")

        files = []
        for path in sorted(root.rglob('*')):
            if path.is_file():
                rel = path.relative_to(root).as_posix()
                files.append((rel, path.read_bytes()))

        if not files:
            raise ValueError(f"No files to pack in {input_dir}")
        return files

    def pack_directory(
        self,
        input_dir: str,
        output_dir: str,
        archive_name: str = None,
        fragment_size: int = None,
        on_progress: Optional[Callable] = None
    ) -> dict:
        """
        Pack a directory into fragments plus a manifest.

        Args:
            input_dir: directory whose files become archive records
            output_dir: where fragments and manifest.json are written
            archive_name: fragment file stem (default: input directory name)
            fragment_size: bytes per fragment (default: from config)
            on_progress: optional callback(fragments_written, total)

        Returns:
            summary dict with paths and sizes
        """
        start_time = time.time()
        fragment_size = fragment_size or config.fragment_size
        archive_name = archive_name or Path(input_dir).resolve().name

        logger.info(f"📦 Packing: {input_dir}")
        files = self.collect_files(input_dir)
        original_size = sum(len(data) for _, data in files)

        archive = self.encode(files)
        fragments = self.split(archive, fragment_size)

        out_dir = Path(output_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

        names = []
        checksums = []
        for i, fragment in enumerate(fragments):
            name = f"{archive_name}.fsgame.part{i:03d}"
            self._write_atomic(out_dir / name, fragment)
            names.append(name)
            checksums.append(calculate_file_checksum(str(out_dir / name)))
            if on_progress:
                on_progress(i + 1, len(fragments))

        manifest = create_manifest(names, checksums, archive_name, len(archive), len(files))
        manifest_path = out_dir / self.MANIFEST_NAME
        save_manifest(manifest, str(manifest_path))

        elapsed = time.time() - start_time
        percent = (1 - len(archive) / original_size) * 100 if original_size else 0

        logger.info(f"✅ Packing Complete!")
        logger.info(f"   Files:     {len(files)}")
        logger.info(f"   Original:  {original_size/1024:.2f} KB")
        logger.info(f"   Archive:   {len(archive)/1024:.2f} KB in {len(fragments)} fragment(s)")
        logger.info(f"   Saved:     {percent:.1f}%")
        logger.info(f"   Time:      {elapsed:.2f}s")

        return {
            'success': True,
            'manifest_path': str(manifest_path),
            'fragments': [str(out_dir / n) for n in names],
            'record_count': len(files),
            'original_size': original_size,
            'archive_size': len(archive),
            'space_saved_percent': percent,
            'processing_time': elapsed
        }

    @staticmethod
    def _write_atomic(path: Path, data: bytes):
        tmp_fd, tmp_path = tempfile.mkstemp(suffix='.tmp', dir=path.parent)
        try:
            with os.fdopen(tmp_fd, 'wb') as f:
                f.write(data)
            shutil.move(tmp_path, path)
            tmp_path = None
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)


__all__ = ["Packager"]
