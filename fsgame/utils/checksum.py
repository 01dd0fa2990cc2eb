"""
FSGAME Checksum Utility
SHA-256 digests for fragments and stored blobs.
"""
import hashlib


def calculate_bytes_checksum(data: bytes) -> str:
    """Hex SHA-256 of an in-memory buffer (fetched fragment or stored blob)"""
    return hashlib.sha256(data).hexdigest()


def calculate_file_checksum(file_path: str) -> str:
    """
    Hex SHA-256 of a fragment file on disk, read in 64 KB blocks.
    """
    sha256_hash = hashlib.sha256()
    with open(file_path, "rb") as f:
        for byte_block in iter(lambda: f.read(65536), b""):
            sha256_hash.update(byte_block)
    return sha256_hash.hexdigest()


__all__ = ["calculate_bytes_checksum", "calculate_file_checksum"]
