from .blob_store import Blob, StoreEntry, BlobStore

__all__ = [
    "Blob",
    "StoreEntry",
    "BlobStore"
]
