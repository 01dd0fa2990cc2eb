"""
FSGAME Errors
Every failure the ingest pipeline can report. None of them are retried;
the orchestrator stops at the first one.
"""


class FSGameError(Exception):
    pass


class ManifestError(FSGameError):
    pass


class FetchError(FSGameError):
    def __init__(self, locator: str, status_or_cause):
        self.locator = locator
        self.status_or_cause = status_or_cause
        if isinstance(status_or_cause, int):
            detail = f"HTTP {status_or_cause}"
        else:
            detail = str(status_or_cause)
        super().__init__(f"Failed to fetch {locator}: {detail}")


class ContainerFormatError(FSGameError):
    def __init__(self, offset: int, reason: str):
        self.offset = offset
        self.reason = reason
        super().__init__(f"Corrupt archive at offset {offset}: {reason}")


class DecompressionError(FSGameError):
    def __init__(self, name: str, cause):
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to decompress {name}: {cause}")


class SizeMismatchError(FSGameError):
    def __init__(self, name: str, expected: int, actual: int):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Size mismatch for {name}: expected {expected} bytes, got {actual}"
        )


class StoreOpenError(FSGameError):
    def __init__(self, path: str, cause):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to open store {path}: {cause}")


class StoreWriteError(FSGameError):
    def __init__(self, key: str, cause):
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to store {key}: {cause}")


__all__ = [
    "FSGameError",
    "ManifestError",
    "FetchError",
    "ContainerFormatError",
    "DecompressionError",
    "SizeMismatchError",
    "StoreOpenError",
    "StoreWriteError",
]
