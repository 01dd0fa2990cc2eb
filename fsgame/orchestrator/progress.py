"""
FSGAME Progress Sinks
Receivers for the percentage/status stream an ingest emits.
"""
from typing import Protocol

from ..utils.logger import logger


class ProgressSink(Protocol):
    def update(self, percent: int, status: str) -> None: ...

    def fail(self, message: str) -> None: ...


class NullProgress:
    def update(self, percent: int, status: str) -> None:
        pass

    def fail(self, message: str) -> None:
        pass


class LoggingProgress:
    def update(self, percent: int, status: str) -> None:
        logger.info(f"[{percent:3d}%] {status}")

    def fail(self, message: str) -> None:
        logger.error(f"❌ {message}")


__all__ = ["ProgressSink", "NullProgress", "LoggingProgress"]
