"""
FSGAME Container Decoder
Single left-to-right scan over a merged archive buffer.

Wire layout, little-endian, no padding:
    Header:  u32 version, u32 record_count
    Record:  u16 name_len, name (UTF-8),
             u32 compressed_size, u32 original_size, u32 reserved,
             compressed_size bytes of deflate payload
"""
import struct
from dataclasses import dataclass
from typing import Iterator

from ..errors import ContainerFormatError
from ..utils.logger import logger


HEADER = struct.Struct('<II')
NAME_LEN = struct.Struct('<H')
RECORD_FIELDS = struct.Struct('<III')


@dataclass(frozen=True)
class ContainerHeader:
    version: int
    record_count: int


@dataclass(frozen=True)
class ContainerRecord:
    name: str
    compressed_size: int
    original_size: int
    reserved: int
    payload: bytes
    offset: int


class ContainerDecoder:
    SUPPORTED_VERSIONS = {1}

    def __init__(self, buffer: bytes):
        self._buffer = memoryview(buffer)
        self._offset = 0
        self.header = None

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._buffer) - self._offset

    def read_header(self) -> ContainerHeader:
        if self.header is not None:
            return self.header

        version, record_count = self._unpack(HEADER, "truncated header")
        self.header = ContainerHeader(version, record_count)

        logger.info(f"📜 Archive version {version}, files: {record_count}")
        if version not in self.SUPPORTED_VERSIONS:
            logger.warning(f"Unknown archive version {version}, decoding as version 1")
        return self.header

    def iter_records(self) -> Iterator[ContainerRecord]:
        """
        Yield records one at a time. The cursor only moves forward, so a
        second pass needs a fresh decoder.
        """
        header = self.read_header()

        for i in range(header.record_count):
            if self.remaining == 0:
                raise ContainerFormatError(
                    self._offset,
                    f"record-count mismatch: header declares {header.record_count} "
                    f"records, buffer ends after {i}"
                )
            yield self._read_record()

        if self.remaining:
            raise ContainerFormatError(
                self._offset,
                f"record-count mismatch: header declares {header.record_count} "
                f"records, {self.remaining} bytes remain after the last one"
            )

    def _read_record(self) -> ContainerRecord:
        start = self._offset

        (name_len,) = self._unpack(NAME_LEN, "truncated record name length")
        if name_len == 0:
            raise ContainerFormatError(start, "record has an empty name")
        name_bytes = self._take(name_len, f"out-of-bounds record: name length {name_len}")
        try:
            name = name_bytes.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ContainerFormatError(start, f"record name is not valid UTF-8: {e}")

        compressed_size, original_size, reserved = self._unpack(
            RECORD_FIELDS, f"truncated record fields for {name}"
        )
        payload = self._take(
            compressed_size,
            f"out-of-bounds record: {name} declares {compressed_size} compressed bytes"
        )

        logger.debug(f"   {name}: {compressed_size} -> {original_size} bytes @ {start}")
        return ContainerRecord(
            name=name,
            compressed_size=compressed_size,
            original_size=original_size,
            reserved=reserved,
            payload=payload,
            offset=start
        )

    def _unpack(self, fmt: struct.Struct, reason: str) -> tuple:
        return fmt.unpack(self._take(fmt.size, reason))

    def _take(self, size: int, reason: str) -> bytes:
        if size > self.remaining:
            raise ContainerFormatError(self._offset, reason)
        chunk = self._buffer[self._offset:self._offset + size].tobytes()
        self._offset += size
        return chunk


def decode_records(buffer: bytes) -> Iterator[ContainerRecord]:
    return ContainerDecoder(buffer).iter_records()


__all__ = ["ContainerHeader", "ContainerRecord", "ContainerDecoder", "decode_records"]
