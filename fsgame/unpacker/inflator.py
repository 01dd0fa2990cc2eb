"""
FSGAME Record Inflator
Deflate decompression with declared-size verification.
"""
import zlib
from dataclasses import dataclass

from ..errors import DecompressionError, SizeMismatchError
from .content_types import classify
from .decoder import ContainerRecord


@dataclass(frozen=True)
class InflatedFile:
    name: str
    data: bytes
    content_type: str


class RecordInflator:
    # zlib or gzip wrapper, detected from the stream header
    WBITS = zlib.MAX_WBITS | 32
    CHUNK_SIZE = 65536

    def inflate(self, record: ContainerRecord) -> bytes:
        return self.inflate_payload(record.name, record.payload, record.original_size)

    def inflate_file(self, record: ContainerRecord) -> InflatedFile:
        return InflatedFile(record.name, self.inflate(record), classify(record.name))

    def inflate_payload(self, name: str, payload: bytes, original_size: int) -> bytes:
        if not payload and original_size == 0:
            return b''

        dctx = zlib.decompressobj(self.WBITS)
        try:
            # Never produce more than one byte past the declared size
            data = dctx.decompress(payload, original_size + 1)
            if len(data) > original_size:
                actual = len(data) + self._drain(dctx)
                raise SizeMismatchError(name, original_size, actual)
            data += dctx.flush()
        except zlib.error as e:
            raise DecompressionError(name, e)

        if not dctx.eof:
            raise DecompressionError(name, "compressed stream ended early")
        if len(data) != original_size:
            raise SizeMismatchError(name, original_size, len(data))
        return data

    def _drain(self, dctx) -> int:
        """Count the remaining output of an oversized stream without keeping it"""
        extra = 0
        while dctx.unconsumed_tail and not dctx.eof:
            extra += len(dctx.decompress(dctx.unconsumed_tail, self.CHUNK_SIZE))
        return extra + len(dctx.flush())


def inflate_record(record: ContainerRecord) -> bytes:
    return RecordInflator().inflate(record)


__all__ = ["InflatedFile", "RecordInflator", "inflate_record"]
