"""
FSGAME Buffer Merger
"""
from typing import Sequence


def merge_buffers(fragments: Sequence[bytes]) -> bytes:
    """Concatenate fragments in order into one contiguous buffer"""
    total_size = sum(len(f) for f in fragments)
    merged = bytearray(total_size)
    offset = 0
    for fragment in fragments:
        merged[offset:offset + len(fragment)] = fragment
        offset += len(fragment)
    return bytes(merged)


__all__ = ["merge_buffers"]
