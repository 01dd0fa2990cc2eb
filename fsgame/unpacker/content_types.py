"""
FSGAME Content Types
Maps archive file names to the content type stored with each blob.
Matching is case-sensitive: 'IMG.PNG' is application/octet-stream.
"""
from enum import Enum


class ContentType(str, Enum):
    HTML = 'text/html'
    JAVASCRIPT = 'text/javascript'
    JSON = 'application/json'
    CSS = 'text/css'
    PNG = 'image/png'
    JPEG = 'image/jpeg'
    WASM = 'application/wasm'
    OCTET_STREAM = 'application/octet-stream'


SUFFIXES = {
    '.html': ContentType.HTML,
    '.js': ContentType.JAVASCRIPT,
    '.json': ContentType.JSON,
    '.css': ContentType.CSS,
    '.png': ContentType.PNG,
    '.jpg': ContentType.JPEG,
    '.jpeg': ContentType.JPEG,
    '.wasm': ContentType.WASM,
}

# Longest suffix first
_ORDERED_SUFFIXES = sorted(SUFFIXES, key=len, reverse=True)


def classify(name: str) -> str:
    for suffix in _ORDERED_SUFFIXES:
        if name.endswith(suffix):
            return SUFFIXES[suffix].value
    return ContentType.OCTET_STREAM.value


__all__ = ["ContentType", "SUFFIXES", "classify"]
