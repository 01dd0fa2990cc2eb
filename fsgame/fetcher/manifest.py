"""
FSGAME Manifest
Shape-checks the manifest document and resolves its fragment locators.
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Any, Optional
from urllib.parse import urljoin, urlparse
from urllib.request import url2pathname

from ..errors import ManifestError


def is_remote(locator: str) -> bool:
    return urlparse(locator).scheme in ('http', 'https')


def resolve_locator(base: str, locator: str) -> str:
    """Resolve a fragment locator relative to the manifest it came from"""
    if is_remote(locator) or urlparse(locator).scheme == 'file':
        return locator
    if is_remote(base):
        return urljoin(base, locator)
    if base.startswith('file://'):
        base = url2pathname(urlparse(base).path)
    if Path(locator).is_absolute():
        return locator
    return str(Path(base).parent / locator)


@dataclass
class Manifest:
    source: str
    files: List[str]
    checksums: Optional[List[str]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def locators(self) -> List[str]:
        return [resolve_locator(self.source, f) for f in self.files]

    def __len__(self) -> int:
        return len(self.files)

    @classmethod
    def from_document(cls, document: Any, source: str = '') -> 'Manifest':
        if not isinstance(document, dict):
            raise ManifestError("Manifest must be a JSON object")

        files = document.get('files')
        if not isinstance(files, list) or not files:
            raise ManifestError("Manifest missing 'files' array")
        for i, entry in enumerate(files):
            if not isinstance(entry, str) or not entry:
                raise ManifestError(f"Manifest 'files[{i}]' is not a locator string")

        checksums = document.get('checksums')
        if checksums is not None:
            if not isinstance(checksums, list) or len(checksums) != len(files):
                raise ManifestError("Manifest 'checksums' must align with 'files'")

        extra = {k: v for k, v in document.items() if k not in ('files', 'checksums')}
        return cls(source=source, files=list(files), checksums=checksums, extra=extra)

    @classmethod
    def from_bytes(cls, data: bytes, source: str = '') -> 'Manifest':
        try:
            document = json.loads(data.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ManifestError(f"Manifest is not valid JSON: {e}")
        return cls.from_document(document, source)


def create_manifest(
    fragment_names: List[str],
    checksums: List[str],
    archive_name: str,
    total_size: int,
    record_count: int
) -> Dict:
    return {
        "files": fragment_names,
        "checksums": checksums,
        "archive": archive_name,
        "total_size": total_size,
        "record_count": record_count,
    }


def save_manifest(manifest: Dict, path: str):
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(manifest, f, ensure_ascii=False, indent=2)


__all__ = ["Manifest", "create_manifest", "save_manifest", "resolve_locator", "is_remote"]
