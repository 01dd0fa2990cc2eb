"""
FSGAME Archive Inspector
Peek inside an archive without inflating or storing anything.
"""
from pathlib import Path

from ..fetcher.fetcher import FragmentFetcher
from ..fetcher.merger import merge_buffers
from ..unpacker.content_types import classify
from ..unpacker.decoder import ContainerDecoder
from ..utils.logger import logger


class Inspector:
    def __init__(self, fetcher: FragmentFetcher = None):
        self.fetcher = fetcher or FragmentFetcher()

    def load(self, source: str) -> bytes:
        """A manifest (*.json) is followed to its fragments; anything else is the archive itself"""
        if source.endswith('.json'):
            manifest = self.fetcher.fetch_manifest(source)
            return merge_buffers(self.fetcher.fetch_all(manifest.locators))
        return self.fetcher.fetch(source)

    def inspect(self, source: str, show: bool = True) -> dict:
        buffer = self.load(source)
        decoder = ContainerDecoder(buffer)
        header = decoder.read_header()

        records = []
        for record in decoder.iter_records():
            records.append({
                'name': record.name,
                'offset': record.offset,
                'compressed_size': record.compressed_size,
                'original_size': record.original_size,
                'reserved': record.reserved,
                'content_type': classify(record.name),
            })

        original_size = sum(r['original_size'] for r in records)
        compressed_size = sum(r['compressed_size'] for r in records)
        info = {
            'source': source,
            'archive_size': len(buffer),
            'version': header.version,
            'record_count': header.record_count,
            'records': records,
            'original_size': original_size,
            'compressed_size': compressed_size,
            'compression_ratio': original_size / compressed_size if compressed_size else 0,
        }

        logger.debug(f"Inspected {Path(source).name}: {len(records)} record(s)")
        if show:
            self._print(info)
        return info

    def _print(self, info: dict):
        def fmt_size(b):
            if b >= 1024 * 1024:
                return f"{b/1024/1024:.2f} MB"
            return f"{b/1024:.1f} KB"

        print(f"\n{'='*65}")
        print(f"  FSGAME Archive Inspection")
        print(f"{'='*65}")
        print(f"  Source:      {info['source']}")
        print(f"  Version:     {info['version']}")
        print(f"  Records:     {info['record_count']}")
        print(f"  Archive:     {fmt_size(info['archive_size'])}")
        print(f"  Unpacked:    {fmt_size(info['original_size'])}")
        print(f"  Ratio:       {info['compression_ratio']:.2f}x")
        print()
        print(f"  {'Name':<32} {'Packed':>10} {'Size':>10}  Type")
        print(f"  {'-'*32} {'-'*10} {'-'*10}  {'-'*20}")
        for r in info['records']:
            print(
                f"  {r['name']:<32} "
                f"{r['compressed_size']:>10} "
                f"{r['original_size']:>10}  "
                f"{r['content_type']}"
            )
        print(f"{'='*65}\n")


__all__ = ["Inspector"]
