"""
FSGAME Ingest Orchestrator
manifest -> fragments -> merged archive -> records -> inflated blobs -> store

Progress runs 0-50% while fetching and 50-100% while unpacking.
The first error ends the ingest; records stored before it stay stored.
"""
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..config import config
from ..errors import FSGameError
from ..fetcher.fetcher import FragmentFetcher
from ..fetcher.manifest import Manifest
from ..fetcher.merger import merge_buffers
from ..store.blob_store import Blob, BlobStore
from ..unpacker.decoder import ContainerDecoder
from ..unpacker.inflator import RecordInflator
from ..utils.logger import logger
from .progress import NullProgress, ProgressSink
from .viewer import Viewer


class IngestState(str, Enum):
    IDLE = 'idle'
    FETCHING = 'fetching'
    MERGING = 'merging'
    DECODING = 'decoding'
    FINALIZING = 'finalizing'
    COMPLETE = 'complete'
    FAILED = 'failed'


TERMINAL_STATES = {IngestState.COMPLETE, IngestState.FAILED}


@dataclass
class IngestResult:
    state: IngestState
    source: str
    version: Optional[int] = None
    stored: List[str] = field(default_factory=list)
    stored_bytes: int = 0
    entry: Optional[str] = None
    error: Optional[str] = None
    elapsed: float = 0.0

    @property
    def success(self) -> bool:
        return self.state == IngestState.COMPLETE


class IngestOrchestrator:
    FETCH_SPAN = 50

    def __init__(
        self,
        store: BlobStore,
        fetcher: FragmentFetcher = None,
        progress: ProgressSink = None,
        viewer: Viewer = None,
        entry: str = None,
        inflator: RecordInflator = None
    ):
        self.store = store
        self.fetcher = fetcher or FragmentFetcher()
        self.progress = progress or NullProgress()
        self.viewer = viewer
        self.entry = entry or config.entry
        self.inflator = inflator or RecordInflator()

        self.state = IngestState.IDLE
        self.percent = 0
        self.result = None

    def run(self, manifest_source: str) -> IngestResult:
        """
        Ingest the archive described by the manifest at manifest_source
        (URL or local path). Raises the first FSGameError encountered.
        """
        if self.state != IngestState.IDLE:
            raise RuntimeError(f"Ingest already {self.state.value}; create a new orchestrator")

        start_time = time.time()
        self.result = IngestResult(state=self.state, source=manifest_source)

        try:
            logger.info(f"🎮 Ingesting: {manifest_source}")
            self._transition(IngestState.FETCHING)
            manifest = self.fetcher.fetch_manifest(manifest_source)
            fragments = self._fetch(manifest)

            self._transition(IngestState.MERGING)
            merged = merge_buffers(fragments)
            del fragments
            self._report(self.FETCH_SPAN, "📦 Merging files...")
            logger.info(f"Merged archive: {len(merged)/1024:.1f} KB")

            self._transition(IngestState.DECODING)
            self._unpack(merged)

            self._transition(IngestState.FINALIZING)
            self._finalize()

        except FSGameError as e:
            self._fail(e)
            raise
        except Exception as e:
            logger.error(f"Ingest failed unexpectedly: {e}", exc_info=True)
            self._fail(e)
            raise
        finally:
            self.result.elapsed = time.time() - start_time

        self._transition(IngestState.COMPLETE)
        self._report(100, "Complete")
        logger.info(f"✅ Ingest complete: {len(self.result.stored)} file(s), "
                    f"{self.result.stored_bytes/1024:.1f} KB in {self.result.elapsed:.2f}s")
        return self.result

    def _fetch(self, manifest: Manifest) -> List[bytes]:
        total = len(manifest)
        self._report(0, f"📥 Downloading {total} files...")

        def on_progress(completed, count):
            self._report(
                completed * self.FETCH_SPAN // count,
                f"📥 Downloading file {completed}/{count}..."
            )

        return self.fetcher.fetch_all(manifest.locators, on_progress, manifest.checksums)

    def _unpack(self, merged: bytes):
        decoder = ContainerDecoder(merged)
        header = decoder.read_header()
        self.result.version = header.version
        count = header.record_count

        for i, record in enumerate(decoder.iter_records()):
            inflated = self.inflator.inflate_file(record)
            self.store.put(inflated.name, Blob(inflated.data, inflated.content_type))

            self.result.stored.append(inflated.name)
            self.result.stored_bytes += len(inflated.data)
            logger.debug(f"   stored {inflated.name} [{inflated.content_type}]")

            self._report(
                self.FETCH_SPAN + (i + 1) * (100 - self.FETCH_SPAN) // count,
                f"📦 Unpacking file {i + 1}/{count}..."
            )

        logger.info("✅ Unpack complete!")

    def _finalize(self):
        if self.entry in self.store:
            self.result.entry = self.entry
        else:
            logger.warning(f"Entry file {self.entry} not found in archive")

        if self.viewer is not None:
            self.viewer.launch(self.store, self.entry)

    def _transition(self, state: IngestState):
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"Ingest already {self.state.value}")
        logger.debug(f"Ingest state: {self.state.value} -> {state.value}")
        self.state = state
        self.result.state = state

    def _report(self, percent: int, status: str):
        self.percent = max(self.percent, min(100, percent))
        self.progress.update(self.percent, status)

    def _fail(self, error: Exception):
        self.state = IngestState.FAILED
        self.result.state = IngestState.FAILED
        self.result.error = str(error)
        logger.error(f"❌ Ingest failed: {error}")
        self.progress.fail(str(error))


def ingest(
    manifest_source: str,
    store: BlobStore,
    progress: ProgressSink = None,
    viewer: Viewer = None,
    entry: str = None
) -> IngestResult:
    return IngestOrchestrator(store, progress=progress, viewer=viewer, entry=entry).run(manifest_source)


__all__ = ["IngestState", "IngestResult", "IngestOrchestrator", "ingest"]
