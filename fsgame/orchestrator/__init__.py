from .ingest import IngestState, IngestResult, IngestOrchestrator, ingest
from .progress import ProgressSink, NullProgress, LoggingProgress
from .viewer import Viewer, DirectoryViewer, export_store

__all__ = [
    "IngestState",
    "IngestResult",
    "IngestOrchestrator",
    "ingest",
    "ProgressSink",
    "NullProgress",
    "LoggingProgress",
    "Viewer",
    "DirectoryViewer",
    "export_store"
]
