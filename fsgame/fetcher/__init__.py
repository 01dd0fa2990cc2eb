from .manifest import Manifest
from .fetcher import FragmentFetcher
from .merger import merge_buffers

__all__ = [
    "Manifest",
    "FragmentFetcher",
    "merge_buffers"
]
