"""Persistence boundary: blob stores and the journey repository."""

from journeygraph.persistence.blob_store import BlobStore, FileBlobStore, MemoryBlobStore
from journeygraph.persistence.repository import (
    DEFAULT_SLOT,
    JourneyRepository,
    dump_journeys,
    parse_journeys,
)

__all__ = [
    "BlobStore",
    "FileBlobStore",
    "MemoryBlobStore",
    "DEFAULT_SLOT",
    "JourneyRepository",
    "dump_journeys",
    "parse_journeys",
]
