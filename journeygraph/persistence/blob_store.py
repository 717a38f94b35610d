"""Key-value blob stores the journey repository writes its slot into."""

from pathlib import Path
from typing import Protocol

from journeygraph.exceptions import PersistenceError


class BlobStore(Protocol):
    """Opaque string blobs addressed by slot name."""

    def read(self, slot: str) -> str | None:
        """Return the blob in `slot`, or None if the slot is empty."""
        ...

    def write(self, slot: str, payload: str) -> None:
        """Overwrite `slot` with `payload`."""
        ...


class MemoryBlobStore:
    """keeps blobs in a dict."""

    def __init__(self) -> None:
        self.blobs: dict[str, str] = {}

    def read(self, slot: str) -> str | None:
        return self.blobs.get(slot)

    def write(self, slot: str, payload: str) -> None:
        self.blobs[slot] = payload

    def clear(self) -> None:
        self.blobs.clear()


class FileBlobStore:
    """Writes each slot to `<directory>/<slot>.json`."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _slot_file(self, slot: str) -> Path:
        return self.directory / f"{slot}.json"

    def read(self, slot: str) -> str | None:
        slot_file = self._slot_file(slot)
        if not slot_file.exists():
            return None
        try:
            return slot_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Failed to read {slot_file}: {exc}", slot=slot) from exc

    def write(self, slot: str, payload: str) -> None:
        slot_file = self._slot_file(slot)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            slot_file.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Failed to write {slot_file}: {exc}", slot=slot) from exc
