"""Journey persistence over a single named slot of a blob store.

The slot holds a JSON array of journeys using the wire field names
(camelCase aliases). Nothing here raises to the caller: a missing,
unreadable or corrupt slot loads as an empty list, and a failed write is
logged and dropped. The in-memory store stays authoritative.
"""

import json
import logging

from pydantic import ValidationError

from journeygraph.exceptions import PersistenceError
from journeygraph.models.journey import Journey
from journeygraph.persistence.blob_store import BlobStore
from journeygraph.utils.identifiers import is_unassigned

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "journeys"


def dump_journeys(journeys: list[Journey]) -> str:
    return json.dumps([j.model_dump(mode="json", by_alias=True) for j in journeys])


def parse_journeys(payload: str) -> list[Journey]:
    """Parse a slot payload, skipping entries that fail validation.

    Raises:
        ValueError: if the payload is not a JSON array.
    """
    data = json.loads(payload)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")

    journeys: list[Journey] = []
    for position, entry in enumerate(data):
        try:
            journeys.append(Journey.model_validate(entry))
        except ValidationError as exc:
            logger.warning("Skipping invalid journey at position %d: %s", position, exc)
    return journeys


class JourneyRepository:
    """load/save of the whole journey list, plus per-journey upsert/remove."""

    def __init__(self, blob_store: BlobStore, slot: str = DEFAULT_SLOT) -> None:
        self.blob_store = blob_store
        self.slot = slot

    def load(self) -> list[Journey]:
        """All stored journeys; [] when the slot is missing or corrupt."""
        try:
            payload = self.blob_store.read(self.slot)
        except PersistenceError as exc:
            logger.error("Failed to load journeys from slot %r: %s", self.slot, exc)
            return []
        if not payload:
            return []

        try:
            return parse_journeys(payload)
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError too
            logger.warning("Corrupt journey slot %r, treating as empty: %s", self.slot, exc)
            return []

    def save(self, journeys: list[Journey]) -> bool:
        """Overwrite the slot. Returns False (after logging) when the write failed."""
        try:
            self.blob_store.write(self.slot, dump_journeys(journeys))
        except (PersistenceError, TypeError, ValueError) as exc:
            logger.error("Failed to save journeys to slot %r: %s", self.slot, exc)
            return False
        logger.info("Saved %d journey(s) to slot %r", len(journeys), self.slot)
        return True

    def get_journey(self, journey_id: str) -> Journey | None:
        if is_unassigned(journey_id):
            return None
        return next((j for j in self.load() if j.id == journey_id), None)

    def save_journey(self, journey: Journey) -> bool:
        """Replace the stored journey with the same id, or append it.

        Unassigned journeys are always appended: the placeholder id cannot
        tell them apart.
        """
        journeys = self.load()
        if not is_unassigned(journey.id):
            for index, existing in enumerate(journeys):
                if existing.id == journey.id:
                    journeys[index] = journey
                    return self.save(journeys)
        journeys.append(journey)
        return self.save(journeys)

    def remove_journey(self, journey_id: str) -> bool:
        """Remove a stored journey; False when nothing was removed."""
        if is_unassigned(journey_id):
            return False
        journeys = self.load()
        kept = [j for j in journeys if j.id != journey_id]
        if len(kept) == len(journeys):
            return False
        return self.save(kept)
