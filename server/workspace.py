"""The server's single live draft and the catalog it is saved into."""

import logging
import os
from typing import Callable

from journeygraph.exceptions import PersistenceError
from journeygraph.models.journey import Journey
from journeygraph.persistence.repository import DEFAULT_SLOT, JourneyRepository
from journeygraph.store.graph_store import JourneyStore
from journeygraph.utils.identifiers import generate_entity_id
from server.journey_db import SqliteBlobStore

logger = logging.getLogger(__name__)

JOURNEY_SLOT = os.getenv("JOURNEY_SLOT", DEFAULT_SLOT)


class Workspace:
    """Owns the catalog repository and at most one open draft.

    The draft's JourneyStore is the only mutable journey in the process;
    every route reaches it through here.
    """

    def __init__(
        self,
        repository: JourneyRepository,
        issuer: Callable[[], str] | None = generate_entity_id,
    ) -> None:
        self.repository = repository
        self.issuer = issuer
        self.store: JourneyStore | None = None

    def new_draft(self, name: str = "", description: str = "") -> Journey:
        """Open a new seeded journey as the draft."""
        self.store = JourneyStore(issuer=self.issuer)
        journey = self.store.create_seeded(name=name, description=description)
        logger.info("Opened new draft %s", journey.id)
        return journey

    def open_draft(self, journey_id: str) -> Journey | None:
        """Load a catalog journey into the draft; None if it is not stored."""
        journey = self.repository.get_journey(journey_id)
        if journey is None:
            return None
        self.store = JourneyStore(journey, issuer=self.issuer)
        logger.info("Opened draft %s from catalog", journey_id)
        return journey

    def save_draft(self) -> bool:
        if self.store is None:
            return False
        return self.repository.save_journey(self.store.snapshot)


_workspace: Workspace | None = None


def get_workspace() -> Workspace:
    """FastAPI dependency returning the process-wide workspace."""
    global _workspace
    if _workspace is None:
        blob_store = SqliteBlobStore()
        try:
            blob_store.init_db()
        except PersistenceError as exc:
            # the draft stays usable; catalog calls will degrade to empty/no-op
            logger.error("Journey catalog unavailable: %s", exc)
        _workspace = Workspace(JourneyRepository(blob_store, slot=JOURNEY_SLOT))
    return _workspace
