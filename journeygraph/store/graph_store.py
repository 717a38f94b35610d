"""JourneyStore: single owner of the live journey snapshot.

All mutation goes through the store's operations. Each one runs a pure
transform from `journeygraph.store.transforms`, refreshes `updated_at`
when the snapshot actually changed, and notifies subscribers.

Usage:
    store = JourneyStore()
    store.create_seeded(name="Onboarding")
    store.add_node(NodeCreate(name="Verify email", type=NodeType.custom))
    store.snapshot  # current Journey
"""

import logging
from typing import Callable

from journeygraph.models.edge import EdgeCreate, EdgeUpdate
from journeygraph.models.function import FunctionCreate, FunctionUpdate
from journeygraph.models.journey import Journey, JourneyUpdate
from journeygraph.models.mapping import MappingCreate, MappingUpdate
from journeygraph.models.node import NodeCreate, NodeUpdate
from journeygraph.models.property import PropertyCreate, PropertyUpdate
from journeygraph.store import transforms
from journeygraph.utils.identifiers import UNASSIGNED_ID, next_timestamp

logger = logging.getLogger(__name__)

Subscriber = Callable[[Journey], None]
IdentityIssuer = Callable[[], str]


class JourneyStore:
    """Holds one Journey and exposes its atomic mutation operations.

    Every operation returns the (possibly unchanged) snapshot. Operations on
    ids that cannot be found leave the snapshot untouched: no timestamp
    refresh, no notification.
    """

    def __init__(
        self,
        journey: Journey | None = None,
        issuer: IdentityIssuer | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            journey: initial snapshot. An empty journey when None.
            issuer: optional identity issuer called once per created entity.
                Without one, new entities hold the unassigned placeholder.
        """
        self._journey = journey if journey is not None else transforms.create_empty()
        self._issuer = issuer
        self._subscribers: list[Subscriber] = []

    @property
    def snapshot(self) -> Journey:
        """The current journey. Frozen; mutate through the store."""
        return self._journey

    # --- observers ---

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback` for every new snapshot; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self._journey)

    # --- internals ---

    def _issue(self) -> str:
        return self._issuer() if self._issuer else UNASSIGNED_ID

    def _commit(self, updated: Journey, operation: str) -> Journey:
        if updated is self._journey:
            logger.debug("%s: no matching entity, snapshot unchanged", operation)
            return self._journey
        stamp = next_timestamp(self._journey.updated_at)
        self._journey = updated.model_copy(update={"updated_at": stamp})
        self._notify()
        return self._journey

    def _reset(self, journey: Journey) -> Journey:
        self._journey = journey
        self._notify()
        return self._journey

    # --- journey ---

    def create_empty(self) -> Journey:
        """Replace the live journey with a fresh empty one."""
        return self._reset(transforms.create_empty())

    def create_seeded(self, name: str = "", description: str = "") -> Journey:
        """Replace the live journey with a new one holding Start, End and the default edge."""
        journey = transforms.create_empty().model_copy(
            update={"id": self._issue(), "name": name, "description": description}
        )
        journey = transforms.seed_start_end(
            journey,
            start_id=self._issue(),
            end_id=self._issue(),
            default_edge_id=self._issue(),
        )
        return self._reset(journey)

    def load(self, journey: Journey) -> Journey:
        """Adopt a previously stored snapshot verbatim."""
        return self._reset(journey)

    def replace_whole(self, update: JourneyUpdate) -> Journey:
        """Shallow-merge the given fields and refresh `updated_at`."""
        merged = transforms.merge_journey(self._journey, update)
        if merged is self._journey:
            merged = self._journey.model_copy()
        return self._commit(merged, "replace_whole")

    def toggle_active(self) -> Journey:
        return self._commit(transforms.toggle_active(self._journey), "toggle_active")

    def prune_dangling(self) -> Journey:
        """Drop references to entities that no longer exist."""
        return self._commit(transforms.prune_dangling(self._journey), "prune_dangling")

    # --- properties ---

    def add_property(self, data: PropertyCreate) -> Journey:
        return self._commit(
            transforms.add_property(self._journey, data, self._issue()), "add_property"
        )

    def update_property(self, property_id: str, update: PropertyUpdate) -> Journey:
        return self._commit(
            transforms.update_property(self._journey, property_id, update), "update_property"
        )

    def delete_property(self, property_id: str) -> Journey:
        """Delete a property and strip it from every node."""
        return self._commit(
            transforms.delete_property(self._journey, property_id), "delete_property"
        )

    # --- nodes ---

    def add_node(self, data: NodeCreate) -> Journey:
        return self._commit(transforms.add_node(self._journey, data, self._issue()), "add_node")

    def update_node(self, node_id: str, update: NodeUpdate) -> Journey:
        return self._commit(transforms.update_node(self._journey, node_id, update), "update_node")

    def delete_node(self, node_id: str) -> Journey:
        """Delete a node with its edges and mappings."""
        return self._commit(transforms.delete_node(self._journey, node_id), "delete_node")

    # --- functions ---

    def add_function(self, data: FunctionCreate) -> Journey:
        return self._commit(
            transforms.add_function(self._journey, data, self._issue()), "add_function"
        )

    def update_function(self, function_id: str, update: FunctionUpdate) -> Journey:
        return self._commit(
            transforms.update_function(self._journey, function_id, update), "update_function"
        )

    def delete_function(self, function_id: str) -> Journey:
        """Delete a function and every mapping onto it."""
        return self._commit(
            transforms.delete_function(self._journey, function_id), "delete_function"
        )

    # --- mappings ---

    def add_mapping(self, data: MappingCreate) -> Journey:
        return self._commit(
            transforms.add_mapping(self._journey, data, self._issue()), "add_mapping"
        )

    def update_mapping(self, mapping_id: str, update: MappingUpdate) -> Journey:
        return self._commit(
            transforms.update_mapping(self._journey, mapping_id, update), "update_mapping"
        )

    def delete_mapping(self, mapping_id: str) -> Journey:
        return self._commit(
            transforms.delete_mapping(self._journey, mapping_id), "delete_mapping"
        )

    # --- edges ---

    def add_edge(self, data: EdgeCreate) -> Journey:
        """Add an edge; a custom edge out of the start node retires the default edge."""
        return self._commit(transforms.add_edge(self._journey, data, self._issue()), "add_edge")

    def update_edge(self, edge_id: str, update: EdgeUpdate) -> Journey:
        return self._commit(transforms.update_edge(self._journey, edge_id, update), "update_edge")

    def delete_edge(self, edge_id: str) -> Journey:
        return self._commit(transforms.delete_edge(self._journey, edge_id), "delete_edge")

    def __repr__(self) -> str:
        j = self._journey
        return (
            f"JourneyStore(id={j.id!r}, nodes={len(j.nodes)}, edges={len(j.edges)}, "
            f"subscribers={len(self._subscribers)})"
        )
