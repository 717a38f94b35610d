"""PreviewEngine: keeps a rendered scene in step with a JourneyStore."""

import logging

from journeygraph.layout.grid import DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH
from journeygraph.layout.scene import GraphScene, build_scene
from journeygraph.layout.selection import NodeDetails, SelectionState, resolve_node_details
from journeygraph.models.journey import Journey
from journeygraph.store.graph_store import JourneyStore

logger = logging.getLogger(__name__)


class PreviewEngine:
    """Recomputes the scene whenever the store publishes a new snapshot.

    The scene is rebuilt in full on every change. Recomputes for a snapshot
    (and canvas/selection) already rendered are skipped.

    Usage:
        engine = PreviewEngine(store, width=800, height=400)
        engine.scene          # current GraphScene
        engine.click(node_id) # toggle selection
        engine.details        # NodeDetails for the selection, or None
    """

    def __init__(
        self,
        store: JourneyStore,
        width: float = DEFAULT_CANVAS_WIDTH,
        height: float = DEFAULT_CANVAS_HEIGHT,
    ) -> None:
        self._store = store
        self.width = width
        self.height = height
        self.selection = SelectionState()
        self.recompute_count = 0
        self._rendered_journey: Journey | None = None
        self._rendered_key: tuple | None = None
        self._scene: GraphScene | None = None
        self._unsubscribe = store.subscribe(self._on_snapshot)
        self._render(store.snapshot)

    def _on_snapshot(self, journey: Journey) -> None:
        self._render(journey)

    def _render(self, journey: Journey) -> GraphScene:
        key = (self.width, self.height, self.selection.selected_id)
        if (
            self._scene is not None
            and journey is self._rendered_journey
            and key == self._rendered_key
        ):
            return self._scene
        self._scene = build_scene(journey, self.width, self.height, self.selection.selected_id)
        self._rendered_journey = journey
        self._rendered_key = key
        self.recompute_count += 1
        logger.debug(
            "Rendered scene: %d node(s), %d edge(s)", len(self._scene.nodes), len(self._scene.edges)
        )
        return self._scene

    @property
    def scene(self) -> GraphScene:
        return self._render(self._store.snapshot)

    @property
    def details(self) -> NodeDetails | None:
        """Detail panel for the selected node, resolved against the live snapshot."""
        return resolve_node_details(self._store.snapshot, self.selection.selected_id)

    def click(self, node_id: str) -> str | None:
        """Toggle selection of a node and redraw."""
        selected = self.selection.toggle(node_id)
        self._render(self._store.snapshot)
        return selected

    def resize(self, width: float, height: float) -> GraphScene:
        self.width = width
        self.height = height
        return self._render(self._store.snapshot)

    def close(self) -> None:
        """Stop following the store."""
        self._unsubscribe()
