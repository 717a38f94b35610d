"""Journey graph store: the live snapshot and its mutation transforms."""

from journeygraph.store.graph_store import IdentityIssuer, JourneyStore, Subscriber

__all__ = [
    "IdentityIssuer",
    "JourneyStore",
    "Subscriber",
]
