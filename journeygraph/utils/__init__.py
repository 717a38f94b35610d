"""Utility functions for the journey graph core."""

from journeygraph.utils.identifiers import (
    UNASSIGNED_ID,
    generate_entity_id,
    is_unassigned,
    next_timestamp,
    utc_now,
)

__all__ = [
    "UNASSIGNED_ID",
    "generate_entity_id",
    "is_unassigned",
    "next_timestamp",
    "utc_now",
]
