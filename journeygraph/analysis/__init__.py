"""Analysis utilities for journey snapshots."""

from journeygraph.analysis.integrity import DanglingReference, find_dangling_references
from journeygraph.analysis.journey_summary import (
    JourneySummary,
    journey_summary,
    summary_to_dict,
)

__all__ = [
    "DanglingReference",
    "find_dangling_references",
    "JourneySummary",
    "journey_summary",
    "summary_to_dict",
]
