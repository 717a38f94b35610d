"""Tests for id placeholders and monotonic timestamps."""

from datetime import datetime, timedelta, timezone

from journeygraph.utils.identifiers import (
    UNASSIGNED_ID,
    generate_entity_id,
    is_unassigned,
    next_timestamp,
    utc_now,
)


def test_unassigned_placeholder():
    assert is_unassigned(UNASSIGNED_ID)
    assert is_unassigned(None)
    assert not is_unassigned("n1")


def test_generated_ids_are_unique():
    ids = {generate_entity_id() for _ in range(50)}
    assert len(ids) == 50
    assert not any(is_unassigned(i) for i in ids)


def test_utc_now_is_aware():
    assert utc_now().tzinfo is not None


def test_next_timestamp_moves_past_future_value():
    ahead = utc_now() + timedelta(hours=1)
    assert next_timestamp(ahead) == ahead + timedelta(microseconds=1)


def test_next_timestamp_accepts_naive_previous():
    naive = datetime(2020, 1, 1)
    stamp = next_timestamp(naive)
    assert stamp > naive.replace(tzinfo=timezone.utc)
