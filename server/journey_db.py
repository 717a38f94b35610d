"""SQLite blob store backing the journey catalog."""

import os
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from journeygraph.exceptions import PersistenceError

DEFAULT_DB_PATH = Path(__file__).parent / "data" / "journeys.db"
JOURNEY_DB_PATH = Path(os.getenv("JOURNEY_DB_PATH", str(DEFAULT_DB_PATH)))


class SqliteBlobStore:
    """Stores one text blob per slot in a `blobs` table."""

    def __init__(self, db_path: Path | str | None = None) -> None:
        self.db_path = Path(db_path) if db_path else JOURNEY_DB_PATH

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    create table if not exists blobs (
                        slot text primary key,
                        payload text not null,
                        updated_at text not null
                    )
                    """
                )
                conn.commit()
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Failed to initialize {self.db_path}: {exc}") from exc

    def read(self, slot: str) -> str | None:
        try:
            with self._connect() as conn:
                row = conn.execute(
                    "select payload from blobs where slot = ?",
                    (slot,),
                ).fetchone()
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Failed to read slot {slot!r}: {exc}", slot=slot) from exc
        if not row:
            return None
        return row["payload"]

    def write(self, slot: str, payload: str) -> None:
        """insert or replace the slot's blob."""
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    insert into blobs (slot, payload, updated_at)
                    values (?, ?, ?)
                    on conflict(slot) do update set
                        payload = excluded.payload,
                        updated_at = excluded.updated_at
                    """,
                    (slot, payload, datetime.now(timezone.utc).isoformat()),
                )
                conn.commit()
        except (sqlite3.Error, OSError) as exc:
            raise PersistenceError(f"Failed to write slot {slot!r}: {exc}", slot=slot) from exc
