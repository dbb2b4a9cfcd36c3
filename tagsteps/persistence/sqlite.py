"""SQLite implementation of the instance repository."""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..errors import InstanceNotFoundError, InvalidTransitionError
from .models import Instance, InstanceFilter, TransitionRecord
from .repository import (
    InstanceRepository,
    TransitionCatalogue,
    default_catalogue,
    resolve_transition,
)

logger = logging.getLogger(__name__)


class SQLiteInstanceRepository(InstanceRepository):
    """Persist instances using SQLite."""

    def __init__(
        self, db_path: str | Path, transitions: Optional[TransitionCatalogue] = None
    ):
        self.db_path = str(db_path)
        self._transitions = transitions or default_catalogue()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._ensure_schema()

    # ------------------------------------------------------------------
    # Schema management
    def _ensure_schema(self) -> None:
        cur = self._conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS instances (
                id TEXT PRIMARY KEY,
                definition TEXT NOT NULL,
                status TEXT NOT NULL,
                fields TEXT
            )
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS transition_history (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                instance_id TEXT NOT NULL,
                transition TEXT NOT NULL,
                from_status TEXT NOT NULL,
                to_status TEXT NOT NULL,
                applied_at TEXT
            )
            """
        )
        self._conn.commit()

    # ------------------------------------------------------------------
    # Helper methods
    def _fetchone(self, query: str, *params: Any) -> sqlite3.Row | None:
        cur = self._conn.cursor()
        cur.execute(query, params)
        return cur.fetchone()

    def _fetchall(self, query: str, *params: Any) -> list[sqlite3.Row]:
        cur = self._conn.cursor()
        cur.execute(query, params)
        return cur.fetchall()

    def _history(self, instance_id: str) -> list[TransitionRecord]:
        rows = self._fetchall(
            "SELECT id, instance_id, transition, from_status, to_status, applied_at "
            "FROM transition_history WHERE instance_id = ? ORDER BY id",
            instance_id,
        )
        return [
            TransitionRecord(
                id=r["id"],
                instance_id=r["instance_id"],
                transition=r["transition"],
                from_status=r["from_status"],
                to_status=r["to_status"],
                applied_at=datetime.fromisoformat(r["applied_at"]) if r["applied_at"] else None,
            )
            for r in rows
        ]

    def _to_instance(self, row: sqlite3.Row, with_history: bool = True) -> Instance:
        return Instance(
            id=row["id"],
            definition=row["definition"],
            status=row["status"],
            fields=json.loads(row["fields"]) if row["fields"] else {},
            history=self._history(row["id"]) if with_history else [],
        )

    # ------------------------------------------------------------------
    # Repository API
    def create_instance(self, instance: Instance) -> None:
        with self._lock:
            self._conn.execute(
                "INSERT INTO instances (id, definition, status, fields) VALUES (?, ?, ?, ?)",
                (
                    instance.id,
                    instance.definition,
                    instance.status,
                    json.dumps(instance.fields),
                ),
            )
            self._conn.commit()

    def read_by_id(self, instance_id: str) -> Instance | None:
        row = self._fetchone(
            "SELECT id, definition, status, fields FROM instances WHERE id = ?",
            instance_id,
        )
        if not row:
            return None
        return self._to_instance(row)

    def read_by_filter(self, instance_filter: InstanceFilter) -> list[Instance]:
        clauses: list[str] = []
        params: list[Any] = []
        if instance_filter.ids is not None:
            if not instance_filter.ids:
                return []
            clauses.append(f"id IN ({', '.join('?' for _ in instance_filter.ids)})")
            params.extend(instance_filter.ids)
        if instance_filter.status is not None:
            clauses.append("status = ?")
            params.append(instance_filter.status)
        if instance_filter.definition is not None:
            clauses.append("definition = ?")
            params.append(instance_filter.definition)
        query = "SELECT id, definition, status, fields FROM instances"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        return [self._to_instance(row) for row in self._fetchall(query, *params)]

    def request_transition(self, instance_id: str, transition: str) -> Instance:
        with self._lock:
            row = self._fetchone("SELECT status FROM instances WHERE id = ?", instance_id)
            if not row:
                raise InstanceNotFoundError(instance_id)
            status = row["status"]
            target = resolve_transition(self._transitions, instance_id, transition, status)

            cur = self._conn.cursor()
            # conditional update so a concurrent writer cannot be overwritten
            cur.execute(
                "UPDATE instances SET status = ? WHERE id = ? AND status = ?",
                (target, instance_id, status),
            )
            if cur.rowcount != 1:
                self._conn.rollback()
                current = self._fetchone("SELECT status FROM instances WHERE id = ?", instance_id)
                raise InvalidTransitionError(
                    instance_id, transition, current["status"] if current else status
                )
            cur.execute(
                "INSERT INTO transition_history "
                "(instance_id, transition, from_status, to_status, applied_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    instance_id,
                    transition,
                    status,
                    target,
                    datetime.now(timezone.utc).isoformat(),
                ),
            )
            self._conn.commit()

        logger.info(f"Instance {instance_id}: {status} -> {target} via {transition}")
        instance = self.read_by_id(instance_id)
        if instance is None:
            raise InstanceNotFoundError(instance_id)
        return instance

    def list_instances(self) -> list[Instance]:
        rows = self._fetchall("SELECT id, definition, status, fields FROM instances")
        return [self._to_instance(row, with_history=False) for row in rows]
