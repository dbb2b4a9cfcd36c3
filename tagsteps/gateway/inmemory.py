"""In-memory element gateway for testing."""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from ..errors import ElementNotFoundError
from .base import ColumnFilter, ElementGateway, ManagedElement, Row, column_index


class InMemoryElement(ManagedElement):
    """Element whose tables and parameters live in dictionaries.

    Every write is appended to :attr:`writes` so tests can assert on the
    exact commands a step pushed.
    """

    def __init__(
        self,
        name: str,
        tables: Optional[Dict[int, List[List[Any]]]] = None,
        parameters: Optional[Dict[int, Any]] = None,
        columns: Optional[Dict[int, List[int]]] = None,
    ) -> None:
        self.name = name
        self.tables: Dict[int, List[List[Any]]] = defaultdict(list, tables or {})
        self.parameters: Dict[int, Any] = dict(parameters or {})
        self.keyed_parameters: Dict[int, Dict[str, Any]] = defaultdict(dict)
        self.columns = columns or {}
        self.writes: List[tuple] = []
        self._lock = threading.Lock()

    def _index(self, table_id: int, pid: int) -> int:
        layout = self.columns.get(table_id)
        if layout is not None:
            return layout.index(pid)
        return column_index(table_id, pid)

    def get_table_rows(self, table_id: int) -> Optional[list[Row]]:
        with self._lock:
            rows = self.tables.get(table_id)
            if not rows:
                return None
            return [tuple(row) for row in rows]

    def query_table(self, table_id: int, filters: Sequence[ColumnFilter]) -> list[Row]:
        with self._lock:
            rows = self.tables.get(table_id) or []
            indexed = [(self._index(table_id, f.pid), f) for f in filters]
            return [
                tuple(row)
                for row in rows
                if all(idx < len(row) and f.matches(row[idx]) for idx, f in indexed)
            ]

    def get_parameter(self, parameter_id: int) -> Any:
        return self.parameters.get(parameter_id)

    def set_parameter(self, parameter_id: int, value: Any) -> None:
        with self._lock:
            self.parameters[parameter_id] = value
            self.writes.append((parameter_id, None, value))

    def set_parameter_by_key(self, parameter_id: int, key: str, value: Any) -> None:
        with self._lock:
            self.keyed_parameters[parameter_id][key] = value
            self.writes.append((parameter_id, key, value))

    def remove_rows(self, table_id: int, column: int, values: Sequence[Any]) -> None:
        """Drop rows whose ``column`` holds one of ``values``."""
        with self._lock:
            self.tables[table_id] = [
                row for row in self.tables.get(table_id, []) if row[column] not in values
            ]


class InMemoryGateway(ElementGateway):
    """Registry of :class:`InMemoryElement` objects."""

    def __init__(self) -> None:
        self._elements: Dict[str, InMemoryElement] = {}

    def add_element(self, element: InMemoryElement) -> InMemoryElement:
        self._elements[element.name] = element
        return element

    def get_element(self, name: str) -> InMemoryElement:
        element = self._elements.get(name)
        if element is None:
            raise ElementNotFoundError(name)
        return element
