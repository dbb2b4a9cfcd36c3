"""Base interface for managed-element gateways."""

from __future__ import annotations

import abc
from typing import Any, Literal, Optional, Sequence

from pydantic import BaseModel

Row = Sequence[Any]


class ColumnFilter(BaseModel):
    """Match rows on one column of a table."""

    pid: int
    value: Any
    operator: Literal["equal", "notequal"] = "equal"

    def matches(self, cell: Any) -> bool:
        equal = str(cell) == str(self.value)
        return equal if self.operator == "equal" else not equal


def column_index(table_id: int, pid: int) -> int:
    """Column position of ``pid`` when columns follow the table pid."""
    return pid - table_id - 1


class ManagedElement(metaclass=abc.ABCMeta):
    """Parameters and tables of one remote element."""

    name: str

    @abc.abstractmethod
    def get_table_rows(self, table_id: int) -> Optional[list[Row]]:
        """Return all rows of a table, or ``None`` when the table is empty."""
        raise NotImplementedError

    @abc.abstractmethod
    def query_table(self, table_id: int, filters: Sequence[ColumnFilter]) -> list[Row]:
        """Return the rows matching every filter."""
        raise NotImplementedError

    @abc.abstractmethod
    def get_parameter(self, parameter_id: int) -> Any:
        """Read a standalone parameter."""
        raise NotImplementedError

    @abc.abstractmethod
    def set_parameter(self, parameter_id: int, value: Any) -> None:
        """Write a standalone parameter."""
        raise NotImplementedError

    @abc.abstractmethod
    def set_parameter_by_key(self, parameter_id: int, key: str, value: Any) -> None:
        """Write a table cell addressed by column pid and primary key."""
        raise NotImplementedError


class ElementGateway(metaclass=abc.ABCMeta):
    """Resolves element names to :class:`ManagedElement` handles."""

    def connect(self) -> None:
        """Open connection to the platform (no-op by default)."""
        pass

    def disconnect(self) -> None:
        """Close connection to the platform (no-op by default)."""
        pass

    @abc.abstractmethod
    def get_element(self, name: str) -> ManagedElement:
        """Return the element or raise ``ElementNotFoundError``."""
        raise NotImplementedError
