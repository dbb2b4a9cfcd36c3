"""Probes observing whether a pushed command has taken effect."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from .constants import (
    ACTIVE_TO_COMPLETE,
    ACTIVE_TO_DRAFT,
    STATUS_COMPLETE,
    STATUS_DEACTIVATING,
    STATUS_DRAFT,
)
from .contracts import ScanRequest
from .errors import InstanceNotFoundError
from .gateway import ManagedElement
from .gateway.base import Row
from .persistence import InstanceRepository
from .scans import request_titles

logger = logging.getLogger(__name__)


def target_child_status(status: str) -> str:
    """Status every child channel must reach for the given scan status."""
    return STATUS_COMPLETE if status == STATUS_DEACTIVATING else STATUS_DRAFT


def child_transition(status: str) -> str:
    """Transition requested on every child channel for the given scan status."""
    return ACTIVE_TO_COMPLETE if status == STATUS_DEACTIVATING else ACTIVE_TO_DRAFT


def titles_cleared(titles: Sequence[str], rows: Sequence[Row] | None, title_column: int) -> bool:
    """``True`` when no row carries one of ``titles``; no rows counts as cleared."""
    if not rows:
        return True
    pending = set(titles)
    for row in rows:
        if title_column < len(row) and str(row[title_column]) in pending:
            return False
    return True


def children_at_status(
    repository: InstanceRepository, child_ids: Sequence[str], target_status: str
) -> bool:
    """``True`` when every child instance currently has ``target_status``."""
    for child_id in child_ids:
        child = repository.read_by_id(child_id)
        if child is None:
            raise InstanceNotFoundError(child_id)
        if child.status != target_status:
            return False
    return True


@dataclass(frozen=True)
class ScanDeletionProbe:
    """Holds everything needed to check that a scan was removed.

    Calling the probe only reads state. It is true once the scan-channels
    table no longer lists any request title and every child channel reached
    the target status.
    """

    element: ManagedElement
    repository: InstanceRepository
    scan_requests: Tuple[ScanRequest, ...]
    child_ids: Tuple[str, ...]
    target_status: str
    table_id: int
    title_column: int

    def element_cleared(self) -> bool:
        titles = request_titles(self.scan_requests)
        rows = self.element.get_table_rows(self.table_id)
        return titles_cleared(titles, rows, self.title_column)

    def children_converged(self) -> bool:
        return children_at_status(self.repository, self.child_ids, self.target_status)

    def __call__(self) -> bool:
        try:
            scan_completed = self.element_cleared()
            channels_updated = self.children_converged()
        except Exception as e:
            logger.error(f"Exception thrown while checking TAG Scan status: {e}")
            raise
        logger.debug(
            f"Scan cleared={scan_completed}, channels at {self.target_status}={channels_updated}"
        )
        return scan_completed and channels_updated


def build_scan_deletion_probe(
    element: ManagedElement,
    repository: InstanceRepository,
    scan_requests: Sequence[ScanRequest],
    child_ids: Sequence[str],
    status: str,
    table_id: int,
    title_column: int,
) -> ScanDeletionProbe:
    return ScanDeletionProbe(
        element=element,
        repository=repository,
        scan_requests=tuple(scan_requests),
        child_ids=tuple(child_ids),
        target_status=target_child_status(status),
        table_id=table_id,
        title_column=title_column,
    )
