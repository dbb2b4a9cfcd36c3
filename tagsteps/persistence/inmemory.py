"""In-memory implementation of the instance repository."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Dict, Optional

from ..errors import InstanceNotFoundError
from .models import Instance, InstanceFilter, TransitionRecord
from .repository import (
    InstanceRepository,
    TransitionCatalogue,
    default_catalogue,
    resolve_transition,
)

logger = logging.getLogger(__name__)


class InMemoryInstanceRepository(InstanceRepository):
    """Store instances in local memory.

    Useful for tests or when no database is configured. Data is not
    persisted across process restarts. Reads return copies so callers never
    observe later transitions through a stale object.
    """

    def __init__(self, transitions: Optional[TransitionCatalogue] = None) -> None:
        self._instances: Dict[str, Instance] = {}
        self._transitions = transitions or default_catalogue()
        self._lock = threading.Lock()
        self._record_id = 0
        self.requested_transitions: list[tuple[str, str]] = []

    # ------------------------------------------------------------------
    def create_instance(self, instance: Instance) -> None:
        with self._lock:
            self._instances[instance.id] = instance.model_copy(deep=True)

    def read_by_id(self, instance_id: str) -> Instance | None:
        instance = self._instances.get(instance_id)
        return instance.model_copy(deep=True) if instance else None

    def read_by_filter(self, instance_filter: InstanceFilter) -> list[Instance]:
        return [
            instance.model_copy(deep=True)
            for instance in self._instances.values()
            if instance_filter.matches(instance)
        ]

    def request_transition(self, instance_id: str, transition: str) -> Instance:
        with self._lock:
            self.requested_transitions.append((instance_id, transition))
            instance = self._instances.get(instance_id)
            if instance is None:
                raise InstanceNotFoundError(instance_id)
            target = resolve_transition(
                self._transitions, instance_id, transition, instance.status
            )
            self._record_id += 1
            instance.history.append(
                TransitionRecord(
                    id=self._record_id,
                    instance_id=instance_id,
                    transition=transition,
                    from_status=instance.status,
                    to_status=target,
                    applied_at=datetime.now(timezone.utc),
                )
            )
            logger.info(
                f"Instance {instance_id}: {instance.status} -> {target} via {transition}"
            )
            instance.status = target
            return instance.model_copy(deep=True)

    def list_instances(self) -> list[Instance]:
        return [instance.model_copy(deep=True) for instance in self._instances.values()]
