"""Repository abstraction for instance persistence."""

from __future__ import annotations

from typing import Protocol

from ..constants import DEFAULT_TRANSITIONS
from ..errors import InvalidTransitionError
from .models import Instance, InstanceFilter

TransitionCatalogue = dict[str, tuple[frozenset[str], str]]


class InstanceRepository(Protocol):
    """Protocol for instance store backends.

    Status only changes through :meth:`request_transition`, which must either
    apply the named transition atomically against the current status or raise.
    """

    def create_instance(self, instance: Instance) -> None:
        """Persist a new instance."""

    def read_by_id(self, instance_id: str) -> Instance | None:
        """Return the instance or ``None`` when absent."""

    def read_by_filter(self, instance_filter: InstanceFilter) -> list[Instance]:
        """Return all instances matching the filter (possibly none)."""

    def request_transition(self, instance_id: str, transition: str) -> Instance:
        """Apply a named transition and return the updated instance."""

    def list_instances(self) -> list[Instance]:
        """Return all persisted instances."""


def resolve_transition(
    catalogue: TransitionCatalogue, instance_id: str, transition: str, status: str
) -> str:
    """Return the target status of ``transition`` from ``status`` or raise."""
    entry = catalogue.get(transition)
    if entry is None:
        raise InvalidTransitionError(instance_id, transition, status)
    sources, target = entry
    if status not in sources:
        raise InvalidTransitionError(instance_id, transition, status)
    return target


def default_catalogue() -> TransitionCatalogue:
    return dict(DEFAULT_TRANSITIONS)
