"""Status transition decisions for the provisioning steps.

The functions here are pure: they map the freshest instance status (and,
where relevant, the poll outcome) to the transition to request and the
outcome to report. Requesting the transition is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .constants import (
    COMPLETE_TO_READY,
    DEACTIVATE_TO_DEACTIVATING,
    DEACTIVATING_TO_COMPLETE,
    READY_TO_INPROGRESS,
    STATUS_DEACTIVATE,
    STATUS_DEACTIVATING,
    STATUS_IN_PROGRESS,
    STATUS_READY,
    STATUS_REPROVISION,
)
from .contracts import OutcomeKind

INVALID_STATUS_FOR_TRANSITION = "InvalidStatusForTransition"
CONVERGENCE_TIMEOUT = "ConvergenceTimeout"
UNEXPECTED_STATE = "UnexpectedState"


@dataclass(frozen=True)
class Decision:
    transition: Optional[str]
    outcome: OutcomeKind
    # error/warning code; None when the path is a normal one
    code: Optional[str] = None


def decide_monitoring(status: str) -> Decision:
    if status == STATUS_DEACTIVATING:
        return Decision(DEACTIVATING_TO_COMPLETE, OutcomeKind.FINISH)
    if status == STATUS_READY:
        return Decision(READY_TO_INPROGRESS, OutcomeKind.CONTINUE)
    if status == STATUS_IN_PROGRESS:
        return Decision(None, OutcomeKind.CONTINUE)
    return Decision(None, OutcomeKind.CONTINUE, INVALID_STATUS_FOR_TRANSITION)


def is_actionable_scan_status(status: str) -> bool:
    return status in (STATUS_DEACTIVATE, STATUS_REPROVISION)


def pre_poll_transition(status: str) -> Optional[str]:
    """Transition to request before the element write, if any."""
    if status == STATUS_DEACTIVATE:
        return DEACTIVATE_TO_DEACTIVATING
    return None


def decide_after_poll(status: str, converged: bool) -> Decision:
    if not converged:
        return Decision(None, OutcomeKind.ERROR, CONVERGENCE_TIMEOUT)
    if status == STATUS_DEACTIVATING:
        return Decision(DEACTIVATING_TO_COMPLETE, OutcomeKind.FINISH)
    if status == STATUS_REPROVISION:
        return Decision(COMPLETE_TO_READY, OutcomeKind.CONTINUE)
    return Decision(None, OutcomeKind.ERROR, UNEXPECTED_STATE)
