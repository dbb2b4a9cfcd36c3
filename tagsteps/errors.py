"""Exception hierarchy for tagsteps."""

from __future__ import annotations


class TagStepsError(Exception):
    """Base class for all tagsteps failures."""


class NotFoundError(TagStepsError):
    """An expected instance, element or row is absent."""


class InstanceNotFoundError(NotFoundError):
    def __init__(self, instance_id: str) -> None:
        super().__init__(f"No instance found with id: {instance_id}")
        self.instance_id = instance_id


class ElementNotFoundError(NotFoundError):
    def __init__(self, element_name: str) -> None:
        super().__init__(f"No element found with name: {element_name}")
        self.element_name = element_name


class InvalidTransitionError(TagStepsError):
    """A transition was requested that is not valid for the current status."""

    def __init__(self, instance_id: str, transition: str, status: str) -> None:
        super().__init__(
            f"Transition '{transition}' is not valid for instance {instance_id} "
            f"in status '{status}'"
        )
        self.instance_id = instance_id
        self.transition = transition
        self.status = status


class ConvergenceTimeoutError(TagStepsError):
    """The element or child instances did not converge within the timeout."""


class UnexpectedStateError(TagStepsError):
    """Polling succeeded from a status with no defined follow-up."""


class GatewayError(TagStepsError):
    """The managed-element gateway rejected or failed a request."""


class ScriptAbortedError(TagStepsError):
    """Raised by the orchestration layer when it tears down a running step.

    Steps treat it as a normal early exit, not as a failure.
    """
