"""Step base class and the invocation wrapper."""

from __future__ import annotations

import abc
import logging
from typing import Optional

from ..config import TagStepsConfig, load_config
from ..contracts import OutcomeKind, StepOutcome
from ..errors import ScriptAbortedError
from ..gateway import ElementGateway
from ..persistence import InstanceRepository
from ..process import ProcessContext
from ..reporting import ErrorReporter, LoggingErrorReporter, Severity, make_log

logger = logging.getLogger(__name__)


class Step(metaclass=abc.ABCMeta):
    """One provisioning step invoked by the orchestrator."""

    name: str = "Step"
    # input parameter naming the service in diagnostics
    service_parameter: Optional[str] = None
    exception_severity: Severity = Severity.CRITICAL

    def __init__(
        self,
        repository: InstanceRepository,
        gateway: ElementGateway,
        config: Optional[TagStepsConfig] = None,
        reporter: Optional[ErrorReporter] = None,
    ) -> None:
        self.repository = repository
        self.gateway = gateway
        self.config = config or load_config()
        self.reporter = reporter or LoggingErrorReporter()

    @abc.abstractmethod
    def execute(self, context: ProcessContext) -> StepOutcome:
        """Run the step and return its outcome."""
        raise NotImplementedError

    def service_name(self, context: ProcessContext) -> str:
        if self.service_parameter is None:
            return self.name
        return str(context.try_get_parameter_value(self.service_parameter, self.name))


def report_outcome(context: ProcessContext, outcome: StepOutcome) -> None:
    """Send the orchestrator signal matching ``outcome``."""
    if outcome.kind == OutcomeKind.CONTINUE:
        context.return_success()
    elif outcome.kind == OutcomeKind.FINISH:
        context.send_finish()
    elif outcome.kind == OutcomeKind.ERROR:
        context.send_error()


def run_step(step: Step, context: ProcessContext) -> StepOutcome:
    """Execute ``step`` and report exactly one signal through ``context``.

    ``ScriptAbortedError`` means the orchestrator is already tearing the step
    down; it yields an ignorable outcome and no signal. Any other exception
    becomes an error outcome after its diagnostics are recorded.
    """
    logger.info(f"START {step.name}")
    try:
        outcome = step.execute(context)
    except ScriptAbortedError:
        logger.info(f"{step.name} aborted by the orchestrator")
        return StepOutcome.aborted()
    except Exception as e:
        service = step.service_name(context)
        logger.exception(f"An issue occurred while executing {step.name} activity for {service}: {e}")
        step.reporter.process_exception(
            e,
            make_log(
                step.name,
                service,
                step.exception_severity,
                description=f"Exception while processing {step.name}",
            ),
        )
        outcome = StepOutcome.error(str(e), error_kind=type(e).__name__)

    try:
        report_outcome(context, outcome)
    except ScriptAbortedError:
        logger.info(f"{step.name} aborted by the orchestrator")
        return StepOutcome.aborted()
    return outcome
