from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

from ..config import TagStepsConfig
from ..contracts import OutcomeKind, ScannerParameters, StepOutcome
from ..controller import (
    CONVERGENCE_TIMEOUT,
    decide_after_poll,
    is_actionable_scan_status,
    pre_poll_transition,
)
from ..convergence import build_scan_deletion_probe, child_transition
from ..errors import InstanceNotFoundError
from ..gateway import ElementGateway
from ..persistence import Instance, InstanceRepository
from ..process import ProcessContext
from ..reporting import ErrorReporter, Severity, make_log
from ..scans import build_scan_requests, build_tag_payload
from ..utils.retry import retry_until
from .base import Step

logger = logging.getLogger(__name__)


class DeactivateScannerStep(Step):
    """Remove a scan from the TAG element and wait until it is gone."""

    name = "Deactivate Scanner"
    service_parameter = "Scan Name (TAG Scan)"
    exception_severity = Severity.MAJOR

    def __init__(
        self,
        repository: InstanceRepository,
        gateway: ElementGateway,
        config: Optional[TagStepsConfig] = None,
        reporter: Optional[ErrorReporter] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(repository, gateway, config, reporter)
        self._sleep = sleep
        self._clock = clock

    def _read(self, instance_id: str) -> Instance:
        instance = self.repository.read_by_id(instance_id)
        if instance is None:
            raise InstanceNotFoundError(instance_id)
        return instance

    def _transition_channels(self, channel_ids: Sequence[str], status: str) -> None:
        transition = child_transition(status)
        for channel_id in channel_ids:
            channel = self._read(channel_id)
            self.repository.request_transition(channel.id, transition)

    def execute(self, context: ProcessContext) -> StepOutcome:
        scanner = context.parse_parameters(ScannerParameters)
        layout = self.config.layout

        instance = self.repository.read_by_id(scanner.instance_id)
        if instance is None:
            logger.info(f"No TAG Scan Instance found with instanceId: {scanner.instance_id}")
            return StepOutcome.proceed()

        if not is_actionable_scan_status(instance.status):
            return StepOutcome.proceed()

        transition = pre_poll_transition(instance.status)
        if transition is not None:
            self.repository.request_transition(instance.id, transition)
            # the store may normalize or reject the transition
            instance = self._read(instance.id)
        status = instance.status

        element = self.gateway.get_element(scanner.tag_element)
        scan_requests = build_scan_requests(instance, scanner)
        element.set_parameter(
            layout.scan_request_parameter, build_tag_payload(scanner.tag_device, scan_requests)
        )

        self._transition_channels(scanner.channels, status)

        probe = build_scan_deletion_probe(
            element,
            self.repository,
            scan_requests,
            scanner.channels,
            status,
            table_id=layout.scan_channels_table,
            title_column=layout.scan_title_column,
        )
        converged = retry_until(
            probe,
            self.config.retry.scanner_timeout,
            self.config.retry.delay,
            sleep=self._sleep,
            clock=self._clock,
        )
        if converged:
            logger.info(f"Scanner {scanner.scan_name} Deactivated")

        decision = decide_after_poll(status, converged)
        if decision.transition is not None:
            self.repository.request_transition(instance.id, decision.transition)

        if decision.outcome != OutcomeKind.ERROR:
            return StepOutcome(kind=decision.outcome)

        if decision.code == CONVERGENCE_TIMEOUT:
            detail = "Failed to deactivate the scanners within the timeout time."
            logger.warning("Failed to verify the scan was deleted in time")
            self.reporter.generate_log(
                make_log(self.name, scanner.scan_name, Severity.WARNING, detail, decision.code)
            )
        else:
            # TODO: confirm with the scan process owners whether this path needs an error record
            detail = f"Failed to execute transition status. Current status: {status}"
        return StepOutcome.error(detail, decision.code)
