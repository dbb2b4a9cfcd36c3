from __future__ import annotations

import logging

from ..constants import STATUS_DEACTIVATING
from ..contracts import MonitoringParameters, StepOutcome, TagMonitoring
from ..controller import decide_monitoring
from ..errors import InstanceNotFoundError
from ..gateway import ColumnFilter
from ..process import ProcessContext
from ..reporting import Severity, make_log
from .base import Step

logger = logging.getLogger(__name__)


class UpdateMonitoringStateStep(Step):
    """Push the monitoring flag for a channel and advance its status."""

    name = "Update Monitoring State"
    service_parameter = "Channel Name"

    def execute(self, context: ProcessContext) -> StepOutcome:
        params = context.parse_parameters(MonitoringParameters)
        layout = self.config.layout

        instance = self.repository.read_by_id(params.instance_id)
        if instance is None:
            raise InstanceNotFoundError(params.instance_id)
        status = instance.status

        monitor_update = TagMonitoring.NO if status == STATUS_DEACTIVATING else TagMonitoring.YES

        element = self.gateway.get_element(params.tag_element)
        rows = element.query_table(
            layout.channel_status_table,
            [ColumnFilter(pid=layout.channel_match_column, value=params.channel_match)],
        )
        if rows:
            for row in rows:
                element.set_parameter_by_key(
                    layout.monitor_update_parameter, str(row[0]), int(monitor_update)
                )
        else:
            description = (
                f"No channels found in channel status with given name: "
                f"{params.channel_name} in Channel Status Table."
            )
            logger.warning(f"Did not find any channels with match: {params.channel_match}")
            self.reporter.generate_log(
                make_log(self.name, params.channel_name, Severity.WARNING, description, "ChannelNotFound")
            )

        decision = decide_monitoring(status)
        if decision.code is not None:
            logger.warning(
                f"Cannot execute the transition as the current status is unexpected. "
                f"Current status: {status}"
            )
            self.reporter.generate_log(
                make_log(
                    self.name,
                    params.channel_name,
                    Severity.WARNING,
                    f"Cannot execute the transition as the current status is unexpected. "
                    f"Current status: {status}",
                    decision.code,
                )
            )
        if decision.transition is not None:
            self.repository.request_transition(instance.id, decision.transition)

        logger.info(f"Successfully executed {self.name} for: {params.tag_element}")
        return StepOutcome(kind=decision.outcome)
