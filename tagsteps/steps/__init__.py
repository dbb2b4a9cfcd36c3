"""Provisioning steps."""

from __future__ import annotations

from .base import Step, report_outcome, run_step
from .monitoring import UpdateMonitoringStateStep
from .scanner import DeactivateScannerStep

STEPS: dict[str, type[Step]] = {
    "update-monitoring-state": UpdateMonitoringStateStep,
    "deactivate-scanner": DeactivateScannerStep,
}

__all__ = [
    "Step",
    "STEPS",
    "UpdateMonitoringStateStep",
    "DeactivateScannerStep",
    "report_outcome",
    "run_step",
]
