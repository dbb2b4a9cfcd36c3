"""tagsteps: status-transition and convergence-polling steps for TAG provisioning."""

from .config import TagStepsConfig, load_config
from .contracts import OutcomeKind, ScanRequest, StepOutcome
from .gateway import get_gateway
from .persistence import get_repository
from .process import ProcessContext, ProcessSignal
from .steps import DeactivateScannerStep, UpdateMonitoringStateStep, run_step
from .utils.retry import retry_until

__version__ = "0.1.0"
__all__ = [
    "TagStepsConfig",
    "load_config",
    "OutcomeKind",
    "ScanRequest",
    "StepOutcome",
    "get_gateway",
    "get_repository",
    "ProcessContext",
    "ProcessSignal",
    "DeactivateScannerStep",
    "UpdateMonitoringStateStep",
    "run_step",
    "retry_until",
]
