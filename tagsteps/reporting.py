"""Structured error records for step diagnostics."""

from __future__ import annotations

import logging
import traceback
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    WARNING = "warning"
    MAJOR = "major"
    CRITICAL = "critical"


class ConfigurationType(str, Enum):
    AUTOMATION = "automation"


class ErrorCode(BaseModel):
    configuration_item: str
    configuration_type: ConfigurationType = ConfigurationType.AUTOMATION
    severity: Severity = Severity.WARNING
    source: str
    code: Optional[str] = None
    description: Optional[str] = None


class ErrorLog(BaseModel):
    """One diagnostic record about a step invocation."""

    affected_item: str
    affected_service: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    error_code: ErrorCode
    exception: Optional[str] = None


def make_log(
    step_name: str,
    service: str,
    severity: Severity,
    description: Optional[str] = None,
    code: Optional[str] = None,
) -> ErrorLog:
    return ErrorLog(
        affected_item=step_name,
        affected_service=service,
        error_code=ErrorCode(
            configuration_item=service,
            severity=severity,
            source=step_name,
            code=code,
            description=description,
        ),
    )


class ErrorReporter(Protocol):
    """Sink for :class:`ErrorLog` records."""

    def generate_log(self, log: ErrorLog) -> None:
        """Record a diagnostic."""

    def process_exception(self, exc: BaseException, log: ErrorLog) -> None:
        """Record a diagnostic caused by ``exc``."""


class LoggingErrorReporter:
    """Emit records through the standard logging module."""

    def generate_log(self, log: ErrorLog) -> None:
        level = logging.WARNING if log.error_code.severity == Severity.WARNING else logging.ERROR
        logger.log(level, f"{log.affected_item} [{log.affected_service}]: {log.model_dump_json()}")

    def process_exception(self, exc: BaseException, log: ErrorLog) -> None:
        self.generate_log(
            log.model_copy(
                update={"exception": "".join(traceback.format_exception(exc)).strip()}
            )
        )


class InMemoryErrorReporter:
    """Collect records for inspection in tests."""

    def __init__(self) -> None:
        self.logs: list[ErrorLog] = []

    def generate_log(self, log: ErrorLog) -> None:
        self.logs.append(log)

    def process_exception(self, exc: BaseException, log: ErrorLog) -> None:
        self.logs.append(log.model_copy(update={"exception": repr(exc)}))

    def codes(self) -> list[Optional[str]]:
        return [log.error_code.code for log in self.logs]
