"""Orchestration context handed to a step invocation."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Mapping, Optional, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

ParamsT = TypeVar("ParamsT", bound=BaseModel)


class ProcessSignal(str, Enum):
    """Signals a step can send back to the orchestrator."""

    SUCCESS = "success"
    FINISH = "finish"
    ERROR = "error"


class ProcessContext:
    """Input parameters and the return channel of one step invocation.

    A step sends exactly one signal; sending a second one is a programming
    error and raises ``RuntimeError``.
    """

    def __init__(self, parameters: Optional[Mapping[str, Any]] = None, token_id: Optional[str] = None) -> None:
        self.parameters: Dict[str, Any] = dict(parameters or {})
        self.token_id = token_id
        self.signal: Optional[ProcessSignal] = None

    def get_parameter_value(self, name: str) -> Any:
        if name not in self.parameters:
            raise KeyError(f"Missing input parameter: {name}")
        return self.parameters[name]

    def try_get_parameter_value(self, name: str, default: Any = None) -> Any:
        return self.parameters.get(name, default)

    def parse_parameters(self, model: type[ParamsT]) -> ParamsT:
        """Validate all inputs against ``model`` (fields aliased to input names)."""
        return model.model_validate(self.parameters)

    def _send(self, signal: ProcessSignal) -> None:
        if self.signal is not None:
            raise RuntimeError(
                f"Signal {self.signal.value} already sent for token {self.token_id}"
            )
        self.signal = signal
        logger.info(f"Token {self.token_id}: {signal.value}")

    def return_success(self) -> None:
        self._send(ProcessSignal.SUCCESS)

    def send_finish(self) -> None:
        self._send(ProcessSignal.FINISH)

    def send_error(self) -> None:
        self._send(ProcessSignal.ERROR)
