"""Element gateway factory and initialization."""

from __future__ import annotations

import os
from typing import Optional

from ..config import TagStepsConfig, load_config
from .base import ColumnFilter, ElementGateway, ManagedElement
from .inmemory import InMemoryElement, InMemoryGateway

_gateway_instance: ElementGateway | None = None


def get_gateway(
    backend: Optional[str] = None, config: Optional[TagStepsConfig] = None
) -> ElementGateway:
    """Factory function to get the configured element gateway.

    The in-memory gateway is shared per process so elements registered by one
    caller are visible to the next.
    """

    global _gateway_instance
    config = config or load_config()
    backend = (
        backend
        or os.getenv("TAGSTEPS_GATEWAY")
        or config.gateway.backend
    ).lower()

    if backend == "inmemory":
        if not isinstance(_gateway_instance, InMemoryGateway):
            _gateway_instance = InMemoryGateway()
        return _gateway_instance
    elif backend == "http":
        from .http import HttpGateway

        http_conf = config.gateway.http
        return HttpGateway(
            base_url=http_conf.base_url,
            timeout=http_conf.timeout,
            token=http_conf.token,
        )
    else:
        raise ValueError(f"Unsupported gateway backend: {backend}")


__all__ = [
    "ColumnFilter",
    "ElementGateway",
    "ManagedElement",
    "InMemoryElement",
    "InMemoryGateway",
    "get_gateway",
]
