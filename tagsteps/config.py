from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field

from .constants import (
    CHANNEL_MATCH_COLUMN,
    CHANNEL_STATUS_TABLE,
    DEFAULT_RETRY_DELAY,
    DEFAULT_SCANNER_TIMEOUT,
    MONITOR_UPDATE_PARAMETER,
    SCAN_CHANNELS_TABLE,
    SCAN_REQUEST_PARAMETER,
    SCAN_TITLE_COLUMN_INDEX,
)


class RetryConfig(BaseModel):
    """Convergence polling settings (seconds)."""

    delay: float = DEFAULT_RETRY_DELAY
    scanner_timeout: float = DEFAULT_SCANNER_TIMEOUT


class ElementLayout(BaseModel):
    """Table, column and parameter ids on the TAG element."""

    channel_status_table: int = CHANNEL_STATUS_TABLE
    channel_match_column: int = CHANNEL_MATCH_COLUMN
    monitor_update_parameter: int = MONITOR_UPDATE_PARAMETER
    scan_channels_table: int = SCAN_CHANNELS_TABLE
    scan_title_column: int = SCAN_TITLE_COLUMN_INDEX
    scan_request_parameter: int = SCAN_REQUEST_PARAMETER


class HttpGatewayConfig(BaseModel):
    """Configuration for the HTTP element gateway."""

    base_url: str = "http://localhost:8080/api"
    timeout: float = 30.0
    token: Optional[str] = None


class GatewayConfig(BaseModel):
    """Managed-element gateway settings."""

    backend: Literal["inmemory", "http"] = "inmemory"
    http: HttpGatewayConfig = Field(default_factory=HttpGatewayConfig)


class TagStepsConfig(BaseModel):
    """Top-level configuration model."""

    retry: RetryConfig = Field(default_factory=RetryConfig)
    layout: ElementLayout = Field(default_factory=ElementLayout)
    gateway: GatewayConfig = Field(default_factory=GatewayConfig)
    database_url: Optional[str] = None
    log_level: str = "INFO"


def load_config(path: Optional[str] = None) -> TagStepsConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to TAGSTEPS_CONFIG env
            variable or 'config.yaml' in the current directory.
    """

    config_path = path or os.getenv("TAGSTEPS_CONFIG", "config.yaml")
    if os.path.exists(config_path):
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        config = TagStepsConfig(**data)
    else:
        config = TagStepsConfig()

    env_db_url = os.getenv("TAGSTEPS_DATABASE_URL") or os.getenv("DATABASE_URL")
    if env_db_url:
        config.database_url = env_db_url
    env_gateway = os.getenv("TAGSTEPS_GATEWAY")
    if env_gateway:
        config.gateway.backend = env_gateway.lower()
    return config
