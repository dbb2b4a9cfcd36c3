"""Instance store for tagsteps."""

from __future__ import annotations

import os
from typing import Optional

from ..config import TagStepsConfig, load_config
from .inmemory import InMemoryInstanceRepository
from .models import Instance, InstanceFilter, TransitionRecord
from .repository import InstanceRepository
from .sqlite import SQLiteInstanceRepository

_repository_instance: InstanceRepository | None = None


def get_repository(
    database_url: Optional[str] = None, config: Optional[TagStepsConfig] = None
) -> InstanceRepository:
    """Factory function to obtain an instance repository.

    The backend is selected based on ``database_url`` which can be provided
    explicitly, via environment variable ``TAGSTEPS_DATABASE_URL`` or
    ``DATABASE_URL``, or from loaded configuration. When no database is
    configured, an in-memory repository is returned.
    """

    global _repository_instance
    if _repository_instance is not None and database_url is None and config is None:
        return _repository_instance

    config = config or load_config()
    database_url = (
        database_url
        or os.getenv("TAGSTEPS_DATABASE_URL")
        or os.getenv("DATABASE_URL")
        or getattr(config, "database_url", None)
    )

    if not database_url:
        _repository_instance = InMemoryInstanceRepository()
        return _repository_instance

    if database_url.startswith("sqlite://"):
        path = database_url.replace("sqlite://", "", 1)
        _repository_instance = SQLiteInstanceRepository(path)
    else:
        raise ValueError(f"Unsupported database backend: {database_url}")

    return _repository_instance


__all__ = [
    "Instance",
    "InstanceFilter",
    "TransitionRecord",
    "InstanceRepository",
    "InMemoryInstanceRepository",
    "SQLiteInstanceRepository",
    "get_repository",
]
