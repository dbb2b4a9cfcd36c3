from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Callable, Union

from ..constants import DEFAULT_RETRY_DELAY

logger = logging.getLogger(__name__)

Probe = Callable[[], bool]


def _as_seconds(value: Union[float, timedelta]) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def retry_until(
    probe: Probe,
    timeout: Union[float, timedelta],
    delay: Union[float, timedelta] = DEFAULT_RETRY_DELAY,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> bool:
    """Call ``probe`` until it returns ``True`` or ``timeout`` elapses.

    The probe runs immediately. After each falsy result the call blocks for
    ``delay`` and tries again as long as the elapsed time since the first
    attempt is still within ``timeout``. Exceptions raised by the probe are
    not caught.

    Returns:
        ``True`` if one of the attempts succeeded, ``False`` otherwise.
    """
    timeout_s = _as_seconds(timeout)
    delay_s = _as_seconds(delay)
    start = clock()
    attempt = 0

    while True:
        attempt += 1
        if probe():
            return True
        logger.debug(f"Probe attempt {attempt} not converged, retrying in {delay_s}s")
        sleep(delay_s)
        if clock() - start > timeout_s:
            logger.debug(f"Probe did not converge within {timeout_s}s after {attempt} attempts")
            return False
