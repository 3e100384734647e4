"""Deadline gate: block until a selection window opens."""

import logging
import math
import time
from datetime import datetime
from typing import Callable

from boya.clock import Clock

log = logging.getLogger(__name__)

SAFETY_MARGIN = 1  # seconds added on top of the rounded-up delta


def seconds_until(target: datetime, clock: Clock) -> float:
    """Signed seconds from now until target, read fresh from the clock."""
    return (target - clock.now()).total_seconds()


def wait_until(target: datetime, clock: Clock,
               sleep: Callable[[float], None] = time.sleep) -> int:
    """Suspend until target has passed. Returns the whole seconds slept.

    A target at or before now returns 0 without sleeping. Otherwise the
    delta is rounded up and padded by SAFETY_MARGIN so we resume at or after
    target even with a coarse timer. KeyboardInterrupt is not caught here:
    an interrupted wait must end the run without acting.
    """
    delta = seconds_until(target, clock)
    if delta <= 0:
        log.debug("Target %s already passed (%.3fs ago), not waiting.", target, -delta)
        return 0

    seconds = math.ceil(delta) + SAFETY_MARGIN
    log.info("Waiting for %d seconds (until %s)...", seconds, target.strftime("%Y-%m-%d %H:%M:%S"))
    sleep(seconds)
    return seconds
