"""Single-shot select / drop, classified into an outcome."""

import logging
from dataclasses import dataclass
from enum import Enum

from boya.exceptions import RejectedError, TransportError

log = logging.getLogger(__name__)


class OutcomeKind(Enum):
    SUCCEEDED = "succeeded"
    REJECTED = "rejected"
    TRANSPORT_FAILED = "transport_failed"


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCEEDED


def _attempt(action: str, call, course_id: int, token: str) -> Outcome:
    try:
        call(course_id, token)
    except RejectedError as e:
        log.warning("  %s %d rejected: %s", action, course_id, e)
        return Outcome(OutcomeKind.REJECTED, str(e))
    except TransportError as e:
        log.warning("  %s %d failed: %s", action, course_id, e)
        return Outcome(OutcomeKind.TRANSPORT_FAILED, str(e))
    log.info("  %s %d successful!", action, course_id)
    return Outcome(OutcomeKind.SUCCEEDED)


def select(api, course_id: int, token: str) -> Outcome:
    """Try to reserve course_id exactly once."""
    log.info("Selecting course %d...", course_id)
    return _attempt("Select", api.select_course, course_id, token)


def drop(api, course_id: int, token: str) -> Outcome:
    """Try to cancel the reservation for course_id exactly once."""
    log.info("Dropping course %d...", course_id)
    return _attempt("Drop", api.drop_course, course_id, token)
