"""Selection orchestrator: query, choose, wait for the window, renew, select once."""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from boya import selection
from boya.clock import Clock
from boya.courses import Course, find_course, selectable
from boya.exceptions import AuthError, BoyaError, QueryError, ValidationError
from boya.gate import wait_until
from boya.selection import Outcome
from boya.store import RunContext

log = logging.getLogger(__name__)


class RunState(Enum):
    IDLE = "idle"
    AUTHENTICATED = "authenticated"
    FILTERING = "filtering"
    AWAITING_CHOICE = "awaiting_choice"
    WAITING = "waiting"
    RENEWING = "renewing"
    EXECUTING = "executing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunResult:
    state: RunState = RunState.IDLE
    history: list[RunState] = field(default_factory=lambda: [RunState.IDLE])
    course: Course | None = None
    outcome: Outcome | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.state is RunState.DONE

    def enter(self, state: RunState) -> None:
        if state in self.history:
            raise RuntimeError(f"State {state.value} entered twice")
        log.debug("%s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def fail(self, error: BoyaError | str) -> "RunResult":
        self.error = str(error)
        self.enter(RunState.FAILED)
        return self

    def finish(self, outcome: Outcome) -> "RunResult":
        self.outcome = outcome
        if outcome.ok:
            self.enter(RunState.DONE)
        else:
            self.error = outcome.reason
            self.enter(RunState.FAILED)
        return self


def needs_renewal(waited: float) -> bool:
    """A token that sat through a wait may have expired server-side: renew it."""
    return waited > 0


def parse_choice(raw: str, courses: list[Course]) -> Course:
    """Turn the user's typed id into one of the offered courses."""
    try:
        course_id = int(raw.strip())
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid ID: {raw!r}")
    course = find_course(courses, course_id)
    if course is None:
        raise ValidationError(f"Course {course_id} is not in the list.")
    return course


def login(ctx: RunContext, auth) -> RunResult:
    """SSO login followed by program login; stores the fresh token on ctx."""
    result = RunResult()
    creds = ctx.credentials
    try:
        auth.sso_login(creds.username, creds.password)
        creds.token = auth.program_login()
    except AuthError as e:
        log.error("Login failed: %s", e)
        return result.fail(e)
    result.enter(RunState.AUTHENTICATED)
    result.enter(RunState.DONE)
    return result


def _authenticated(ctx: RunContext, result: RunResult) -> bool:
    if not ctx.credentials.token:
        result.fail(AuthError("No token stored. Run `login` first."))
        return False
    result.enter(RunState.AUTHENTICATED)
    return True


def run_selection(ctx: RunContext, api, auth, choose: Callable[[list[Course]], str], clock: Clock,
                  include_all: bool = False, sleep: Callable[[float], None] = time.sleep) -> RunResult:
    """Run one scheduled selection.

    Fetches the catalog, filters it, lets `choose` pick a course id, waits
    for that course's selection window to open, renews the token if a wait
    happened, then selects exactly once. Every failure ends the run; nothing
    is retried. KeyboardInterrupt during the wait propagates unhandled.
    """
    result = RunResult()
    if not _authenticated(ctx, result):
        return result

    result.enter(RunState.FILTERING)
    try:
        catalog = api.query_courses(ctx.credentials.token)
    except QueryError as e:
        log.error("%s Consider login again.", e)
        return result.fail(f"{e} Consider login again.")
    courses = selectable(catalog, clock.now(), include_all=include_all)
    log.info("%d of %d courses shown.", len(courses), len(catalog))

    result.enter(RunState.AWAITING_CHOICE)
    try:
        course = parse_choice(choose(courses), courses)
    except ValidationError as e:
        log.error("%s", e)
        return result.fail(e)
    result.course = course

    waited = 0
    if course.time.select_start > clock.now():
        result.enter(RunState.WAITING)
        waited = wait_until(course.time.select_start, clock, sleep=sleep)

    if needs_renewal(waited):
        result.enter(RunState.RENEWING)
        try:
            ctx.credentials.token = auth.program_login()
        except AuthError as e:
            log.error("Token renewal failed: %s", e)
            return result.fail(e)

    result.enter(RunState.EXECUTING)
    return result.finish(selection.select(api, course.id, ctx.credentials.token))


def run_drop(ctx: RunContext, api, course_id: int) -> RunResult:
    """Cancel one reservation with the stored token."""
    result = RunResult()
    if not _authenticated(ctx, result):
        return result
    result.enter(RunState.EXECUTING)
    return result.finish(selection.drop(api, course_id, ctx.credentials.token))
