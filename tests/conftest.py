"""Shared fakes for the Boya tests: clock, sleep, API, authenticator, HTTP session."""

from datetime import datetime, timedelta

import pytest
import requests

from boya.clock import SERVER_TZ, FixedClock
from boya.courses import Capacity, Course, CourseTime
from boya.store import Credentials, RunContext

T0 = datetime(2024, 3, 1, 19, 0, 0, tzinfo=SERVER_TZ)


def make_course(course_id=1, current=0, max_=5, open_in=10, close_in=3600):
    """Course whose selection window is [T0 + open_in, T0 + close_in) seconds."""
    return Course(
        id=course_id,
        name=f"Course {course_id}",
        position="Room 101",
        teacher="Teacher",
        capacity=Capacity(current=current, max=max_),
        time=CourseTime(
            course_start=T0 + timedelta(days=2),
            course_end=T0 + timedelta(days=2, hours=2),
            select_start=T0 + timedelta(seconds=open_in),
            select_end=T0 + timedelta(seconds=close_in),
        ),
    )


class FakeSleep:
    """Records sleeps and moves the clock forward by the slept amount."""

    def __init__(self, clock: FixedClock):
        self.clock = clock
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)
        self.clock.advance(seconds)


class FakeApi:
    def __init__(self, courses=(), query_error=None, select_error=None, drop_error=None):
        self.courses = list(courses)
        self.query_error = query_error
        self.select_error = select_error
        self.drop_error = drop_error
        self.calls = []

    def query_courses(self, token):
        self.calls.append(("query", token))
        if self.query_error:
            raise self.query_error
        return list(self.courses)

    def select_course(self, course_id, token):
        self.calls.append(("select", course_id, token))
        if self.select_error:
            raise self.select_error

    def drop_course(self, course_id, token):
        self.calls.append(("drop", course_id, token))
        if self.drop_error:
            raise self.drop_error


class FakeAuth:
    def __init__(self, token="fresh-token", sso_error=None, program_error=None):
        self.token = token
        self.sso_error = sso_error
        self.program_error = program_error
        self.calls = []

    def sso_login(self, username, password):
        self.calls.append(("sso", username, password))
        if self.sso_error:
            raise self.sso_error

    def program_login(self):
        self.calls.append(("program",))
        if self.program_error:
            raise self.program_error
        return self.token


class FakeResponse:
    def __init__(self, text="", url="", json_data=None, status_code=200, history=(), headers=None):
        self.text = text
        self.url = url
        self.status_code = status_code
        self.history = list(history)
        self.headers = headers or {}
        self._json = json_data

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Serves queued responses (or raises queued exceptions) in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def _next(self, method, url, kwargs):
        self.requests.append((method, url, kwargs))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, url, **kwargs):
        return self._next("GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, kwargs)


@pytest.fixture
def clock():
    return FixedClock(T0)


@pytest.fixture
def sleep(clock):
    return FakeSleep(clock)


@pytest.fixture
def ctx():
    return RunContext(credentials=Credentials(username="alice", password="secret", token="old-token"))
