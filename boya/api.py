"""Boya program API: catalog query, course select and drop."""

import logging
from urllib.parse import urljoin

import requests

from config import API_BASE, HTTP_TIMEOUT, PAGE_SIZE
from boya.courses import Course, course_from_json
from boya.exceptions import QueryError, RejectedError, TransportError

log = logging.getLogger(__name__)

SUCCESS_STATUS = "0"


class BoyaApi:
    """Thin JSON client. One call = one HTTP exchange, never retried."""

    def __init__(self, session: requests.Session, base_url: str = API_BASE):
        self.session = session
        # urljoin drops the last path segment unless the base ends in "/"
        self.base_url = base_url.rstrip("/") + "/"

    def _call(self, endpoint: str, token: str, payload: dict):
        """POST payload to endpoint and return the response's data field.

        Raises TransportError when no well-formed answer comes back and
        RejectedError when the service answers with a failure status.
        """
        url = urljoin(self.base_url, endpoint)
        log.debug("POST %s %s", url, payload)
        try:
            resp = self.session.post(
                url,
                json=payload,
                headers={"auth_token": token},
                timeout=HTTP_TIMEOUT,
            )
            resp.raise_for_status()
            body = resp.json()
        except requests.RequestException as e:
            raise TransportError(f"{endpoint}: {e}") from e
        except ValueError as e:
            raise TransportError(f"{endpoint}: response is not JSON") from e

        if not isinstance(body, dict) or "status" not in body:
            raise TransportError(f"{endpoint}: malformed response")
        if str(body["status"]) != SUCCESS_STATUS:
            raise RejectedError(body.get("errmsg") or f"status {body['status']}")
        return body.get("data")

    def query_courses(self, token: str) -> list[Course]:
        """Fetch the current semester's catalog. Raises QueryError on any failure."""
        log.info("Querying courses...")
        try:
            data = self._call(
                "queryStudentSemesterCourseByPage",
                token,
                {"pageNumber": 1, "pageSize": PAGE_SIZE},
            )
        except (TransportError, RejectedError) as e:
            raise QueryError(f"Query failed: {e}") from e

        # Paged responses wrap the list in {"content": [...]}
        if isinstance(data, dict):
            items = data.get("content") or []
        else:
            items = data or []
        try:
            courses = [course_from_json(item) for item in items]
        except (KeyError, TypeError, ValueError) as e:
            raise QueryError(f"Query failed: unexpected course data ({e})") from e
        log.info("  %d courses in catalog.", len(courses))
        return courses

    def select_course(self, course_id: int, token: str) -> None:
        self._call("choseCourse", token, {"courseId": course_id})

    def drop_course(self, course_id: int, token: str) -> None:
        self._call("delChosenCourse", token, {"id": course_id})
