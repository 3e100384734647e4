"""Course offerings: model, parsing from the catalog API, filtering, table output."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from boya.clock import SERVER_TZ
from config import TIME_FORMAT


@dataclass(frozen=True)
class Capacity:
    current: int
    max: int


@dataclass(frozen=True)
class CourseTime:
    course_start: datetime
    course_end: datetime
    select_start: datetime
    select_end: datetime


@dataclass(frozen=True)
class Course:
    id: int
    name: str
    position: str
    teacher: str
    capacity: Capacity
    time: CourseTime


def parse_time(value: str) -> datetime:
    """Parse a server timestamp ("2024-03-01 19:00:00") as server-local time."""
    return datetime.strptime(value, TIME_FORMAT).replace(tzinfo=SERVER_TZ)


def course_from_json(item: dict) -> Course:
    """Build a Course from one catalog entry. Raises KeyError/ValueError/TypeError on bad data."""
    return Course(
        id=int(item["id"]),
        name=item.get("courseName") or "",
        position=item.get("coursePosition") or "",
        teacher=item.get("courseTeacher") or "",
        capacity=Capacity(
            current=int(item["courseCurrentCount"]),
            max=int(item["courseMaxCount"]),
        ),
        time=CourseTime(
            course_start=parse_time(item["courseStartDate"]),
            course_end=parse_time(item["courseEndDate"]),
            select_start=parse_time(item["courseSelectStartDate"]),
            select_end=parse_time(item["courseSelectEndDate"]),
        ),
    )


def is_selectable(course: Course, now: datetime) -> bool:
    return course.capacity.current < course.capacity.max and now < course.time.select_end


def selectable(courses: Iterable[Course], now: datetime, include_all: bool = False) -> list[Course]:
    """Courses that can still be picked: seats left and selection not closed.

    With include_all the full catalog comes back as is. Order is preserved.
    """
    if include_all:
        return list(courses)
    return [c for c in courses if is_selectable(c, now)]


def find_course(courses: Iterable[Course], course_id: int) -> Course | None:
    for course in courses:
        if course.id == course_id:
            return course
    return None


def format_table(courses: list[Course]) -> str:
    """Render courses as a fixed-width text table."""
    header = f"{'ID':>6}  {'Name':<30}  {'Position':<20}  {'Teacher':<12}  {'Seats':>7}  {'Course time':<33}  {'Selection':<33}"
    lines = [header, "-" * len(header)]
    for c in courses:
        seats = f"{c.capacity.current}/{c.capacity.max}"
        course_time = f"{c.time.course_start:%m-%d %H:%M} - {c.time.course_end:%m-%d %H:%M}"
        select_time = f"{c.time.select_start:%m-%d %H:%M} - {c.time.select_end:%m-%d %H:%M}"
        lines.append(
            f"{c.id:>6}  {c.name[:30]:<30}  {c.position[:20]:<20}  {c.teacher[:12]:<12}  {seats:>7}  {course_time:<33}  {select_time:<33}"
        )
    if not courses:
        lines.append("  (no courses)")
    return "\n".join(lines)
