"""
Conflict detection.

Parses meeting strings like "MWF 9:00-9:50" or "TuTh 14:00-15:20" and decides
whether two courses can share a weekly schedule.

Overlap rule (half-open intervals):
    start < other_end AND other_start < end

Malformed meeting strings never raise; they parse to None, which means
"no fixed meeting" and therefore never conflicts with anything.
"""

from __future__ import annotations

import re
from typing import AbstractSet, Any, Mapping, Optional

from courseplan.model import Course, Meeting


# Two-letter tokens come first so "TuTh" is not read as T-u-T-h
_DAY_TOKEN = re.compile(r"Tu|Th|Sa|Su|M|W|F")
_HHMM = re.compile(r"([0-9]{1,2}):([0-9]{2})")


def parse_days(day_str: str) -> frozenset[str]:
    """
    Turn "MWF" or "TuTh" into {"M", "W", "F"} or {"Tu", "Th"}.
    Unknown characters are dropped.
    """
    return frozenset(_DAY_TOKEN.findall(day_str))


def parse_hhmm(hhmm: str) -> Optional[int]:
    """
    Convert 'H:MM' or 'HH:MM' (24h) to minutes since midnight.
    Returns None for invalid formats.
    """
    m = _HHMM.fullmatch(hhmm)
    if not m:
        return None
    h = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= h <= 23 and 0 <= mm <= 59):
        return None
    return h * 60 + mm


def parse_meeting(meets: Any) -> Optional[Meeting]:
    """
    Parse "MWF 9:00-9:50" into a Meeting. Empty or malformed input -> None.
    """
    if not isinstance(meets, str) or not meets.strip():
        return None

    parts = meets.split()
    if len(parts) < 2:
        return None
    day_str, time_str = parts[0], parts[1]

    days = parse_days(day_str)

    bounds = time_str.split("-")
    if len(bounds) < 2 or not bounds[0] or not bounds[1]:
        return None

    start = parse_hhmm(bounds[0])
    end = parse_hhmm(bounds[1])
    # zero-length and inverted ranges count as "no meeting"
    if start is None or end is None or not start < end:
        return None

    return Meeting(days=days, start=start, end=end)


def days_overlap(a: AbstractSet[str], b: AbstractSet[str]) -> bool:
    return any(d in b for d in a)


def times_overlap(a: Meeting, b: Meeting) -> bool:
    # end == start of the other is NOT an overlap
    return a.start < b.end and b.start < a.end


def same_term(a: Course, b: Course) -> bool:
    return a.term == b.term


def courses_conflict(a: Course, b: Course) -> bool:
    """
    True if both courses are in the same term and their meetings share a day
    and overlap in time. Courses without a parsable meeting never conflict.
    """
    if not same_term(a, b):
        return False

    am = parse_meeting(a.meets)
    bm = parse_meeting(b.meets)
    if am is None or bm is None:
        return False

    return days_overlap(am.days, bm.days) and times_overlap(am, bm)


def is_course_selectable(
    course_id: str,
    courses: Mapping[str, Course],
    selected: AbstractSet[str],
) -> bool:
    """
    Can `course_id` be added to `selected` without a conflict?

    A course that is already selected is always selectable, so it can
    always be toggled off again.
    """
    if course_id in selected:
        return True

    candidate = courses.get(course_id)
    if candidate is None:
        return False

    for sid in selected:
        other = courses.get(sid)
        if other is not None and courses_conflict(candidate, other):
            return False
    return True
