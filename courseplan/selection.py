"""
Course plan selection helpers.

The selection is a plain set of course ids owned by the caller (CLI or
interactive session). Nothing here keeps a reference to it; every change
returns a new set.
"""

from __future__ import annotations

from typing import AbstractSet, Mapping

from courseplan.conflicts import courses_conflict, is_course_selectable
from courseplan.model import Course


def toggle_course(selected: AbstractSet[str], course_id: str) -> set[str]:
    """
    Remove `course_id` if present, add it otherwise.
    """
    out = set(selected)
    if course_id in out:
        out.remove(course_id)
    else:
        out.add(course_id)
    return out


def try_toggle_course(
    selected: AbstractSet[str],
    course_id: str,
    courses: Mapping[str, Course],
) -> tuple[set[str], bool]:
    """
    Toggle only if the course is selectable. Returns (new_selection, toggled).
    """
    if not is_course_selectable(course_id, courses, selected):
        return set(selected), False
    return toggle_course(selected, course_id), True


def blocking_courses(
    course_id: str,
    courses: Mapping[str, Course],
    selected: AbstractSet[str],
) -> list[str]:
    """
    Ids of selected courses that `course_id` conflicts with (sorted).
    """
    if course_id in selected:
        return []
    candidate = courses.get(course_id)
    if candidate is None:
        return []

    out: list[str] = []
    for sid in sorted(selected):
        other = courses.get(sid)
        if other is not None and courses_conflict(candidate, other):
            out.append(sid)
    return out


def plan_items(courses: Mapping[str, Course], selected: AbstractSet[str]) -> list[tuple[str, Course]]:
    return [(cid, courses[cid]) for cid in sorted(selected) if cid in courses]


def courses_for_term(courses: Mapping[str, Course], term: str) -> list[tuple[str, Course]]:
    return [(cid, c) for cid, c in sorted(courses.items()) if c.term == term]
