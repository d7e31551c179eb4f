"""
Central data model definitions used across the project.

This module defines the canonical structure of Course and Meeting objects so that:
- all modules share the same field names
- raw catalog values are coerced to strings in exactly one place
- the conflict engine never has to deal with None or non-string fields
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Mapping


# Terms offered by the catalog; other strings are still accepted
TERMS = ("Fall", "Winter", "Spring", "Summer")


def _as_text(value: Any) -> str:
    # Missing values become "" (never None), so "empty means no meeting" holds
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Course:
    """
    Represents one course offering as stored in the catalog.
    """

    term: str
    number: str
    title: str
    meets: str = ""

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "Course":
        """
        Build a Course from an untyped record (JSON, remote store, form data).
        """
        return cls(
            term=_as_text(raw.get("term")),
            number=_as_text(raw.get("number")),
            title=_as_text(raw.get("title")),
            meets=_as_text(raw.get("meets")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "term": self.term,
            "number": self.number,
            "meets": self.meets,
            "title": self.title,
        }


@dataclass(frozen=True)
class Meeting:
    """
    One weekly recurring meeting, derived from a Course.meets string.

    start/end are minutes since midnight and describe the half-open
    interval [start, end).
    """

    days: FrozenSet[str]
    start: int
    end: int
