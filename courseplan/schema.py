"""
Strict validation for editing course records.

The conflict engine is lenient (bad meeting strings simply never conflict).
Data entry is not: an edit is only saved if every field is well-formed.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from courseplan.model import TERMS, Course


# Day tokens, two-letter tokens first so Tu/Th don't collide
_DAY_TOKEN = r"(?:Tu|Th|Sa|Su|M|W|F)"
_HHMM = r"(?:[01]?[0-9]|2[0-3]):[0-5][0-9]"

# "MWF 09:00-09:50" or "TuTh 14:00-15:20"
MEETING_RE = re.compile(rf"^{_DAY_TOKEN}+\s+({_HHMM})-({_HHMM})$")
NUMBER_RE = re.compile(r"^[0-9]+(?:-[0-9]+)?$")


def _minutes(hhmm: str) -> int:
    h, m = hhmm.split(":")
    return int(h) * 60 + int(m)


class CourseForm(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    title: str
    term: str
    number: str
    meets: str = ""

    @field_validator("title")
    @classmethod
    def _check_title(cls, v: str) -> str:
        if len(v) < 2:
            raise ValueError("Title must be at least 2 characters")
        return v

    @field_validator("term")
    @classmethod
    def _check_term(cls, v: str) -> str:
        if v not in TERMS:
            raise ValueError("Term must be Fall, Winter, Spring, or Summer")
        return v

    @field_validator("number")
    @classmethod
    def _check_number(cls, v: str) -> str:
        if not NUMBER_RE.match(v):
            raise ValueError('Number must be digits with optional section, e.g., "213" or "213-2"')
        return v

    @field_validator("meets")
    @classmethod
    def _check_meets(cls, v: str) -> str:
        if v == "":
            return v
        m = MEETING_RE.match(v)
        if not m:
            raise ValueError(
                'Must be empty or like "MWF 12:00-13:20" or "TuTh 14:00-15:20" (one or more days + start-end)'
            )
        if not _minutes(m.group(1)) < _minutes(m.group(2)):
            raise ValueError("Start time must be earlier than end time")
        return v

    def to_course(self) -> Course:
        return Course(term=self.term, number=self.number, title=self.title, meets=self.meets)


def validate_course(data: Mapping[str, Any]) -> CourseForm:
    """
    Validate raw form data. Raises pydantic.ValidationError.
    """
    return CourseForm.model_validate(dict(data))


def form_errors(data: Mapping[str, Any]) -> Dict[str, List[str]]:
    """
    Field name -> error messages. Empty dict when the data is valid.
    """
    try:
        validate_course(data)
    except ValidationError as e:
        errors: Dict[str, List[str]] = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "__all__"
            msg = err["msg"]
            # pydantic prefixes messages from validators with "Value error, "
            if msg.startswith("Value error, "):
                msg = msg[len("Value error, "):]
            errors.setdefault(field, []).append(msg)
        return errors
    return {}


def is_changed(course: Course, form: CourseForm) -> bool:
    """
    True if the form differs from the stored course (ignoring surrounding spaces).
    """
    before = {k: v.strip() for k, v in course.to_dict().items()}
    after = {k: v.strip() for k, v in form.to_course().to_dict().items()}
    return before != after
