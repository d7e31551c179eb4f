"""
Course catalog source.

- Downloads the course feed (JSON) and normalizes it into {course_id: Course}
- Caches the normalized catalog in data/courses.json
- Applies edits to a catalog without mutating the original mapping

The cached file uses the same shape as the feed:

    {"CS213": {"term": "Fall", "number": "213", "meets": "MWF 9:00-9:50", "title": "..."}}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

import requests

from courseplan.errors import CatalogError
from courseplan.model import Course


log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def _list_item_id(item: Mapping[str, Any], index: int) -> str:
    """
    Id for a course given as a list item: explicit "id", otherwise
    first letter of the term + course number (e.g. "F213").
    """
    if item.get("id") is not None:
        return str(item["id"])
    term = str(item.get("term") or "")
    prefix = term[0] if term else "X"
    number = item.get("number")
    return f"{prefix}{number if number is not None else index}"


def normalize_catalog(data: Any) -> Dict[str, Course]:
    """
    Accept either {"courses": {...}}, a plain {id: record} mapping or a list
    of records, and return {course_id: Course}.
    """
    if isinstance(data, dict) and "courses" in data:
        data = data["courses"]

    courses: Dict[str, Course] = {}

    if isinstance(data, list):
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                log.warning("Skipping catalog item %d: not an object", i)
                continue
            courses[_list_item_id(item, i)] = Course.from_raw(item)
        return courses

    if isinstance(data, dict):
        for cid, item in data.items():
            if not isinstance(item, dict):
                log.warning("Skipping catalog entry %r: not an object", cid)
                continue
            courses[str(cid)] = Course.from_raw(item)
        return courses

    raise CatalogError("Unexpected data shape")


# ---------------------------------------------------------------------------
# Remote feed
# ---------------------------------------------------------------------------


def fetch_catalog(url: str, timeout: float = 30) -> Dict[str, Course]:
    """
    Download the course feed and normalize it.
    Raises requests.RequestException on HTTP/network errors.
    """
    log.info("Fetching catalog from %s", url)
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()

    try:
        data = resp.json()
    except ValueError as e:
        raise CatalogError(f"Catalog response is not JSON: {e}") from e

    courses = normalize_catalog(data)
    log.info("Fetched %d courses", len(courses))
    return courses


# ---------------------------------------------------------------------------
# Local cache
# ---------------------------------------------------------------------------


def load_catalog(path: str | Path) -> Dict[str, Course]:
    """
    Load the cached catalog.

    Returns {} if the file does not exist or is invalid, so commands
    can still run before the first fetch.
    """
    catalog_path = Path(path)
    if not catalog_path.exists():
        return {}

    try:
        data = json.loads(catalog_path.read_text(encoding="utf-8"))
        return normalize_catalog(data)
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, CatalogError) as e:
        log.warning("Ignoring unreadable catalog %s: %s", catalog_path, e)
        return {}


def save_catalog(courses: Mapping[str, Course], path: str | Path) -> None:
    """
    Write the catalog as JSON. Creates parent directories if needed.
    """
    catalog_path = Path(path)
    catalog_path.parent.mkdir(parents=True, exist_ok=True)

    payload = {cid: courses[cid].to_dict() for cid in sorted(courses)}
    catalog_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


# ---------------------------------------------------------------------------
# Edits
# ---------------------------------------------------------------------------


def update_course(
    courses: Mapping[str, Course],
    course_id: str,
    patch: Mapping[str, Any],
) -> Dict[str, Course]:
    """
    Return a new catalog where `course_id` has `patch` merged in.
    Unknown ids leave the catalog unchanged.
    """
    out = dict(courses)
    current = out.get(course_id)
    if current is None:
        return out

    merged = current.to_dict()
    merged.update({k: v for k, v in patch.items() if k in merged})
    out[course_id] = Course.from_raw(merged)
    return out
