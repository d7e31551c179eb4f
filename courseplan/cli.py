"""
CLI (Command Line Interface).

Quick terminal commands for browsing the catalog and checking a plan, e.g.:

    courseplan fetch
    courseplan list --term Winter
    courseplan check CS213 --selected CS211 CS214
    courseplan conflicts --selected CS211 CS213 CS214
    courseplan validate
    courseplan edit CS213 --meets "TuTh 14:00-15:20"
    courseplan interactive

Note:
- The interactive UI lives in courseplan/interactive.py
- The plan (selected ids) is passed on the command line, it is not stored
"""

from __future__ import annotations

import argparse
import logging
from typing import Mapping

import requests

from courseplan.catalog import fetch_catalog, load_catalog, save_catalog, update_course
from courseplan.config import Settings, get_settings
from courseplan.conflicts import courses_conflict, is_course_selectable
from courseplan.errors import CatalogError
from courseplan.logging_config import setup_logging
from courseplan.model import Course
from courseplan.schema import form_errors, is_changed, validate_course
from courseplan.selection import blocking_courses, courses_for_term


log = logging.getLogger(__name__)


def _clean_ids(ids: list[str] | None) -> list[str]:
    return [x.strip() for x in (ids or []) if x and x.strip()]


def _course_line(cid: str, c: Course) -> str:
    return f"{cid} | {c.number} | {c.title or '(no title)'} | {c.meets or 'TBA'}"


def _cmd_fetch(args: argparse.Namespace, settings: Settings) -> int:
    """
    Download the catalog feed and cache it locally.
    """
    url = (args.url or settings.data_url).strip()
    try:
        courses = fetch_catalog(url, timeout=settings.request_timeout)
    except (requests.RequestException, CatalogError) as e:
        log.error("Fetch failed: %s", e)
        print(f"Could not fetch catalog: {e}")
        return 1

    path = settings.catalog_path()
    save_catalog(courses, path)
    print(f"Saved {len(courses)} courses to: {path}")
    return 0


def _cmd_list(args: argparse.Namespace, courses: Mapping[str, Course], settings: Settings) -> int:
    """
    List all courses of one term.
    """
    term = (args.term or settings.default_term).strip()
    entries = courses_for_term(courses, term)
    if not entries:
        print(f"No courses found for {term}.")
        return 0

    for cid, c in entries:
        print(_course_line(cid, c))
    return 0


def _cmd_check(args: argparse.Namespace, courses: Mapping[str, Course]) -> int:
    """
    Can the course be added to the given selection?
    """
    cid = (args.course_id or "").strip()
    if not cid:
        print("Please provide a course_id.")
        return 1

    selected = set(_clean_ids(args.selected))

    if cid not in courses and cid not in selected:
        print(f"Unknown course: {cid}")
        return 1

    if is_course_selectable(cid, courses, selected):
        print(f"Selectable: {cid}")
        return 0

    blockers = blocking_courses(cid, courses, selected)
    print(f"Blocked: {cid} conflicts with {', '.join(blockers)}")
    return 1


def _cmd_conflicts(args: argparse.Namespace, courses: Mapping[str, Course]) -> int:
    """
    Print every conflicting pair among the given course ids.
    """
    ids = sorted(set(_clean_ids(args.selected)))
    if not ids:
        print("Please provide course ids with --selected.")
        return 1

    missing = [cid for cid in ids if cid not in courses]
    for cid in missing:
        print(f"Warning: course_id '{cid}' not found in catalog (ignored).")

    known = [cid for cid in ids if cid in courses]
    pairs: list[tuple[str, str]] = []
    for i in range(len(known)):
        for j in range(i + 1, len(known)):
            a, b = known[i], known[j]
            if courses_conflict(courses[a], courses[b]):
                pairs.append((a, b))

    if not pairs:
        print("No conflicts found.")
        return 0

    print(f"Conflicts found: {len(pairs)}")
    for a, b in pairs:
        ca, cb = courses[a], courses[b]
        print(f"- {a} {ca.meets}  <->  {b} {cb.meets}  ({ca.term})")
    return 0


def _cmd_validate(args: argparse.Namespace, courses: Mapping[str, Course]) -> int:
    """
    Run the strict edit-form validation over every cached course.
    """
    if not courses:
        print("Catalog is empty. Run 'courseplan fetch' first.")
        return 0

    bad = 0
    for cid in sorted(courses):
        errors = form_errors(courses[cid].to_dict())
        if not errors:
            continue
        bad += 1
        for field, messages in errors.items():
            for msg in messages:
                print(f"{cid} | {field}: {msg}")

    if bad:
        print(f"{bad} of {len(courses)} courses failed validation.")
        return 1

    print(f"All {len(courses)} courses are valid.")
    return 0


def _cmd_edit(args: argparse.Namespace, courses: Mapping[str, Course], settings: Settings) -> int:
    """
    Validate an edit and save it to the cached catalog.
    """
    cid = (args.course_id or "").strip()
    if not cid:
        print("Please provide a course_id.")
        return 1

    course = courses.get(cid)
    if course is None:
        print(f"Course {cid} not found.")
        return 1

    patch = {
        k: getattr(args, k)
        for k in ("title", "term", "number", "meets")
        if getattr(args, k) is not None
    }
    data = {**course.to_dict(), **patch}

    errors = form_errors(data)
    if errors:
        for field, messages in errors.items():
            for msg in messages:
                print(f"{field}: {msg}")
        return 1

    form = validate_course(data)
    if not is_changed(course, form):
        print(f"No changes for {cid}.")
        return 0

    updated = update_course(courses, cid, form.to_course().to_dict())
    save_catalog(updated, settings.catalog_path())
    log.info("Updated course %s", cid)
    print(f"Saved: {_course_line(cid, updated[cid])}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="courseplan", description="Course catalog planner")
    parser.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ...")
    sub = parser.add_subparsers(dest="command", required=True)

    p_fetch = sub.add_parser("fetch", help="Download the course catalog")
    p_fetch.add_argument("--url", type=str, default=None, help="Catalog JSON URL")

    p_list = sub.add_parser("list", help="List courses of a term")
    p_list.add_argument("--term", "-t", type=str, default=None, help="Fall, Winter, Spring or Summer")

    p_check = sub.add_parser("check", help="Check whether a course can be added to a selection")
    p_check.add_argument("course_id", type=str, help="Course ID (e.g. F213)")
    p_check.add_argument("--selected", "-s", nargs="*", default=[], help="Already selected course IDs")

    p_conf = sub.add_parser("conflicts", help="Show conflicts among selected courses")
    p_conf.add_argument("--selected", "-s", nargs="*", default=[], help="Selected course IDs")

    sub.add_parser("validate", help="Validate all cached course records")

    p_edit = sub.add_parser("edit", help="Edit a cached course record")
    p_edit.add_argument("course_id", type=str, help="Course ID (e.g. F213)")
    p_edit.add_argument("--title", type=str, default=None)
    p_edit.add_argument("--term", type=str, default=None)
    p_edit.add_argument("--number", type=str, default=None)
    p_edit.add_argument("--meets", type=str, default=None, help='e.g. "MWF 9:00-9:50" or "" for TBA')

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    if args.command == "fetch":
        raise SystemExit(_cmd_fetch(args, settings))

    courses = load_catalog(settings.catalog_path())

    if args.command == "list":
        raise SystemExit(_cmd_list(args, courses, settings))
    if args.command == "check":
        raise SystemExit(_cmd_check(args, courses))
    if args.command == "conflicts":
        raise SystemExit(_cmd_conflicts(args, courses))
    if args.command == "validate":
        raise SystemExit(_cmd_validate(args, courses))
    if args.command == "edit":
        raise SystemExit(_cmd_edit(args, courses, settings))

    if args.command == "interactive":
        from courseplan.interactive import run_interactive

        run_interactive(courses, settings)
        raise SystemExit(0)

    raise SystemExit(2)
