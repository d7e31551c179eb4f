from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from courseplan.catalog import save_catalog, update_course
from courseplan.config import Settings
from courseplan.conflicts import is_course_selectable
from courseplan.model import TERMS, Course
from courseplan.schema import form_errors, is_changed, validate_course
from courseplan.selection import blocking_courses, courses_for_term, plan_items, try_toggle_course


log = logging.getLogger(__name__)

console = Console()


@dataclass
class Session:
    courses: dict[str, Course]
    term: str
    selected: set[str] = field(default_factory=set)


def _println(msg: str = "") -> None:
    console.print(msg)


def _prompt(msg: str) -> str:
    return console.input(msg)


def run_interactive(courses: dict[str, Course], settings: Settings) -> None:
    """
    Interactive menu loop. The plan lives only for the duration of the session.
    """
    session = Session(courses=dict(courses), term=settings.default_term)

    while True:
        _print_header(session)

        choice = _prompt(
            "\n[1] Choose term\n"
            "[2] Browse + select courses\n"
            "[3] View course plan\n"
            "[4] Edit a course\n"
            "[0] Exit\n"
            "Select: "
        ).strip()

        if choice == "0":
            _println("Bye.")
            return

        if choice == "1":
            _flow_choose_term(session)
        elif choice == "2":
            _flow_browse(session)
        elif choice == "3":
            _flow_plan(session)
        elif choice == "4":
            _flow_edit(session, settings)
        else:
            _println("Invalid choice.")


def _print_header(session: Session) -> None:
    n = len(session.selected)
    plan = "Course Plan" if n == 0 else f"Course Plan ({n})"
    _println("\n=== courseplan (interactive) ===")
    _println(f"Term: [bold]{session.term}[/] | Courses: {len(session.courses)} | {plan}")


def _flow_choose_term(session: Session) -> None:
    for i, t in enumerate(TERMS, start=1):
        mark = " *" if t == session.term else ""
        _println(f"{i}) {t}{mark}")

    pick = _prompt("Choose term number [blank = keep]: ").strip()
    if not pick:
        return
    if not pick.isdigit() or not (1 <= int(pick) <= len(TERMS)):
        _println("Out of range.")
        return
    session.term = TERMS[int(pick) - 1]


def _status(cid: str, session: Session) -> str:
    if cid in session.selected:
        return "[green]selected[/]"
    if is_course_selectable(cid, session.courses, session.selected):
        return ""
    return "[red]conflict[/]"


def _flow_browse(session: Session) -> None:
    """
    List the courses of the current term and toggle them by number.
    Courses that would conflict with the plan cannot be selected.
    """
    while True:
        entries = courses_for_term(session.courses, session.term)
        if not entries:
            _println(f"No courses found for {session.term}.")
            return

        table = Table(title=f"{session.term} courses", box=box.SIMPLE)
        table.add_column("#", justify="right")
        table.add_column("Course")
        table.add_column("Number")
        table.add_column("Meets")
        table.add_column("")
        for i, (cid, c) in enumerate(entries, start=1):
            table.add_row(
                str(i),
                f"[bold cyan]{cid}[/] {c.title}",
                c.number,
                c.meets or "TBA",
                _status(cid, session),
            )
        console.print(table)

        pick = _prompt("Enter number to select/unselect [blank = back]: ").strip()
        if not pick:
            return
        if not pick.isdigit():
            _println("Not a number.")
            continue

        i = int(pick)
        if not (1 <= i <= len(entries)):
            _println("Out of range.")
            continue

        cid = entries[i - 1][0]
        was_selected = cid in session.selected
        session.selected, ok = try_toggle_course(session.selected, cid, session.courses)
        if not ok:
            blockers = blocking_courses(cid, session.courses, session.selected)
            _println(f"Cannot select {cid}: conflicts with {', '.join(blockers)}")
        elif was_selected:
            _println(f"Removed: {cid}")
        else:
            _println(f"Added: {cid}")


def _flow_plan(session: Session) -> None:
    items = plan_items(session.courses, session.selected)
    if not items:
        _println("No courses selected yet.")
        _println("- Choose a term with [1].")
        _println("- Select courses with [2].")
        return

    table = Table(title="Your Course Plan", box=box.SIMPLE)
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Meets")
    for cid, c in items:
        table.add_row(cid, c.title, c.meets or "TBA")
    console.print(table)


def _ask(label: str, current: str) -> Optional[str]:
    # blank keeps the current value, "-" clears it
    raw = _prompt(f"{label} [{current}]: ")
    if not raw.strip():
        return None
    if raw.strip() == "-":
        return ""
    return raw.strip()


def _flow_edit(session: Session, settings: Settings) -> None:
    cid = _prompt("Course ID to edit [blank = back]: ").strip()
    if not cid:
        return

    course = session.courses.get(cid)
    if course is None:
        _println(f"Course {cid} not found.")
        return

    data = course.to_dict()
    for key in ("title", "term", "number", "meets"):
        value = _ask(key.capitalize(), data[key])
        if value is not None:
            data[key] = value

    errors = form_errors(data)
    if errors:
        for name, messages in errors.items():
            for msg in messages:
                _println(f"[red]{name}[/]: {msg}")
        return

    form = validate_course(data)
    if not is_changed(course, form):
        _println("No changes.")
        return

    session.courses = update_course(session.courses, cid, form.to_course().to_dict())
    save_catalog(session.courses, settings.catalog_path())
    log.info("Updated course %s", cid)
    _println(f"Saved: {cid}")
