# cli/menus/attendance_menu.py

"""
Attendance menu for the student roster CLI.

Marks students present or absent on the selected date. The selected date defaults to
today and is shared with the roster view, statistics, and export.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from core.attendance_stager import AttendanceStager
from core.view_pipeline import RosterView
from models.roster import Roster
from models.session import SessionGate
from models.student import AttendanceStatus, Student


def run(roster: Roster, view: RosterView, session: SessionGate) -> None:
    """
    Top-level loop with dispatch for the Attendance menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    options = [
        ("Change Selected Date", lambda: change_date(view)),
        ("Mark Student Present", lambda: mark_student(roster, view, session, AttendanceStatus.PRESENT)),
        ("Mark Student Absent", lambda: mark_student(roster, view, session, AttendanceStatus.ABSENT)),
        ("Mark Whole Page", lambda: mark_page(roster, view, session)),
    ]
    zero_option = "Return to Roster menu"

    while True:
        title = formatters.format_banner_text(f"Attendance: {view.selected_date}")
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")

    helpers.returning_to("Roster menu")


def change_date(view: RosterView) -> None:
    date_input = helpers.prompt_user_input_or_cancel(
        "Enter a date as YYYY-MM-DD (leave blank to cancel):"
    )

    if date_input is MenuSignal.CANCEL:
        return

    try:
        view.selected_date = cast(str, date_input)

    except ValueError:
        print("\nInvalid date. Please use the YYYY-MM-DD format.")
        return

    print(f"\nSelected date: {formatters.format_class_date_long(view.selected_date)}")


def mark_student(
    roster: Roster,
    view: RosterView,
    session: SessionGate,
    status: AttendanceStatus,
) -> None:
    if not helpers.require_admin(session):
        return

    student = helpers.prompt_student_selection(
        view.current_page_records(), "Students on this page"
    )

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    roster.mark_attendance(student.id, view.selected_date, status.value)

    print(f"\n{model_formatters.format_student_oneline(student, view.selected_date)}")


def mark_page(roster: Roster, view: RosterView, session: SessionGate) -> None:
    """
    Walks through every student on the current page, staging p/a for each, then commits on confirmation.

    Notes:
        - A blank answer skips the student; "q" stops early.
        - "all p" / "all a" stages the current student and the rest of the page; earlier students keep their answers or stay skipped.
        - Answers that match the status already recorded are not written again.
    """
    if not helpers.require_admin(session):
        return

    answers = {"p": AttendanceStatus.PRESENT.value, "a": AttendanceStatus.ABSENT.value}
    records = view.current_page_records()
    stager = AttendanceStager()

    for position, student in enumerate(records):
        choice = helpers.prompt_user_input(
            f"{model_formatters.format_student_oneline(student, view.selected_date)}\n"
            "  (p)resent, (a)bsent, 'all p' / 'all a' for the rest of the page, blank to skip, q to stop:"
        ).lower()

        if choice == "q":
            break

        if choice in ("all p", "all a"):
            stager.bulk_stage(
                [s.id for s in records[position:]], answers[choice[-1]], overwrite=False
            )
            break

        if choice in answers:
            stager.stage(student.id, answers[choice])

    current = {s.id: s.attendance_on(view.selected_date) for s in records}
    pending = stager.pending(current)

    if not pending:
        helpers.returning_without_changes()
        return

    counts = ", ".join(f"{status}: {count}" for status, count in stager.summary().items())
    print(f"\nStaged changes ({counts}); {len(pending)} differ from the saved attendance.")

    if not helpers.confirm_action("Save these attendance changes?"):
        stager.clear()
        helpers.returning_without_changes()
        return

    for student_id, status in pending:
        roster.mark_attendance(student_id, view.selected_date, status)

    print(f"\nAttendance updated for {formatters.format_class_date_long(view.selected_date)}.")
