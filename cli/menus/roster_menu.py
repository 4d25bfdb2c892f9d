# cli/menus/roster_menu.py

"""
Roster menu for the student roster CLI.

This module defines the main interface once a user has logged in, including:
- Browsing the roster page by page, with grade filter and global search
- Adding, editing, and removing students (admin only)
- Importing a roster from CSV and exporting the current view to CSV

Attendance marking and statistics live in their own menus.
All mutations are routed through the `Roster` API, which persists every change.
"""

from typing import cast

import cli.menu_helpers as helpers
import cli.model_formatters as model_formatters
import core.formatters as formatters
from cli.menu_helpers import MenuSignal
from cli.menus import attendance_menu, stats_menu
from core.grades import grade_filter_options
from core.view_pipeline import RosterView
from models.roster import Roster
from models.session import SessionGate
from models.student import Student
from services.export_service import export_current_view, write_export
from services.import_service import import_roster_file


def run(roster: Roster, session: SessionGate, data_dir: str) -> None:
    """
    Top-level loop with dispatch for the Roster menu.

    Args:
        roster (Roster): The active `Roster`.
        session (SessionGate): The logged-in session; its role gates editing actions.
        data_dir (str): Directory where exports are written.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    view = RosterView(roster)

    title = formatters.format_banner_text("Student Roster")
    options = [
        ("View Current Page", lambda: view_page(view)),
        ("Next Page", lambda: change_page(view, view.page + 1)),
        ("Previous Page", lambda: change_page(view, view.page - 1)),
        ("Search Students", lambda: set_search(view)),
        ("Filter by Grade", lambda: set_grade_filter(view)),
        ("Add Student", lambda: add_student(roster, session)),
        ("Edit Student", lambda: edit_student(roster, view, session)),
        ("Remove Student", lambda: remove_student(roster, view, session)),
        ("Attendance", lambda: attendance_menu.run(roster, view, session)),
        ("Statistics", lambda: stats_menu.run(view)),
        ("Import Roster from CSV", lambda: import_csv(roster, view)),
        ("Export Current View to CSV", lambda: export_csv(view, data_dir)),
    ]
    zero_option = "Log out"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            break

        elif callable(menu_response):
            menu_response()

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


# === browsing ===


def view_page(view: RosterView) -> None:
    records = view.current_page_records()

    filter_text = f"grade: {view.active_grade}"
    if view.search_term:
        filter_text += f", search: {view.search_term}"

    print(f"\n{formatters.format_banner_text('Roster')}")
    print(f"{len(view.filtered())} students ({filter_text})")

    if not records:
        print("\nNo students match the current filter.")
        return

    helpers.display_results(
        records,
        show_index=True,
        formatter=lambda s: model_formatters.format_student_oneline(s, view.selected_date),
    )

    print(f"\n{formatters.format_page_indicator(view.page, view.page_count)}")


def change_page(view: RosterView, page: int) -> None:
    if view.go_to_page(page):
        view_page(view)
    else:
        print("\nNo more pages in that direction.")


def set_search(view: RosterView) -> None:
    term = helpers.prompt_user_input("Search term (leave blank to clear):")
    view.search_term = term
    view_page(view)


def set_grade_filter(view: RosterView) -> None:
    grades = grade_filter_options()

    print(f"\n{formatters.format_banner_text('Grades')}")
    helpers.display_results(grades, show_index=True)

    choice = helpers.prompt_user_input("Select a grade (0 to cancel):")

    if choice == "0":
        helpers.returning_without_changes()
        return

    try:
        view.active_grade = grades[int(choice) - 1]

    except (ValueError, IndexError):
        print("\nInvalid selection. Filter unchanged.")
        return

    view_page(view)


def select_student_from_view(view: RosterView) -> Student | MenuSignal:
    return helpers.prompt_student_selection(view.current_page_records(), "Students on this page")


# === add / edit / remove ===


FORM_PROMPTS = [
    ("full_name", "Full name"),
    ("student_id", "National ID"),
    ("gender", "Gender (ذكر / انثى)"),
    ("grade", "Grade"),
    ("mobile", "Mobile"),
    ("has_siblings", "Has siblings at the center (نعم / لا)"),
    ("nearest_landmark", "Nearest landmark"),
]


def prompt_student_form(current: Student | None = None) -> dict[str, str] | None:
    """
    Collects form fields for a new or edited student.

    Returns:
        A dict of entered values keyed by `Student` attribute name, or None if the user cancels.

    Notes:
        - For a new student, a blank full name cancels.
        - When editing, a blank answer keeps the current value.
    """
    data: dict[str, str] = {}

    for field, label in FORM_PROMPTS:
        if current is None:
            value = helpers.prompt_user_input(f"{label}:")

            if field == "full_name" and not value:
                return None

            if value:
                data[field] = value

        else:
            value = helpers.prompt_user_input(
                f"{label} [{getattr(current, field)}] (leave blank to keep):"
            )
            data[field] = value or getattr(current, field)

    return data


def add_student(roster: Roster, session: SessionGate) -> None:
    if not helpers.require_admin(session):
        return

    data = prompt_student_form()

    if data is None:
        helpers.returning_without_changes()
        return

    response = roster.add(data)

    if not response.success:
        helpers.display_response_failure(response)
        return

    print(f"\n{response.detail}")


def edit_student(roster: Roster, view: RosterView, session: SessionGate) -> None:
    if not helpers.require_admin(session):
        return

    student = select_student_from_view(view)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    print(f"\n{model_formatters.format_student_multiline(student)}")

    data = prompt_student_form(student)

    if data is None or not helpers.confirm_action("Save these changes?"):
        helpers.returning_without_changes()
        return

    response = roster.update(student.id, data)
    print(f"\n{response.detail}")


def remove_student(roster: Roster, view: RosterView, session: SessionGate) -> None:
    if not helpers.require_admin(session):
        return

    student = select_student_from_view(view)

    if student is MenuSignal.CANCEL:
        return
    student = cast(Student, student)

    print(f"\n{model_formatters.format_student_multiline(student)}")

    if not helpers.confirm_action(
        "Remove this student and all of their attendance records?"
    ):
        helpers.returning_without_changes()
        return

    response = roster.remove(student.id)
    print(f"\n{response.detail}")


# === import / export ===


def import_csv(roster: Roster, view: RosterView) -> None:
    path = helpers.prompt_user_input_or_cancel(
        "Path to the CSV file (leave blank to cancel):"
    )

    if path is MenuSignal.CANCEL:
        return
    path = cast(str, path)

    if len(roster) and not helpers.confirm_action(
        "Importing replaces the whole roster, including attendance. Continue?"
    ):
        helpers.returning_without_changes()
        return

    response = import_roster_file(roster, path)

    if not response.success:
        helpers.display_response_failure(response)
        return

    view.reset_page()
    print(f"\n{response.detail} ({response.data['count']})")


def export_csv(view: RosterView, data_dir: str) -> None:
    filename, csv_text = export_current_view(view.filtered(), view.selected_date)

    response = write_export(filename, csv_text, data_dir)

    if not response.success:
        helpers.display_response_failure(response)
        return

    print(f"\n{response.detail}")
