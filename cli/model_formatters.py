# cli/model_formatters.py

from textwrap import dedent

import core.formatters as formatters
from core.view_pipeline import RosterStats
from models.student import Student

UNMARKED_LABEL = "لم يتم تسجيل الحضور"


# === Student formatters ===


def format_student_oneline(student: Student, date: str | None = None) -> str:
    status = ""

    if date is not None:
        status = f" | {student.attendance_on(date) or UNMARKED_LABEL}"

    return f"{student.full_name:<30} | {student.grade:<8} | {student.mobile}{status}"


def format_student_multiline(student: Student) -> str:
    return dedent(
        f"""\
        ... Name: {student.full_name}
        ... National ID: {student.student_id}
        ... Gender: {student.gender}
        ... Grade: {student.grade}
        ... Mobile: {student.mobile}
        ... Has siblings: {student.has_siblings}
        ... Nearest landmark: {student.nearest_landmark}
        ... Registered: {student.timestamp}
        """
    )


# === Stats formatters ===


def format_stats(stats: RosterStats, date: str) -> str:
    lines = [
        formatters.format_banner_text(f"Statistics for {date}"),
        f"Total students:   {stats.total}",
        f"Present:          {stats.present} ({stats.present_percent}%)",
        f"Absent:           {stats.absent} ({stats.absent_percent}%)",
        f"Attendance marked: {stats.marked_percent}%",
        f"With siblings:    {stats.siblings_percent}%",
        f"Male / Female:    {stats.males} / {stats.females}",
        "",
        "Grade distribution:",
    ]

    lines.extend(f"  {grade:<10} {count}" for grade, count in stats.grades)

    return "\n".join(lines)


def format_sibling_group(group: list[Student]) -> str:
    names = "\n".join(f"    - {s.full_name} ({s.grade})" for s in group)
    return f"{group[0].mobile} [{len(group)}]\n{names}"
