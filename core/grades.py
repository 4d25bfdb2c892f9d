# core/grades.py

"""
Controlled grade vocabulary for the roster.

Free-text grade values from imports and the student form are normalized to one
of nine canonical labels, or to the "unclassified" sentinel when they do not
match. The canonical order is used for the grade filter and the grade histogram.
"""

from typing import Any

VALID_GRADES = [
    "الاول",
    "الثاني",
    "الثالث",
    "الرابع",
    "الخامس",
    "السادس",
    "السابع",
    "الثامن",
    "التاسع",
]

UNCLASSIFIED_GRADE = "غير مصنف"

# filter sentinel, never stored on a record
ALL_GRADES = "الكل"

# known misspellings seen in registration form exports
GRADE_TYPOS: dict[str, str] = {
    "السابغ": "السابع",
}


def normalize_grade(raw: Any) -> str:
    """
    Maps a free-text grade to the controlled vocabulary.

    Args:
        raw (Any): The grade value as entered or imported. Non-strings are coerced with `str()`.

    Returns:
        One of `VALID_GRADES`, or `UNCLASSIFIED_GRADE` if the value (after trimming and typo correction) is not a member.

    Notes:
        - Pure and total: never raises.
    """
    if raw is None:
        return UNCLASSIFIED_GRADE

    grade = str(raw).strip()
    grade = GRADE_TYPOS.get(grade, grade)

    if grade in VALID_GRADES:
        return grade

    return UNCLASSIFIED_GRADE


def grade_filter_options() -> list[str]:
    return [ALL_GRADES, *VALID_GRADES, UNCLASSIFIED_GRADE]


def grade_sort_key(grade: str) -> int:
    try:
        return VALID_GRADES.index(grade)
    except ValueError:
        return len(VALID_GRADES)
