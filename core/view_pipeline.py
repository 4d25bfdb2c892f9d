# core/view_pipeline.py

"""
Derived, read-only views over the roster.

The pipeline runs in three stages, each a pure function:
    1. grade filter   - keep everything for the "all" sentinel, otherwise an exact grade match
    2. global search  - case-insensitive substring match against every field of a record
    3. pagination     - fixed-size, 1-based pages

Dashboard aggregates (`compute_stats`) are computed over the filtered and searched set, not the full roster.

`RosterView` holds the UI-side inputs (active grade, search term, page, selected date) and caches the
filtered result on the tuple (roster version, grade, search term).
"""

from __future__ import annotations

import datetime
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import config
from core.grades import ALL_GRADES, grade_sort_key
from core.utils import digits_only, today_iso
from models.student import (
    GENDER_FEMALE,
    GENDER_MALE,
    SIBLINGS_YES,
    AttendanceStatus,
    Student,
)

if TYPE_CHECKING:
    from models.roster import Roster


# === pipeline stages ===


def filter_by_grade(records: list[Student], active_grade: str) -> list[Student]:
    if active_grade == ALL_GRADES:
        return list(records)

    return [s for s in records if s.grade == active_grade]


def search_records(records: list[Student], term: str) -> list[Student]:
    """
    Keeps records where any field contains `term`, ignoring case.

    Notes:
        - The attendance map takes part in the match through its string form, so
          searching for a date also finds every student marked on that date.
    """
    if not term:
        return list(records)

    needle = term.lower()

    return [
        s
        for s in records
        if any(needle in value.lower() for value in s.searchable_values())
    ]


def total_pages(count: int, page_size: int = config.PAGE_SIZE) -> int:
    return math.ceil(count / page_size)


def paginate(
    records: list[Student], page: int, page_size: int = config.PAGE_SIZE
) -> list[Student]:
    start = (page - 1) * page_size
    return records[start : start + page_size]


# === aggregates ===


def percentage(part: int, total: int) -> int:
    """Rounds half up, the way the dashboards always have; 0 when `total` is 0."""
    if total == 0:
        return 0

    return math.floor(part / total * 100 + 0.5)


def format_percentage(part: int, total: int) -> str:
    return f"{percentage(part, total)}%"


def grade_distribution(records: list[Student]) -> list[tuple[str, int]]:
    """
    Counts students per grade, in canonical grade order.

    Returns:
        (grade, count) pairs for grades with at least one student. Unclassified and unknown grades come last.
    """
    counts = Counter(s.grade for s in records)
    return sorted(counts.items(), key=lambda item: grade_sort_key(item[0]))


def split_by_gender(records: list[Student]) -> tuple[list[Student], list[Student]]:
    males = [s for s in records if s.gender == GENDER_MALE]
    females = [s for s in records if s.gender == GENDER_FEMALE]
    return males, females


def sibling_groups(records: list[Student]) -> list[list[Student]]:
    """
    Groups students who report siblings at the center by their mobile number.

    Args:
        records (list[Student]): The students to group.

    Returns:
        Groups of two or more students sharing the same digits-only mobile number, largest first.

    Notes:
        - Only students whose siblings flag is "yes" and whose mobile is not blank are considered.
        - Formatting differences in the mobile number ("059-912-3456" vs "0599123456") are ignored.
        - Groups of equal size keep the order in which their first member appears.
    """
    groups: dict[str, list[Student]] = {}

    for student in records:
        if student.has_siblings.strip() != SIBLINGS_YES or not student.mobile.strip():
            continue

        key = digits_only(student.mobile)

        if not key:
            continue

        groups.setdefault(key, []).append(student)

    return sorted(
        (group for group in groups.values() if len(group) > 1),
        key=len,
        reverse=True,
    )


def filter_sibling_groups(
    groups: list[list[Student]], term: str
) -> list[list[Student]]:
    if not term.strip():
        return groups

    needle = term.lower()

    return [
        group
        for group in groups
        if needle in group[0].mobile.lower()
        or any(needle in s.full_name.lower() for s in group)
    ]


@dataclass
class RosterStats:
    total: int
    present: int
    absent: int
    marked: int
    with_siblings: int
    males: int
    females: int
    grades: list[tuple[str, int]] = field(default_factory=list)
    siblings: list[list[Student]] = field(default_factory=list)

    @property
    def unmarked(self) -> int:
        return self.total - self.marked

    @property
    def present_percent(self) -> int:
        return percentage(self.present, self.total)

    @property
    def absent_percent(self) -> int:
        return percentage(self.absent, self.total)

    @property
    def marked_percent(self) -> int:
        return percentage(self.marked, self.total)

    @property
    def siblings_percent(self) -> int:
        return percentage(self.with_siblings, self.total)

    @property
    def male_percent(self) -> int:
        return percentage(self.males, self.males + self.females)


def compute_stats(records: list[Student], date: str) -> RosterStats:
    males, females = split_by_gender(records)

    return RosterStats(
        total=len(records),
        present=sum(1 for s in records if s.attendance_on(date) == AttendanceStatus.PRESENT.value),
        absent=sum(1 for s in records if s.attendance_on(date) == AttendanceStatus.ABSENT.value),
        marked=sum(1 for s in records if s.is_attendance_marked(date)),
        with_siblings=sum(1 for s in records if s.has_siblings == SIBLINGS_YES),
        males=len(males),
        females=len(females),
        grades=grade_distribution(records),
        siblings=sibling_groups(records),
    )


# === stateful view ===


class RosterView:
    """
    The current filter, search, page, and date selection over a `Roster`.

    Notes:
        - Changing the search term or the active grade returns to page 1.
        - `go_to_page()` ignores pages outside 1..page_count.
        - Reading the current page first clamps it to the last page.
        - Results are recomputed whenever the roster version or an input changes.
    """

    def __init__(
        self,
        roster: Roster,
        page_size: int = config.PAGE_SIZE,
        selected_date: str | None = None,
    ):
        self._roster = roster
        self._page_size = page_size
        self._active_grade: str = ALL_GRADES
        self._search_term: str = ""
        self._page: int = 1
        self._selected_date: str = today_iso()
        if selected_date:
            self.selected_date = selected_date
        self._cache_key: tuple[int, str, str] | None = None
        self._cache: list[Student] = []

    # === properties ===

    @property
    def active_grade(self) -> str:
        return self._active_grade

    @active_grade.setter
    def active_grade(self, grade: str) -> None:
        self._active_grade = grade
        self._page = 1

    @property
    def search_term(self) -> str:
        return self._search_term

    @search_term.setter
    def search_term(self, term: str) -> None:
        self._search_term = term
        self._page = 1

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def selected_date(self) -> str:
        return self._selected_date

    @selected_date.setter
    def selected_date(self, date: str) -> None:
        self._selected_date = datetime.date.fromisoformat(date).isoformat()

    @property
    def page_count(self) -> int:
        return total_pages(len(self.filtered()), self._page_size)

    # === paging ===

    def go_to_page(self, page: int) -> bool:
        if 1 <= page <= self.page_count:
            self._page = page
            return True

        return False

    def reset_page(self) -> None:
        self._page = 1

    def clamp_page(self) -> None:
        """Pulls the page back to the last one when removals or edits shrink the result."""
        self._page = max(1, min(self._page, self.page_count))

    def next_page(self) -> bool:
        return self.go_to_page(self._page + 1)

    def previous_page(self) -> bool:
        return self.go_to_page(self._page - 1)

    # === derived views ===

    def filtered(self) -> list[Student]:
        key = (self._roster.version, self._active_grade, self._search_term)

        if key != self._cache_key:
            records = filter_by_grade(self._roster.students, self._active_grade)
            self._cache = search_records(records, self._search_term)
            self._cache_key = key

        return list(self._cache)

    def current_page_records(self) -> list[Student]:
        self.clamp_page()
        return paginate(self.filtered(), self._page, self._page_size)

    def pages(self) -> list[list[Student]]:
        records = self.filtered()
        return [
            paginate(records, page, self._page_size)
            for page in range(1, total_pages(len(records), self._page_size) + 1)
        ]

    def stats(self) -> RosterStats:
        return compute_stats(self.filtered(), self._selected_date)
