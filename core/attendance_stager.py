# core/attendance_stager.py

"""
Utility class for staging attendance changes before committing them to the Roster.

`AttendanceStager` holds proposed statuses for one date, keyed by student ID, so a whole
page can be marked, reviewed, and then written in one pass. Entries that would not change
the roster are dropped from the pending list.
"""

from collections import Counter
from collections.abc import Collection


class AttendanceStager:
    """
    A temporary store for proposed attendance changes, keyed by student ID.

    Notes:
        - Statuses are stored as plain strings, the same as on `Student`.
        - No validation is performed on student IDs; unknown IDs are no-ops when committed.
    """

    def __init__(self):
        self._staged: dict[str, str] = {}

    def stage(self, student_id: str, status: str) -> None:
        self._staged[student_id] = status

    def unstage(self, student_id: str) -> None:
        self._staged.pop(student_id, None)

    def bulk_stage(
        self,
        student_ids: Collection[str],
        status: str,
        overwrite: bool = True,
    ) -> None:
        """
        Stage the same status for several students.

        Args:
            student_ids (Collection[str]): The students to stage.
            status (str): The status to apply to all of them.
            overwrite (bool): If False, keeps statuses already staged for a student.
        """
        for student_id in student_ids:
            if student_id in self._staged and not overwrite:
                continue

            self.stage(student_id, status)

    def clear(self) -> None:
        self._staged.clear()

    def is_empty(self) -> bool:
        return not self._staged

    def pending(
        self, current_status_map: dict[str, str] | None = None
    ) -> list[tuple[str, str]]:
        """
        Get the staged changes to apply, in staging order.

        Args:
            current_status_map (dict[str, str] | None): If provided, entries whose staged status equals the current one are left out.

        Returns:
            list[tuple[str, str]]: (student_id, status) pairs.
        """
        return [
            (student_id, status)
            for student_id, status in self._staged.items()
            if current_status_map is None
            or current_status_map.get(student_id, "") != status
        ]

    def summary(self) -> Counter:
        return Counter(self._staged.values())
