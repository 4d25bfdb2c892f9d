# models/roster.py

"""
The Roster model is the central data object of the program and the "source of truth" for all student records.

Students are held in a single ordered list: newly added students go to the front, imported students keep file order.
Every mutation is written straight through to the injected key-value storage as a JSON array under the `students` key.
Persistence is best-effort: a failed write is logged and the in-memory change stands.

Provides functions for loading a Roster from storage (falling back to the seed CSV), replacing the whole roster on import,
and adding, updating, removing, and marking attendance for individual students by ID.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any

import config
from core.csv_codec import EmptyInputError, parse_csv
from core.response import ErrorCode, Response
from core.storage import KeyValueStorage
from core.utils import generate_uuid, now_timestamp
from models.student import GENDER_MALE, SIBLINGS_NO, Student

logger = logging.getLogger(__name__)


class Roster:
    def __init__(self, storage: KeyValueStorage, students: list[Student] | None = None):
        self._storage = storage
        self._students: list[Student] = list(students or [])
        self._version: int = 0

    # === properties ===

    @property
    def students(self) -> list[Student]:
        return list(self._students)

    @property
    def version(self) -> int:
        """Incremented on every mutation; views use it to invalidate cached results."""
        return self._version

    @property
    def storage(self) -> KeyValueStorage:
        return self._storage

    # === public classmethods ===

    @classmethod
    def load(cls, storage: KeyValueStorage, seed_csv: str = config.SEED_CSV) -> Roster:
        """
        Builds a `Roster` from previously stored students, or from the seed CSV if none are usable.

        Args:
            storage (KeyValueStorage): The persistent key-value store.
            seed_csv (str): CSV text parsed when storage holds no roster or an unreadable one.

        Returns:
            Roster: The loaded roster. This method never raises.

        Notes:
            - An empty stored array is a valid (empty) roster and does not trigger the seed.
            - Loading does not write to storage; the first mutation does.
        """
        try:
            raw = storage.get(config.STORAGE_KEY_STUDENTS)

            if raw is not None:
                data = json.loads(raw)

                if not isinstance(data, list):
                    raise ValueError("Expected stored students to be a list.")

                return cls(storage, [Student.from_dict(item) for item in data])

        except (ValueError, TypeError, OSError):
            logger.exception("Failed to load students from storage, using seed data")

        try:
            students = parse_csv(seed_csv)

        except EmptyInputError:
            logger.warning("Seed CSV contains no students, starting with an empty roster")
            students = []

        return cls(storage, students)

    # === persistence ===

    def save(self) -> Response:
        """
        Serializes the whole roster and writes it to storage under the `students` key.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the roster was written.
                    - False if serialization or the storage write failed.
                - detail (str | None):
                    - A human-readable description of the outcome.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INTERNAL_ERROR` if the write failed.
                - status_code (int | None):
                    - 200 on success
                    - 500 on failure
                - data (dict | None):
                    - Always empty.

        Notes:
            - Failures are logged here and never raised; callers may ignore the response.
        """
        try:
            payload = json.dumps(
                [student.to_dict() for student in self._students], ensure_ascii=False
            )
            self._storage.set(config.STORAGE_KEY_STUDENTS, payload)

        except (OSError, TypeError, ValueError) as e:
            logger.exception("Failed to save students to storage")

            return Response.fail(
                detail=f"Failed to write roster to storage: {e}",
                error=ErrorCode.INTERNAL_ERROR,
                status_code=500,
            )

        return Response.succeed(detail="Roster saved to storage.")

    def _commit(self) -> None:
        self._version += 1
        self.save()

    # === data accessors ===

    def find_student_by_uuid(self, uuid: str) -> Response:
        """
        Finds a `Student` by ID.

        Args:
            uuid (str): The unique ID of the student.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the student was found.
                - error (ErrorCode | str | None): `ErrorCode.NOT_FOUND` if no match is found.
                - status_code (int | None): 200 on success, 404 if not found.
                - data (dict): On success, "record" (Student): the matched student.

        Notes:
            - This method is read-only and does not raise.
        """
        student = self._find(uuid)

        if student is None:
            return Response.fail(
                detail=f"No matching student found for {uuid}.",
                error=ErrorCode.NOT_FOUND,
                status_code=404,
            )

        return Response.succeed(data={"record": student})

    def _find(self, uuid: str) -> Student | None:
        return next((s for s in self._students if s.id == uuid), None)

    # === data manipulators ===

    def replace_all(self, students: list[Student]) -> Response:
        """
        Discards the current roster and installs `students` in the given order.

        Args:
            students (list[Student]): The replacement records, typically straight from `parse_csv()`.

        Returns:
            Response: Success with "count" (int) in `data`.

        Notes:
            - No validation beyond what the CSV codec already applied.
            - Persists the new roster.
        """
        self._students = list(students)
        self._commit()

        logger.info("Roster replaced with %d students", len(self._students))

        return Response.succeed(
            detail="Roster replaced.",
            data={"count": len(self._students)},
        )

    def add(self, data: dict[str, Any]) -> Response:
        """
        Creates a new `Student` from form data and places it at the front of the roster.

        Args:
            data (dict[str, Any]): Form fields keyed by `Student` attribute name. Missing fields take the form defaults.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the student was added.
                    - False if no full name was given.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if the full name is blank.
                - status_code (int | None):
                    - 200 on success
                    - 400 on failure
                - data (dict | None):
                    - On success, "record" (Student): the new student.

        Notes:
            - The ID is freshly generated and attendance starts empty; any `id` or `attendance` in `data` is ignored.
            - The grade is normalized.
            - Persists the roster on success.
        """
        full_name = str(data.get("full_name") or "").strip()

        if not full_name:
            return Response.fail(
                detail="A full name is required to add a student.",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        student = Student(
            id=generate_uuid(),
            full_name=full_name,
            timestamp=now_timestamp(),
            gender=GENDER_MALE,
            has_siblings=SIBLINGS_NO,
        )
        student.overwrite_fields({k: v for k, v in data.items() if k != "full_name"})

        self._students.insert(0, student)
        self._commit()

        return Response.succeed(
            detail="Student successfully added to the roster.",
            data={"record": student},
        )

    def update(self, uuid: str, data: dict[str, Any]) -> Response:
        """
        Overwrites the form fields of the student matched by `uuid`.

        Args:
            uuid (str): The unique ID of the student.
            data (dict[str, Any]): Form fields keyed by `Student` attribute name.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True unless `data` blanks the full name.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if "full_name" is given but blank.
                - data (dict | None):
                    - On success, "record" (Student | None): the updated student, or None if no student matched.

        Notes:
            - `id` and `attendance` are never overwritten; the grade is re-normalized.
            - An unknown ID is a silent no-op. The roster is still persisted.
            - A rejected update changes nothing and does not persist.
        """
        if "full_name" in data and not str(data["full_name"] or "").strip():
            return Response.fail(
                detail="A student's full name cannot be blank.",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        student = self._find(uuid)

        if student is not None:
            student.overwrite_fields(data)

        self._commit()

        return Response.succeed(
            detail="Student updated." if student else "No matching student; nothing changed.",
            data={"record": student},
        )

    def remove(self, uuid: str) -> Response:
        """
        Removes the student matched by `uuid`, along with their attendance.

        Args:
            uuid (str): The unique ID of the student.

        Returns:
            Response: Success in all cases; "removed" (bool) in `data` reports whether a student matched.

        Notes:
            - An unknown ID leaves the roster unchanged. The roster is still persisted.
        """
        before = len(self._students)
        self._students = [s for s in self._students if s.id != uuid]
        removed = len(self._students) != before

        self._commit()

        return Response.succeed(
            detail="Student removed." if removed else "No matching student; nothing changed.",
            data={"removed": removed},
        )

    def mark_attendance(self, uuid: str, date: str, status: str) -> Response:
        """
        Records `status` for the student matched by `uuid` on `date`, replacing any earlier status for that date.

        Args:
            uuid (str): The unique ID of the student.
            date (str): The `YYYY-MM-DD` attendance key.
            status (str): The attendance status, normally an `AttendanceStatus` value.

        Returns:
            Response: Success in all cases; "record" in `data` is the student, or None if no student matched.
        """
        student = self._find(uuid)

        if student is not None:
            student.mark_attendance(date, str(getattr(status, "value", status)))

        self._commit()

        return Response.succeed(data={"record": student})

    # === dunder methods ===

    def __len__(self) -> int:
        return len(self._students)

    def __iter__(self) -> Iterator[Student]:
        return iter(list(self._students))
