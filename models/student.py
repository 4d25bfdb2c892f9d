# models/student.py

"""
Represents one student on the training center roster.

Stores the registration-form fields (name, national ID, gender, grade, mobile,
siblings flag, nearest landmark) together with a unique ID assigned at creation.
All form fields are kept as plain strings; only the grade is normalized.

Includes functionality for:
- Tracking attendance by date
- Serializing to and from JSON-compatible dictionaries
- Overwriting form fields while preserving identity and attendance

Attendance is internally represented as a dictionary mapping `YYYY-MM-DD` strings
to status strings (e.g., "حاضر", "غائب"). A missing key means the student has not
been marked for that date.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from core.grades import normalize_grade

GENDER_MALE = "ذكر"
GENDER_FEMALE = "انثى"

SIBLINGS_YES = "نعم"
SIBLINGS_NO = "لا"


class AttendanceStatus(str, Enum):
    PRESENT = "حاضر"
    ABSENT = "غائب"


class Student:
    # form fields, in CSV column order, mapped to their serialized keys
    _field_keys: dict[str, str] = {
        "timestamp": "timestamp",
        "full_name": "fullName",
        "student_id": "studentId",
        "gender": "gender",
        "grade": "grade",
        "mobile": "mobile",
        "has_siblings": "hasSiblings",
        "nearest_landmark": "nearestLandmark",
    }

    def __init__(
        self,
        id: str,
        full_name: str,
        timestamp: str = "",
        student_id: str = "",
        gender: str = "",
        grade: str = "",
        mobile: str = "",
        has_siblings: str = "",
        nearest_landmark: str = "",
        attendance: dict[str, str] | None = None,
    ):
        self._id: str = id
        self._timestamp: str = timestamp
        self._full_name: str = full_name
        self._student_id: str = student_id
        self._gender: str = gender
        self._grade: str = normalize_grade(grade)
        self._mobile: str = mobile
        self._has_siblings: str = has_siblings
        self._nearest_landmark: str = nearest_landmark
        self._attendance: dict[str, str] = dict(attendance or {})

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def timestamp(self) -> str:
        return self._timestamp

    @timestamp.setter
    def timestamp(self, timestamp: str) -> None:
        self._timestamp = timestamp

    @property
    def full_name(self) -> str:
        return self._full_name

    @full_name.setter
    def full_name(self, full_name: str) -> None:
        self._full_name = full_name

    @property
    def student_id(self) -> str:
        return self._student_id

    @student_id.setter
    def student_id(self, student_id: str) -> None:
        self._student_id = student_id

    @property
    def gender(self) -> str:
        return self._gender

    @gender.setter
    def gender(self, gender: str) -> None:
        self._gender = gender

    @property
    def grade(self) -> str:
        return self._grade

    @grade.setter
    def grade(self, grade: str) -> None:
        self._grade = normalize_grade(grade)

    @property
    def mobile(self) -> str:
        return self._mobile

    @mobile.setter
    def mobile(self, mobile: str) -> None:
        self._mobile = mobile

    @property
    def has_siblings(self) -> str:
        return self._has_siblings

    @has_siblings.setter
    def has_siblings(self, has_siblings: str) -> None:
        self._has_siblings = has_siblings

    @property
    def nearest_landmark(self) -> str:
        return self._nearest_landmark

    @nearest_landmark.setter
    def nearest_landmark(self, nearest_landmark: str) -> None:
        self._nearest_landmark = nearest_landmark

    # === persistence and import ===

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"id": self._id}

        for field, key in self._field_keys.items():
            data[key] = getattr(self, field)

        data["attendance"] = dict(self._attendance)

        return data

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        """
        Builds a `Student` from its serialized form.

        Args:
            data (dict): A dictionary using the interchange keys (`fullName`, `studentId`, ...).

        Returns:
            The deserialized `Student`.

        Raises:
            ValueError: If `id` or `fullName` is missing or `attendance` is not a mapping.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a student dictionary, got {type(data).__name__}.")

        if not data.get("id") or not data.get("fullName"):
            raise ValueError("Student record requires both 'id' and 'fullName'.")

        attendance_raw = data.get("attendance") or {}

        if not isinstance(attendance_raw, dict):
            raise ValueError("Student attendance must be a mapping of dates to statuses.")

        fields = {
            field: str(data.get(key) or "")
            for field, key in cls._field_keys.items()
        }

        return cls(
            id=str(data["id"]),
            attendance={
                str(date): str(status) for date, status in attendance_raw.items()
            },
            **fields,
        )

    def overwrite_fields(self, data: dict[str, Any]) -> None:
        """
        Copies form fields from `data` onto this student.

        Args:
            data (dict[str, Any]): Field values keyed by attribute name (e.g., "full_name").

        Notes:
            - `id` and `attendance` are never taken from `data`.
            - Unknown keys are ignored; values are coerced to strings.
            - The grade is re-normalized through the `grade` setter.
        """
        for field in self._field_keys:
            if field in data:
                value = data[field]
                setattr(self, field, "" if value is None else str(value))

    def searchable_values(self) -> list[str]:
        """
        Returns the string form of every field, including the attendance map.

        The attendance map contributes its `str()` form, so a search for a date or a
        status also matches.
        """
        values = [self._id]
        values.extend(getattr(self, field) for field in self._field_keys)
        values.append(str(self._attendance))
        return values

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._full_name}, {self._grade}, {self._mobile})"

    def __str__(self) -> str:
        return f"STUDENT: {self._full_name} - {self._grade} (ID: {self._student_id})"

    # === data accessors ===

    # --- attendance methods ---

    @property
    def attendance_records(self) -> dict[str, str]:
        return self._attendance.copy()

    def attendance_on(self, date: str) -> str:
        return self._attendance.get(date, "")

    def was_present_on(self, date: str) -> bool:
        return self.attendance_on(date) == AttendanceStatus.PRESENT.value

    def was_absent_on(self, date: str) -> bool:
        return self.attendance_on(date) == AttendanceStatus.ABSENT.value

    def is_attendance_marked(self, date: str) -> bool:
        return bool(self._attendance.get(date))

    # === data manipulators ===

    # --- attendance methods ---

    def mark_attendance(self, date: str, status: str) -> None:
        self._attendance[date] = status
