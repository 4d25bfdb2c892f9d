# core/csv_codec.py

"""
Reads and writes the registration CSV format.

The import format comes from an online registration form export: a header row of
fixed Arabic labels followed by one row per student. Fields may be double-quoted,
but the nearest-landmark answer is frequently left unquoted even when it contains
commas. To tolerate that, the landmark column is treated as an overflow column:
its value is rebuilt from every token between its position and the end of the row.
The landmark column therefore has to be the last declared column; any column placed
after it is swallowed into the landmark text.

The export format always quotes every field, appends an attendance column for the
selected date, and starts with a UTF-8 byte-order mark so spreadsheet programs pick
the right encoding.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Callable

import config
from core.grades import normalize_grade
from core.utils import generate_uuid
from models.student import Student


class EmptyInputError(ValueError):
    """Raised when CSV text yields no student rows."""


def _fix_siblings_flag(value: str) -> str:
    # Cyrillic "н" shows up in place of Arabic "ن" in some form answers
    return value.replace("н", "ن")


# header label -> (Student attribute, value cleaner)
_COLUMN_MAP: dict[str, tuple[str, Callable[[str], str]]] = {
    config.HEADER_TIMESTAMP: ("timestamp", str),
    config.HEADER_FULL_NAME: ("full_name", str),
    config.HEADER_STUDENT_ID: ("student_id", str),
    config.HEADER_GENDER: ("gender", str),
    config.HEADER_GRADE: ("grade", normalize_grade),
    config.HEADER_MOBILE: ("mobile", str),
    config.HEADER_HAS_SIBLINGS: ("has_siblings", _fix_siblings_flag),
}


def tokenize_line(line: str) -> list[str]:
    """
    Splits one CSV data line into trimmed field values.

    Args:
        line (str): A single line of CSV text without its line terminator.

    Returns:
        The list of field values.

    Notes:
        - A double quote toggles quoted mode unless the previous character is a backslash.
        - Commas separate fields only outside quoted mode.
        - Toggling quotes are dropped; escaped quotes (`\\"`) are kept with their backslash.
    """
    values = []
    current = []
    in_quotes = False

    for i, char in enumerate(line):
        if char == '"' and (i == 0 or line[i - 1] != "\\"):
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    values.append("".join(current).strip())

    return values


def _split_lines(text: str) -> list[str]:
    return [line.rstrip("\r") for line in text.strip().split("\n")]


def _parse_headers(header_line: str) -> list[str]:
    headers = [header.strip() for header in header_line.split(",")]

    if headers:
        headers[0] = headers[0].lstrip(config.CSV_BOM).strip()

    return headers


def parse_row(headers: list[str], line: str) -> Student:
    """
    Builds a `Student` from one data line, using the header labels for field positions.

    Args:
        headers (list[str]): The trimmed header labels.
        line (str): The raw data line.

    Returns:
        A new `Student` with a fresh ID and an empty attendance map. The full name may be empty.
    """
    values = tokenize_line(line)
    fields: dict[str, str] = {}

    for index, header in enumerate(headers):
        value = values[index] if index < len(values) else ""

        if header == config.HEADER_NEAREST_LANDMARK:
            fields["nearest_landmark"] = ", ".join(values[index:]).replace('"', "")

        elif header in _COLUMN_MAP:
            field, clean = _COLUMN_MAP[header]
            fields[field] = clean(value)

    full_name = fields.pop("full_name", "")

    return Student(id=generate_uuid(), full_name=full_name, **fields)


def parse_csv(text: str) -> list[Student]:
    """
    Parses registration CSV text into `Student` records.

    Args:
        text (str): The decoded CSV file contents.

    Returns:
        The parsed students, in file order.

    Raises:
        EmptyInputError: If the text has no data rows or no row carries a full name.

    Notes:
        - Rows with an empty full name are dropped without error.
        - The grade column is normalized; the siblings column has the Cyrillic "н" repaired.
    """
    lines = _split_lines(text or "")
    headers = _parse_headers(lines[0])

    students = [parse_row(headers, line) for line in lines[1:]]
    students = [student for student in students if student.full_name]

    if not students:
        raise EmptyInputError("CSV input contains no student rows with a full name.")

    return students


def _quote(value: object) -> str:
    text = str(value).replace('"', '""')
    return f'"{text}"'


def serialize_csv(records: Iterable[Student], attendance_date_key: str) -> str:
    """
    Renders students as export CSV text.

    Args:
        records (Iterable[Student]): The students to write, in order.
        attendance_date_key (str): The `YYYY-MM-DD` date whose attendance status fills the last column.

    Returns:
        The CSV text, prefixed with a byte-order mark, rows joined by newlines.
    """
    headers = [
        *config.CSV_HEADERS,
        config.ATTENDANCE_HEADER_TEMPLATE.format(date=attendance_date_key),
    ]

    rows = [",".join(headers)]

    for student in records:
        cells = [
            student.timestamp,
            student.full_name,
            student.student_id,
            student.gender,
            student.grade,
            student.mobile,
            student.has_siblings,
            student.nearest_landmark,
            student.attendance_on(attendance_date_key),
        ]
        rows.append(",".join(_quote(cell) for cell in cells))

    return config.CSV_BOM + "\n".join(rows)
