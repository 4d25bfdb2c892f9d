# services/import_service.py

"""
File import boundary for roster CSV files.

Validates the file type, decodes the file as UTF-8, parses it, and only then replaces
the roster. Any failure leaves the roster exactly as it was.
"""

from __future__ import annotations

import logging

from core.csv_codec import EmptyInputError, parse_csv
from core.response import ErrorCode, Response
from models.roster import Roster

logger = logging.getLogger(__name__)

INVALID_FILE_TYPE_MESSAGE = "الرجاء اختيار ملف CSV صالح"
EMPTY_FILE_MESSAGE = "ملف CSV فارغ أو غير منسق بشكل صحيح"
READ_ERROR_MESSAGE = "حدث خطأ أثناء قراءة الملف"
IMPORT_SUCCESS_MESSAGE = "تم استيراد بيانات الطلاب بنجاح!"


def is_csv_file(path: str, mime_type: str | None = None) -> bool:
    return mime_type == "text/csv" or path.lower().endswith(".csv")


def import_roster_text(roster: Roster, text: str) -> Response:
    """
    Parses CSV text and, if it yields students, replaces the roster with them.

    Args:
        roster (Roster): The active roster.
        text (str): Decoded CSV text.

    Returns:
        Response: A structured response with the following contract:
            - success (bool):
                - True if the roster was replaced.
                - False if the text yielded no students.
            - detail (str | None): A user-facing message.
            - error (ErrorCode | str | None):
                - `ErrorCode.EMPTY_INPUT` if no rows carried a full name.
            - data (dict | None):
                - On success, "count" (int): the number of imported students.
    """
    try:
        students = parse_csv(text)

    except EmptyInputError:
        logger.warning("Import rejected: CSV contained no student rows")

        return Response.fail(
            detail=EMPTY_FILE_MESSAGE,
            error=ErrorCode.EMPTY_INPUT,
        )

    roster.replace_all(students)

    return Response.succeed(
        detail=IMPORT_SUCCESS_MESSAGE,
        data={"count": len(students)},
    )


def import_roster_file(
    roster: Roster, path: str, mime_type: str | None = None
) -> Response:
    """
    Reads a CSV file from disk and imports it into the roster.

    Args:
        roster (Roster): The active roster.
        path (str): Path to the selected file.
        mime_type (str | None): The file's reported MIME type, if known.

    Returns:
        Response: As `import_roster_text()`, plus:
            - `ErrorCode.UNSUPPORTED_FILE_TYPE` if the file is not `text/csv` and does not end in `.csv`.
            - `ErrorCode.NOT_FOUND` if the file does not exist.
            - `ErrorCode.INVALID_INPUT` if the file cannot be read or decoded as UTF-8.

    Notes:
        - The roster is only replaced on success.
    """
    if not is_csv_file(path, mime_type):
        return Response.fail(
            detail=INVALID_FILE_TYPE_MESSAGE,
            error=ErrorCode.UNSUPPORTED_FILE_TYPE,
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()

    except FileNotFoundError:
        return Response.fail(
            detail=f"{READ_ERROR_MESSAGE}: {path}",
            error=ErrorCode.NOT_FOUND,
            status_code=404,
        )

    except (OSError, UnicodeDecodeError):
        logger.exception("Failed to read import file %s", path)

        return Response.fail(
            detail=READ_ERROR_MESSAGE,
            error=ErrorCode.INVALID_INPUT,
        )

    response = import_roster_text(roster, text)

    if response.success:
        logger.info("Imported %d students from %s", response.data["count"], path)

    return response
