# services/export_service.py

"""
Exports the current roster view as a CSV download.

Only the records the operator is currently looking at (after grade filter and search)
are exported, never the full roster. Pagination does not limit the export.
"""

from __future__ import annotations

import datetime
import logging
import os

from core.csv_codec import serialize_csv
from core.formatters import format_export_filename
from core.response import ErrorCode, Response
from models.student import Student

logger = logging.getLogger(__name__)


def export_current_view(
    filtered_records: list[Student],
    selected_date: str,
    today: datetime.date | None = None,
) -> tuple[str, str]:
    """
    Renders the filtered records as export CSV text.

    Args:
        filtered_records (list[Student]): The filtered and searched records, in view order.
        selected_date (str): The `YYYY-MM-DD` date whose attendance fills the status column.
        today (datetime.date | None): The export date used for the filename. Defaults to the current date.

    Returns:
        A `(filename, csv_text)` tuple. The filename is `DD_MM_students_registrations.csv`.
    """
    filename = format_export_filename(today or datetime.date.today())
    return filename, serialize_csv(filtered_records, selected_date)


def write_export(filename: str, csv_text: str, dir_path: str) -> Response:
    """
    Writes exported CSV text to `dir_path`, overwriting any file of the same name.

    Returns:
        Response: A structured response with the following contract:
            - success (bool): True if the file was written.
            - error (ErrorCode | str | None): `ErrorCode.INTERNAL_ERROR` if the write failed.
            - data (dict | None): On success, "path" (str): the written file path.
    """
    path = os.path.join(dir_path, filename)

    try:
        os.makedirs(dir_path, exist_ok=True)

        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(csv_text)

    except OSError as e:
        logger.exception("Failed to write export file %s", path)

        return Response.fail(
            detail=f"Failed to write export file: {e}",
            error=ErrorCode.INTERNAL_ERROR,
            status_code=500,
        )

    logger.info("Exported roster view to %s", path)

    return Response.succeed(
        detail=f"Exported to {path}.",
        data={"path": path},
    )
