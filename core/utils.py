# core/utils.py

"""
Repository for program-wide utilities.
"""

import datetime
import re
import uuid


def generate_uuid() -> str:
    return str(uuid.uuid4())


def digits_only(text: str) -> str:
    return re.sub(r"\D", "", text or "")


def today_iso(today: datetime.date | None = None) -> str:
    """Returns a `YYYY-MM-DD` attendance key for the given (or current) date."""
    return (today or datetime.date.today()).isoformat()


def now_timestamp() -> str:
    return datetime.datetime.now().strftime("%Y/%m/%d %H:%M:%S")
