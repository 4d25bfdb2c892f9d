# core/formatters.py

# all pure utilities & date helpers
# must never import from models!

import datetime

import config

# === generic text formatters ===


def format_banner_text(title: str, width: int = 40) -> str:
    line = "=" * width
    centered_title = f"{title:^{width}}"

    return f"{line}\n{centered_title}\n{line}"


def format_page_indicator(page: int, page_count: int) -> str:
    return f"صفحة {page} من {page_count}"


# === date formatters ===


def format_export_filename(today: datetime.date) -> str:
    """Day and month only, so a second export on the same day reuses the name."""
    return f"{today.day:02d}_{today.month:02d}_{config.EXPORT_FILENAME_SUFFIX}"


def format_class_date_long(date_iso: str) -> str:
    class_date = datetime.date.fromisoformat(date_iso)
    return f"{class_date.strftime('%A, %B %d, %Y')}"
