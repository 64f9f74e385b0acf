"""Map calendar dates to date-folder segment names."""

import re
from datetime import date, datetime

from daily_folder.config import DATE_NAME_PATTERN
from daily_folder.models.node import DatePath

_DATE_RE = re.compile(DATE_NAME_PATTERN)


def derive_path(day: date, root_label: str) -> DatePath:
    """Derive the root, year, year-month and date segment names for a day.

    Args:
        day: The calendar date.
        root_label: Name of the top-level collection.

    Returns:
        DatePath such as ("Daily Folder", "2025", "2025-03", "2025-03-07").
    """
    if not root_label:
        msg = "Root label must not be empty"
        raise ValueError(msg)

    year = f"{day.year:04d}"
    month = f"{year}-{day.month:02d}"
    return DatePath(root=root_label, year=year, month=month, day=f"{month}-{day.day:02d}")


def parse_date(text: str) -> date:
    """Parse a YYYY-MM-DD string, raising ValueError for anything else."""
    if not _DATE_RE.fullmatch(text):
        msg = f"Invalid date format '{text}'. Expected YYYY-MM-DD."
        raise ValueError(msg)
    return datetime.strptime(text, "%Y-%m-%d").date()


def format_date(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"
