"""Text helpers shared by the output formatters."""

import re
from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

ELLIPSIS = "..."
TABLE_DATE_FORMAT = "%Y-%m-%d %H:%M"
DATE_ONLY_FORMAT = "%Y-%m-%d"

ISO_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}T")


def truncate(text: str, length: int) -> str:
    """Shorten text to at most ``length`` characters, ending in an ellipsis."""
    if len(text) <= length:
        return text
    if length <= len(ELLIPSIS):
        return text[:length]
    return text[: length - len(ELLIPSIS)] + ELLIPSIS


def escape_markdown(text: str) -> str:
    """Escape pipe characters so text cannot break Markdown structure."""
    if not text:
        return ""
    return text.replace("|", "\\|")


def escape_markdown_table(text: str) -> str:
    """Escape pipes and collapse newlines for a Markdown table cell."""
    if not text:
        return ""
    return text.replace("|", "\\|").replace("\r\n", " ").replace("\n", " ")


def _coerce_datetime(value: Any) -> Optional[datetime | date]:
    """Best-effort conversion of a stored date value."""
    if isinstance(value, (datetime, date)):
        return value

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        # Numeric dates are epoch milliseconds.
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            return None

    if isinstance(value, str):
        candidate = value.strip()
        if candidate.endswith("Z"):
            candidate = candidate[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(candidate)
        except ValueError:
            return _parse_rfc2822(value)
        if len(candidate) == len("YYYY-MM-DD"):
            return parsed.date()
        return parsed

    return None


def _parse_rfc2822(value: str) -> Optional[datetime]:
    """Parse an RFC 2822 header date such as ``Mon, 15 Jan 2024 10:00:00 +0000``."""
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None


def format_date(value: Any) -> str:
    """Compact date for table cells: ``YYYY-MM-DD HH:MM``.

    Date-only values keep the ``YYYY-MM-DD`` form. Unparseable values are
    shown as given.
    """
    if value is None or value == "":
        return ""

    parsed = _coerce_datetime(value)
    if parsed is None:
        return str(value)
    if isinstance(parsed, datetime):
        return parsed.strftime(TABLE_DATE_FORMAT)
    return parsed.strftime(DATE_ONLY_FORMAT)


def format_date_iso(value: Any) -> str:
    """ISO-8601 date for detail views.

    ISO datetime strings are returned unchanged.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, str) and ISO_DATETIME.match(value):
        return value

    parsed = _coerce_datetime(value)
    if parsed is None:
        return str(value)
    return parsed.isoformat()


def format_file_size(size: Any) -> str:
    """Human readable byte count (B, KB, MB)."""
    try:
        size = float(size)
    except (TypeError, ValueError):
        return "unknown size"

    if size < 1024:
        return f"{int(size)} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"
