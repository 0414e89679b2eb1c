"""Bare ID output, for piping into other commands."""

from typing import Sequence

from .base import FormatMeta, FormatOptions, Record


class IDsOnlyFormatter:
    """Space separated record IDs."""

    def format_list(
        self, records: Sequence[Record], meta: FormatMeta, options: FormatOptions
    ) -> str:
        return " ".join(
            "" if record.get("id") is None else str(record["id"]) for record in records
        )

    def format_detail(self, record: Record, options: FormatOptions) -> str:
        if not record or record.get("id") is None:
            return ""
        return str(record["id"])
