"""Structured JSON output for API and scripting consumers."""

import json
from datetime import date, datetime
from typing import Any, Dict, Sequence

from open_mail.core.fields import resolve_field_selection, select_fields
from open_mail.core.redaction import sanitize_record

from .base import FormatMeta, FormatOptions, Record

JSON_INDENT = 2


def _json_default(value: Any) -> Any:
    """Serialise values the json module does not handle natively."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


class JSONFormatter:
    """Renders ``{"data": ..., "meta": ...}`` documents."""

    def format_list(
        self, records: Sequence[Record], meta: FormatMeta, options: FormatOptions
    ) -> str:
        selection = resolve_field_selection(options.fields, "list")
        data = [sanitize_record(select_fields(record, selection)) for record in records]

        return self._dump({"data": data, "meta": dict(meta)})

    def format_detail(self, record: Record, options: FormatOptions) -> str:
        selection = resolve_field_selection(options.fields, "detail")
        data = sanitize_record(select_fields(record, selection))

        return self._dump({"data": data})

    @staticmethod
    def _dump(document: Dict[str, Any]) -> str:
        return json.dumps(
            document,
            indent=JSON_INDENT,
            ensure_ascii=False,
            default=_json_default,
        )
