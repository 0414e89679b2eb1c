"""Markdown output: a summary table for lists, a field sheet for one email."""

import json
from typing import Any, Callable, Dict, List, Mapping, Sequence

from open_mail.core.fields import resolve_field_selection, select_fields
from open_mail.core.models.email import FieldKind, display_name, field_kind
from open_mail.utils.text import (
    escape_markdown,
    escape_markdown_table,
    format_date,
    format_date_iso,
    format_file_size,
    truncate,
)

from .base import FormatMeta, FormatOptions, Record

EMPTY_LIST_MESSAGE = "No results found."
DEFAULT_TITLE = "Results"
NO_CONTENT = "(No content)"

ADDRESS_WIDTH = 20
SUBJECT_WIDTH = 30
BODY_WIDTH = 50
SCALAR_WIDTH = 30

DETAIL_FIELD_ORDER = (
    "id",
    "from",
    "to",
    "cc",
    "bcc",
    "subject",
    "date",
    "isRead",
    "isStarred",
    "isFlagged",
    "attachments",
    "bodyText",
    "bodyHtml",
)

DETAIL_LABELS = {
    "id": "ID",
    "from": "From",
    "to": "To",
    "cc": "CC",
    "bcc": "BCC",
    "subject": "Subject",
    "date": "Date",
    "isRead": "Status",
    "isStarred": "Starred",
    "isFlagged": "Flagged (Important)",
    "attachments": "Attachments",
}


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _render_object(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


_CELL_RENDERERS: Dict[FieldKind, Callable[[Any], str]] = {
    FieldKind.IDENTIFIER: _scalar_text,
    FieldKind.ADDRESS: lambda value: truncate(str(value), ADDRESS_WIDTH),
    FieldKind.SUBJECT: lambda value: truncate(str(value), SUBJECT_WIDTH),
    FieldKind.DATE: format_date,
    FieldKind.READ_STATUS: lambda value: "Read" if value else "Unread",
    FieldKind.FLAG: lambda value: "Yes" if value else "No",
    FieldKind.BODY: lambda value: truncate(str(value), BODY_WIDTH),
    FieldKind.TEXT: str,
    FieldKind.ATTACHMENTS: _render_object,
    FieldKind.OBJECT: _render_object,
    FieldKind.SCALAR: lambda value: truncate(_scalar_text(value), SCALAR_WIDTH),
}


def render_cell(field: str, value: Any) -> str:
    """Render one table cell, escaped for Markdown."""
    if value is None:
        return ""
    renderer = _CELL_RENDERERS[field_kind(field, value)]
    return escape_markdown_table(renderer(value))


class MarkdownFormatter:
    """Renders Markdown tables and detail sheets."""

    def format_list(
        self, records: Sequence[Record], meta: FormatMeta, options: FormatOptions
    ) -> str:
        if not records:
            return EMPTY_LIST_MESSAGE

        selection = resolve_field_selection(options.fields, "list")
        projected = [select_fields(record, selection) for record in records]
        columns = selection.fields_for(projected[0])

        lines = [f"## {self._header(meta, len(records))}", ""]
        lines.extend(self._table(columns, projected))

        if meta.get("totalPages"):
            lines.append("")
            lines.append(
                f"Page {meta.get('page') or 1} of {meta['totalPages']} "
                f"({meta.get('total', len(records))} total emails)"
            )

        return "\n".join(lines)

    def format_detail(self, record: Record, options: FormatOptions) -> str:
        selection = resolve_field_selection(options.fields, "detail")
        projected = select_fields(record, selection)

        lines = ["## Email Details", ""]

        for field in DETAIL_FIELD_ORDER:
            value = projected.get(field)
            if value is None:
                continue
            lines.extend(self._detail_lines(field, value))

        if "bodyText" in projected or "bodyHtml" in projected:
            body = projected.get("bodyText") or projected.get("bodyHtml") or ""
            lines.extend(["", "### Body", "", str(body) or NO_CONTENT])

        return "\n".join(lines)

    ## List helpers

    @staticmethod
    def _header(meta: FormatMeta, count: int) -> str:
        title = meta.get("folder") or DEFAULT_TITLE
        unread = meta.get("unread")
        total = meta.get("total")
        summary = (
            f"{unread if unread is not None else 0} unread, "
            f"{total if total is not None else count} total"
        )

        header = f"{title} ({summary})"
        if meta.get("showing"):
            header = f"{header} - Showing {meta['showing']}"
        return header

    @staticmethod
    def _table(columns: List[str], rows: List[Dict[str, Any]]) -> List[str]:
        headers = [display_name(column) for column in columns]
        lines = [
            "|" + "|".join(f" {header} " for header in headers) + "|",
            "|" + "|".join("-" * (len(header) + 2) for header in headers) + "|",
        ]

        for row in rows:
            cells = [render_cell(column, row.get(column)) for column in columns]
            lines.append("|" + "|".join(f" {cell} " for cell in cells) + "|")

        return lines

    ## Detail helpers

    def _detail_lines(self, field: str, value: Any) -> List[str]:
        label = DETAIL_LABELS.get(field)

        if field == "id":
            return [f"- **{label}:** {escape_markdown(str(value))}"]
        if field in ("from", "to", "cc", "bcc", "subject"):
            return [f"- **{label}:** {escape_markdown(str(value))}"]
        if field == "date":
            return [f"- **{label}:** {format_date_iso(value)}"]
        if field == "isRead":
            return [f"- **{label}:** {'Read' if value else 'Unread'}"]
        if field in ("isStarred", "isFlagged"):
            return [f"- **{label}:** Yes"] if value else []
        if field == "attachments":
            return self._attachment_lines(value)

        # Body fields are rendered in their own section.
        return []

    @staticmethod
    def _attachment_lines(attachments: Any) -> List[str]:
        if not isinstance(attachments, (list, tuple)) or not attachments:
            return []

        lines = [f"- **{DETAIL_LABELS['attachments']}:** {len(attachments)}"]
        for attachment in attachments:
            if isinstance(attachment, Mapping):
                filename = attachment.get("filename") or "unnamed"
                size = format_file_size(attachment.get("size"))
            else:
                filename, size = str(attachment), "unknown size"
            lines.append(f"  - {escape_markdown(str(filename))} ({size})")

        return lines
