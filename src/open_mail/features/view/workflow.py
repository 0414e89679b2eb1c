"""View workflow orchestration."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from open_mail.core.fields import resolve_field_selection, validate_field_selection
from open_mail.core.models.email import EMAIL_FIELDS
from open_mail.core.pagination import (
    PaginationWindow,
    calculate_range,
    parse_pagination,
    total_pages,
)
from open_mail.core.store import EmailStore
from open_mail.formatters import FormatMeta, FormatOptions, OutputFormat, get_formatter, resolve_format
from open_mail.utils.errors import EmailNotFoundError, ErrorHandler
from open_mail.utils.logging import async_log_call, get_logger

from .filters import EmailFilters

logger = get_logger(__name__)


@dataclass
class RenderedView:
    """Rendered output plus what an HTTP or CLI layer needs to emit it."""

    text: str
    output_format: OutputFormat
    count: int
    meta: FormatMeta = field(default_factory=dict)
    invalid_fields: List[str] = field(default_factory=list)

    @property
    def content_type(self) -> str:
        return self.output_format.content_type


def build_list_meta(
    window: PaginationWindow,
    total: int,
    unread: Optional[int] = None,
    folder: Optional[str] = None,
) -> FormatMeta:
    """Aggregate metadata for one page of a list view."""
    range_info = calculate_range(window.offset, window.limit, total)

    meta: FormatMeta = {"total": total}
    if unread is not None:
        meta["unread"] = unread
    if folder:
        meta["folder"] = folder
    meta.update(
        {
            "page": window.page,
            "totalPages": total_pages(total, window.limit),
            "limit": window.limit,
            "offset": window.offset,
            "showing": range_info.showing,
        }
    )

    return meta


class ViewWorkflow:
    """Fetches records from a store and renders them."""

    def __init__(self, store: EmailStore):
        self.store = store

    @async_log_call
    @ErrorHandler.wrap
    async def list_emails(
        self,
        folder: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        page: Optional[int] = None,
        fields: Optional[str] = None,
        fmt: Union[str, OutputFormat] = OutputFormat.MARKDOWN,
        filters: Optional[EmailFilters] = None,
    ) -> RenderedView:
        """Render one page of a folder."""
        window = parse_pagination(limit, offset, page)
        query = filters.to_query() if filters and filters.has_filters() else None

        records = await self.store.find_by_folder(folder, window.limit, window.offset, query)
        total = await self.store.count_by_folder(folder, query)
        unread = await self.store.count_unread(folder)

        meta = build_list_meta(window, total, unread=unread, folder=folder)
        logger.debug(f"Listing {len(records)} of {total} emails", extra={"context": meta})

        return self._render_list(records, meta, fields, fmt, view="list")

    @async_log_call
    @ErrorHandler.wrap
    async def search_emails(
        self,
        keyword: str,
        folder: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        page: Optional[int] = None,
        fields: Optional[str] = None,
        fmt: Union[str, OutputFormat] = OutputFormat.MARKDOWN,
    ) -> RenderedView:
        """Render one page of search results."""
        window = parse_pagination(limit, offset, page)

        records = await self.store.search(keyword, window.limit, window.offset, folder)
        total = await self.store.count_search(keyword, folder)
        unread = await self.store.count_search(keyword, folder, {"isRead": False})

        meta = build_list_meta(window, total, unread=unread, folder=f"Search: {keyword}")

        return self._render_list(records, meta, fields, fmt, view="search")

    @async_log_call
    @ErrorHandler.wrap
    async def read_email(
        self,
        email_id: Any,
        fields: Optional[str] = None,
        fmt: Union[str, OutputFormat] = OutputFormat.MARKDOWN,
    ) -> RenderedView:
        """Render a single email."""
        output_format = resolve_format(fmt)

        record = await self.store.find_by_id(email_id)
        if record is None:
            raise EmailNotFoundError(
                f"Email {email_id} not found",
                details={"email_id": email_id},
            )

        invalid = self._check_fields(fields, "detail", [record])
        text = get_formatter(output_format).format_detail(record, FormatOptions(fields=fields))

        return RenderedView(
            text=text,
            output_format=output_format,
            count=1,
            invalid_fields=invalid,
        )

    ## Helpers

    def _render_list(
        self,
        records: Sequence[Dict[str, Any]],
        meta: FormatMeta,
        fields: Optional[str],
        fmt: Union[str, OutputFormat],
        view: str,
    ) -> RenderedView:
        output_format = resolve_format(fmt)
        invalid = self._check_fields(fields, view, records)

        text = get_formatter(output_format).format_list(
            records, meta, FormatOptions(fields=fields)
        )

        return RenderedView(
            text=text,
            output_format=output_format,
            count=len(records),
            meta=meta,
            invalid_fields=invalid,
        )

    @staticmethod
    def _check_fields(
        fields: Optional[str], view: str, records: Sequence[Dict[str, Any]]
    ) -> List[str]:
        """Report selected fields no record carries. Advisory only."""
        if not fields:
            return []

        available = set(EMAIL_FIELDS)
        for record in records:
            available.update(record.keys())

        invalid = validate_field_selection(resolve_field_selection(fields, view), available)
        if invalid:
            logger.warning(f"Unknown fields ignored: {', '.join(invalid)}")

        return invalid
