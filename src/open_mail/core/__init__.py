"""Pure record-shaping helpers: field selection, pagination, redaction."""

from .fields import (
    WILDCARD,
    FieldSelection,
    get_available_fields,
    get_default_field_selection,
    parse_field_selection,
    resolve_field_selection,
    select_fields,
    validate_field_selection,
)
from .pagination import (
    DEFAULT_LIMIT,
    PaginationWindow,
    RangeInfo,
    calculate_range,
    parse_pagination,
    total_pages,
)

__all__ = [
    "WILDCARD",
    "DEFAULT_LIMIT",
    "FieldSelection",
    "PaginationWindow",
    "RangeInfo",
    "calculate_range",
    "get_available_fields",
    "get_default_field_selection",
    "parse_field_selection",
    "parse_pagination",
    "resolve_field_selection",
    "select_fields",
    "total_pages",
    "validate_field_selection",
]
