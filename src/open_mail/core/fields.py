"""Field selection: parse, validate and apply include/exclude lists.

Selection strings look like:

    ""  or "*"        every field
    "id,from,subject" exactly these fields, in this order
    "*,^body,^raw"    every field except body and raw
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

WILDCARD = "*"
EXCLUDE_PREFIX = "^"

DEFAULT_LIST_FIELDS = ("id", "from", "subject", "date", "isRead")
DEFAULT_THREAD_FIELDS = ("id", "subject", "participants", "lastDate", "messageCount")


@dataclass(frozen=True)
class FieldSelection:
    """Which fields of a record to keep."""

    include: Union[Tuple[str, ...], str] = WILDCARD
    exclude: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_wildcard(self) -> bool:
        return self.include == WILDCARD

    def fields_for(self, record: Mapping[str, Any]) -> List[str]:
        """Ordered column names this selection yields for a record."""
        if self.is_wildcard:
            return [name for name in record if name not in self.exclude]
        return list(self.include)


def parse_field_selection(raw: Optional[str]) -> FieldSelection:
    """Parse a selection string into a FieldSelection.

    Never fails. A bare ``*`` after explicit names discards those names,
    while ``^name`` exclusions keep accumulating across the whole string.
    """
    if not raw or raw == WILDCARD:
        return FieldSelection()

    tokens = [token.strip() for token in raw.split(",")]
    include: List[str] = []
    exclude: List[str] = []
    wildcard = False

    for token in tokens:
        if not token:
            continue
        if token.startswith(EXCLUDE_PREFIX):
            exclude.append(token[len(EXCLUDE_PREFIX):])
        elif token == WILDCARD:
            wildcard = True
            include = []
        elif not wildcard:
            include.append(token)

    if wildcard:
        return FieldSelection(WILDCARD, tuple(exclude))

    return FieldSelection(tuple(include), tuple(exclude))


def validate_field_selection(
    selection: FieldSelection, available_fields: Iterable[str]
) -> List[str]:
    """Return selected names that are not in ``available_fields``.

    Include names come first, then exclude names, each in encounter order.
    The wildcard itself is never reported.
    """
    known = set(available_fields)
    invalid: List[str] = []

    if not selection.is_wildcard:
        invalid.extend(name for name in selection.include if name not in known)

    invalid.extend(name for name in selection.exclude if name not in known)

    return invalid


def select_fields(record: Mapping[str, Any], selection: FieldSelection) -> Dict[str, Any]:
    """Project a record onto a selection without touching the source."""
    if selection.is_wildcard:
        result = dict(record)
        for name in selection.exclude:
            result.pop(name, None)
        return result

    return {name: record[name] for name in selection.include if name in record}


def get_available_fields(record: Mapping[str, Any]) -> List[str]:
    """List the field names present on a record."""
    return list(record.keys())


def get_default_field_selection(view: str) -> FieldSelection:
    """Default selection for a named view (list, search, detail, read, thread)."""
    if view in ("list", "search"):
        return FieldSelection(DEFAULT_LIST_FIELDS)
    if view == "thread":
        return FieldSelection(DEFAULT_THREAD_FIELDS)
    return FieldSelection()


def resolve_field_selection(fields: Optional[str], view: str) -> FieldSelection:
    """Parse ``fields`` when given, else fall back to the view default."""
    if fields:
        return parse_field_selection(fields)
    return get_default_field_selection(view)
