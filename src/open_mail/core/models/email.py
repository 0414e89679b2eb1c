"""Field kinds for email records.

Records stay open mappings, but every field name resolves to a kind so
renderers can dispatch on the kind instead of probing names.
"""

from enum import Enum
from typing import Any, Dict


class FieldKind(Enum):
    """How a field's value should be rendered."""

    IDENTIFIER = "identifier"
    ADDRESS = "address"
    SUBJECT = "subject"
    DATE = "date"
    READ_STATUS = "read_status"
    FLAG = "flag"
    BODY = "body"
    TEXT = "text"
    ATTACHMENTS = "attachments"
    OBJECT = "object"
    SCALAR = "scalar"


FIELD_KINDS: Dict[str, FieldKind] = {
    "id": FieldKind.IDENTIFIER,
    "threadId": FieldKind.IDENTIFIER,
    "accountId": FieldKind.IDENTIFIER,
    "from": FieldKind.ADDRESS,
    "to": FieldKind.ADDRESS,
    "cc": FieldKind.ADDRESS,
    "bcc": FieldKind.ADDRESS,
    "subject": FieldKind.SUBJECT,
    "date": FieldKind.DATE,
    "isRead": FieldKind.READ_STATUS,
    "isStarred": FieldKind.FLAG,
    "isFlagged": FieldKind.FLAG,
    "hasAttachments": FieldKind.FLAG,
    "bodyText": FieldKind.BODY,
    "bodyHtml": FieldKind.BODY,
    "folder": FieldKind.TEXT,
    "attachments": FieldKind.ATTACHMENTS,
}

FIELD_DISPLAY_NAMES: Dict[str, str] = {
    "id": "ID",
    "from": "From",
    "to": "To",
    "cc": "CC",
    "bcc": "BCC",
    "subject": "Subject",
    "date": "Date",
    "isRead": "Status",
    "isStarred": "Starred",
    "isFlagged": "Flagged",
    "hasAttachments": "Attachments",
    "folder": "Folder",
    "bodyText": "Body",
    "bodyHtml": "HTML",
    "threadId": "Thread",
    "accountId": "Account",
}

# Fields every stored email carries; used to validate selections when a
# page comes back empty.
EMAIL_FIELDS = (
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
    "hasAttachments",
    "attachments",
    "bodyText",
    "bodyHtml",
    "folder",
    "flags",
    "inReplyTo",
    "references",
    "threadId",
    "accountId",
)


def field_kind(name: str, value: Any) -> FieldKind:
    """Resolve the kind of a field from its name, then its value."""
    kind = FIELD_KINDS.get(name)
    is_container = isinstance(value, (dict, list, tuple))

    if kind is FieldKind.ATTACHMENTS and not is_container:
        return FieldKind.SCALAR
    if kind is not None:
        return kind
    if is_container:
        return FieldKind.OBJECT
    return FieldKind.SCALAR


def display_name(name: str) -> str:
    """Column header for a field; unknown fields are capitalised."""
    return FIELD_DISPLAY_NAMES.get(name) or name[:1].upper() + name[1:]
