"""Email filtering logic."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass
class EmailFilters:
    """Email filtering criteria."""

    flagged: Optional[bool] = None
    unread: Optional[bool] = None
    has_attachments: bool = False

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "EmailFilters":
        """Create filters from parsed command arguments."""
        flagged = None
        if args.get("flagged"):
            flagged = True
        elif args.get("unflagged"):
            flagged = False

        unread = None
        if args.get("unread"):
            unread = True
        elif args.get("read"):
            unread = False

        return cls(
            flagged=flagged,
            unread=unread,
            has_attachments=bool(args.get("with_attachments")),
        )

    def has_filters(self) -> bool:
        """Check if any filters are active."""
        return any(
            [
                self.flagged is not None,
                self.unread is not None,
                self.has_attachments,
            ]
        )

    def to_query(self) -> Dict[str, Any]:
        """Convert to store query filters keyed by record field."""
        query = {}

        if self.flagged is not None:
            query["isFlagged"] = self.flagged
        if self.unread is not None:
            query["isRead"] = not self.unread
        if self.has_attachments:
            query["hasAttachments"] = True

        return query
