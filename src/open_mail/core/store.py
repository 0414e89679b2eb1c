"""Record store contract and an in-memory implementation.

The renderers only need an ordered page of records plus a few counts. Any
backend that satisfies ``EmailStore`` can feed them; ``InMemoryEmailStore``
serves records already loaded into memory, for example from a JSON export.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Union

from open_mail.utils.errors import StorageError
from open_mail.utils.logging import get_logger, log_call

logger = get_logger(__name__)

SEARCHABLE_FIELDS = ("subject", "from", "to", "cc", "bodyText")

Query = Optional[Mapping[str, Any]]


class EmailStore(Protocol):
    """Read-only access to stored email records."""

    async def find_by_folder(
        self, folder: Optional[str], limit: int, offset: int, filters: Query = None
    ) -> List[Dict[str, Any]]:
        ...

    async def count_by_folder(self, folder: Optional[str], filters: Query = None) -> int:
        ...

    async def count_unread(self, folder: Optional[str]) -> int:
        ...

    async def find_by_id(self, email_id: Any) -> Optional[Dict[str, Any]]:
        ...

    async def search(
        self, keyword: str, limit: int, offset: int, folder: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        ...

    async def count_search(
        self, keyword: str, folder: Optional[str] = None, filters: Query = None
    ) -> int:
        ...


class InMemoryEmailStore:
    """Serves email records held in memory, in their given order."""

    def __init__(self, records: Iterable[Mapping[str, Any]] = ()):
        self._records: List[Dict[str, Any]] = [dict(record) for record in records]

    @classmethod
    @log_call
    def from_json_file(cls, path: Union[str, Path]) -> "InMemoryEmailStore":
        """Load records from a JSON export.

        The file holds either a list of records or an object whose ``data``
        key holds that list.
        """
        path = Path(path)

        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except FileNotFoundError as e:
            raise StorageError(
                f"Email export not found: {path}", details={"path": str(path)}
            ) from e
        except json.JSONDecodeError as e:
            raise StorageError(
                f"Email export is not valid JSON: {e}", details={"path": str(path)}
            ) from e
        except OSError as e:
            raise StorageError(
                f"Failed to read email export: {e}", details={"path": str(path)}
            ) from e

        if isinstance(payload, dict):
            payload = payload.get("data", [])

        if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
            raise StorageError(
                "Email export must contain a list of records",
                details={"path": str(path)},
            )

        logger.info(f"Loaded {len(payload)} emails from {path}")
        return cls(payload)

    ## Matching

    @staticmethod
    def _in_folder(record: Mapping[str, Any], folder: Optional[str]) -> bool:
        if not folder:
            return True
        return str(record.get("folder", "")).lower() == folder.lower()

    @staticmethod
    def _matches(record: Mapping[str, Any], filters: Query) -> bool:
        if not filters:
            return True
        return all(bool(record.get(key)) == bool(value) for key, value in filters.items())

    @staticmethod
    def _contains(record: Mapping[str, Any], keyword: str) -> bool:
        needle = keyword.lower()
        return any(
            needle in str(record.get(name) or "").lower() for name in SEARCHABLE_FIELDS
        )

    def _select(self, folder: Optional[str], filters: Query) -> List[Dict[str, Any]]:
        return [
            record
            for record in self._records
            if self._in_folder(record, folder) and self._matches(record, filters)
        ]

    def _search(
        self, keyword: str, folder: Optional[str], filters: Query = None
    ) -> List[Dict[str, Any]]:
        return [
            record
            for record in self._select(folder, filters)
            if self._contains(record, keyword)
        ]

    ## EmailStore

    async def find_by_folder(
        self, folder: Optional[str], limit: int, offset: int, filters: Query = None
    ) -> List[Dict[str, Any]]:
        return self._select(folder, filters)[offset:offset + limit]

    async def count_by_folder(self, folder: Optional[str], filters: Query = None) -> int:
        return len(self._select(folder, filters))

    async def count_unread(self, folder: Optional[str]) -> int:
        return len(self._select(folder, {"isRead": False}))

    async def find_by_id(self, email_id: Any) -> Optional[Dict[str, Any]]:
        for record in self._records:
            if str(record.get("id")) == str(email_id):
                return record
        return None

    async def search(
        self, keyword: str, limit: int, offset: int, folder: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        return self._search(keyword, folder)[offset:offset + limit]

    async def count_search(
        self, keyword: str, folder: Optional[str] = None, filters: Query = None
    ) -> int:
        return len(self._search(keyword, folder, filters))
