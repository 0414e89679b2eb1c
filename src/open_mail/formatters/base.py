"""Shared formatter contract and option types."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

Record = Mapping[str, Any]
FormatMeta = Dict[str, Any]


class OutputFormat(Enum):
    """Output formats the renderers can produce."""

    JSON = "json"
    MARKDOWN = "markdown"
    IDS = "ids"

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES[self]

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]


_CONTENT_TYPES = {
    OutputFormat.JSON: "application/json",
    OutputFormat.MARKDOWN: "text/markdown",
    OutputFormat.IDS: "text/plain",
}


@dataclass(frozen=True)
class FormatOptions:
    """Per-call rendering options."""

    fields: Optional[str] = None


class Formatter(Protocol):
    """Two-operation contract every output format satisfies."""

    def format_list(
        self, records: Sequence[Record], meta: FormatMeta, options: FormatOptions
    ) -> str:
        ...

    def format_detail(self, record: Record, options: FormatOptions) -> str:
        ...
