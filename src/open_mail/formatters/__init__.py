"""Output formatters.

Each output format maps to exactly one formatter; ``get_formatter`` is the
only way the command layer obtains one.
"""

from typing import Dict, Union

from open_mail.utils.errors import UnknownFormatError

from .base import FormatMeta, FormatOptions, Formatter, OutputFormat, Record
from .ids_only import IDsOnlyFormatter
from .json_formatter import JSONFormatter
from .markdown import MarkdownFormatter

_FORMATTERS: Dict[OutputFormat, Formatter] = {
    OutputFormat.JSON: JSONFormatter(),
    OutputFormat.MARKDOWN: MarkdownFormatter(),
    OutputFormat.IDS: IDsOnlyFormatter(),
}


def resolve_format(fmt: Union[str, OutputFormat]) -> OutputFormat:
    """Turn a format name into an OutputFormat."""
    if isinstance(fmt, OutputFormat):
        return fmt
    try:
        return OutputFormat(str(fmt).lower())
    except ValueError as e:
        raise UnknownFormatError(
            f"Unknown output format: {fmt}",
            details={"format": fmt, "valid_formats": OutputFormat.names()},
        ) from e


def get_formatter(fmt: Union[str, OutputFormat]) -> Formatter:
    """Return the formatter for an output format."""
    return _FORMATTERS[resolve_format(fmt)]


__all__ = [
    "FormatMeta",
    "FormatOptions",
    "Formatter",
    "IDsOnlyFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "OutputFormat",
    "Record",
    "get_formatter",
    "resolve_format",
]
