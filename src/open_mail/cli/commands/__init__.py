"""Command handlers for the open-mail CLI

Each command module exports one handler class. Handlers run in two modes:
``execute_cli`` prints to the console, ``execute_daemon`` returns a
``CommandResult`` carrying the rendered body and its content type.
"""

from .base import BaseCommandHandler, CommandResult, parse_int_arg
from .list import ListCommandHandler
from .read import ReadCommandHandler
from .search import SearchCommandHandler

COMMAND_HANDLERS = {
    "list": ListCommandHandler,
    "search": SearchCommandHandler,
    "read": ReadCommandHandler,
}

__all__ = [
    "COMMAND_HANDLERS",
    "BaseCommandHandler",
    "CommandResult",
    "ListCommandHandler",
    "ReadCommandHandler",
    "SearchCommandHandler",
    "parse_int_arg",
]
