"""Routes CLI commands to their handlers."""

from typing import Any, Dict, Optional

from rich.console import Console

from open_mail.utils.config import ConfigManager
from open_mail.utils.logging import async_log_call, get_logger

from .commands import COMMAND_HANDLERS, BaseCommandHandler

logger = get_logger(__name__)


class CommandRouter:
    """Routes commands to the matching command handler."""

    def __init__(self, console: Optional[Console] = None,
                 config_manager: Optional[ConfigManager] = None):
        self.console = console
        self.config_manager = config_manager or ConfigManager()

    @async_log_call
    async def route(self, command: str, args: Optional[Dict[str, Any]] = None) -> bool:
        """Route command to its handler.

        Args:
            command: Command name
            args: Parsed arguments dictionary

        Returns:
            True if command executed successfully

        Raises:
            ValueError: If command is unknown
        """
        if args is None:
            args = {}

        if not isinstance(command, str):
            raise TypeError("First argument to route() must be a command string")
        if not isinstance(args, dict):
            raise TypeError("Second argument to route() must be a dict")

        handler = self.get_handler(command)
        if handler is None:
            raise ValueError(f"Unknown command: {command}")

        try:
            return await handler.execute_cli(args, self.config_manager)
        except Exception as e:
            logger.error(f"Command '{command}' failed: {e}")
            raise

    def get_handler(self, command: str) -> Optional[BaseCommandHandler]:
        """Instantiate the handler registered for ``command``."""
        handler_class = COMMAND_HANDLERS.get(command)
        if handler_class is None:
            return None
        return handler_class(self.console)

    def get_available_commands(self) -> Dict[str, str]:
        """Get all available commands and their descriptions."""
        return {
            'list': 'List emails in a folder, one page at a time',
            'search': 'Search emails by keyword',
            'read': 'Show a single email',
        }
