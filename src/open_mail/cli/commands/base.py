"""Base command class for CLI commands."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from rich.console import Console
from rich.markdown import Markdown

from open_mail.core.store import EmailStore, InMemoryEmailStore
from open_mail.features.view import RenderedView
from open_mail.formatters import OutputFormat
from open_mail.utils.config import ConfigManager
from open_mail.utils.console import get_console, print_output, print_warning
from open_mail.utils.errors import (
    ErrorHandler,
    InvalidPaginationError,
    OpenMailError,
    ValidationError,
)
from open_mail.utils.logging import async_log_call, get_logger


@dataclass
class CommandResult:
    """Standard command result structure."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""

        return {
            "success": self.success,
            "data": self.data,
            "error": self.error,
            "metadata": self.metadata,
        }


## Argument Helpers

def parse_int_arg(args: Dict[str, Any], key: str) -> Optional[int]:
    """Read an optional integer argument that may arrive as text.

    Values from a query string are strings; anything that is not a whole
    number is rejected here so the pagination resolver only sees integers.
    """
    value = args.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidPaginationError(
            f"Invalid value for {key}: {value!r}", details={"argument": key}
        )
    if isinstance(value, int):
        return value

    try:
        return int(str(value).strip())
    except ValueError as e:
        raise InvalidPaginationError(
            f"Invalid value for {key}: {value!r}",
            details={"argument": key, "value": value},
        ) from e


class BaseCommandHandler(ABC):
    """Base class for all command handlers."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()
        self.logger = get_logger(__name__, command=self.__class__.__name__)


    ## Abstract Methods

    @abstractmethod
    async def render(
        self, store: EmailStore, args: Dict[str, Any], config_manager: Optional[ConfigManager]
    ) -> RenderedView:
        """Fetch records and render them for this command."""


    ## Execution

    @async_log_call
    async def execute_cli(self, args: Dict[str, Any], config_manager: ConfigManager) -> bool:
        """Execute the command in CLI mode and print the result."""

        store = self.load_store(args, config_manager)
        view = await self.render(store, args, config_manager)

        if view.invalid_fields:
            print_warning(
                f"Unknown fields ignored: {', '.join(view.invalid_fields)}",
                Console(stderr=True),
            )

        pretty = args.get("pretty")
        if pretty is None:
            pretty = config_manager.config.output.pretty

        if pretty and view.output_format is OutputFormat.MARKDOWN:
            self.console.print(Markdown(view.text))
        else:
            print_output(view.text, self.console)

        self.logger.info(f"{self.__class__.__name__} rendered {view.count} emails")
        return True

    @async_log_call
    async def execute_daemon(self, store: EmailStore, args: Dict[str, Any]) -> CommandResult:
        """Execute the command for a non-interactive caller (HTTP, IPC)."""

        view = await self.render(store, args, None)

        return self.success_result(
            data=view.text,
            content_type=view.content_type,
            count=view.count,
            invalid_fields=view.invalid_fields,
            **view.meta,
        )

    async def safe_execute_daemon(self, store: EmailStore, args: Dict[str, Any]) -> CommandResult:
        """Execute a daemon command with error handling."""

        try:
            return await self.execute_daemon(store, args)

        except Exception as e:
            error = ErrorHandler.handle(
                e,
                context=f"Daemon command: {self.__class__.__name__}",
                log_traceback=not isinstance(e, OpenMailError),
            )
            return self.error_result(
                error["message"],
                error_type=error["error_type"],
                category=error["category"],
                **error["details"],
            )


    ## Shared Helpers

    def load_store(self, args: Dict[str, Any], config_manager: ConfigManager) -> EmailStore:
        """Open the record export named on the command line or in config."""

        path = args.get("input") or config_manager.config.data.records_path
        return InMemoryEmailStore.from_json_file(path)

    @staticmethod
    def output_format(args: Dict[str, Any], config_manager: Optional[ConfigManager]) -> str:
        if args.get("format"):
            return args["format"]
        if config_manager is not None:
            return config_manager.config.output.default_format
        return OutputFormat.JSON.value

    @staticmethod
    def limit(args: Dict[str, Any], config_manager: Optional[ConfigManager]) -> Optional[int]:
        limit = parse_int_arg(args, "limit")
        if limit is None and config_manager is not None:
            return config_manager.config.output.default_limit
        return limit

    def validate_args(self, args: Dict[str, Any], *required_keys: str) -> None:
        """Validate that required arguments are present."""

        missing = []
        for key in required_keys:
            value = args.get(key)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(key)

        if missing:
            raise ValidationError(
                f"Missing required arguments: {', '.join(missing)}",
                details={"missing_args": missing}
            )

    def success_result(self, data: Any = None, **metadata) -> CommandResult:
        """Create a success CommandResult."""

        return CommandResult(success=True, data=data, metadata=metadata)

    def error_result(self, error: str, **metadata) -> CommandResult:
        """Create an error CommandResult."""

        return CommandResult(success=False, error=error, metadata=metadata)
