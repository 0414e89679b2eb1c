"""Main CLI entry point - simplified to use router."""

import asyncio
from typing import Any, Dict, List, Optional

from rich.console import Console

from open_mail.utils.config import ConfigManager
from open_mail.utils.console import get_console, print_error
from open_mail.utils.errors import OpenMailError, format_error_message
from open_mail.utils.logging import async_log_call, get_logger, init_logging

from .cli_parser import setup_argument_parser
from .router import CommandRouter

logger = get_logger(__name__)


def _args_to_dict(args) -> Dict[str, Any]:
    """Convert argparse Namespace to dictionary."""
    result = {}
    for key, value in vars(args).items():
        if key != "command" and value is not None:
            result[key] = value
    return result


@async_log_call
async def dispatch_command(args, console: Console,
                           config_manager: Optional[ConfigManager] = None) -> int:
    """Dispatch command via router.

    Args:
        args: Parsed arguments
        console: Rich console

    Returns:
        Exit code (0 = success, 1 = error)
    """
    command = args.command

    try:
        router = CommandRouter(console, config_manager)
        args_dict = _args_to_dict(args)
        success = await router.route(command, args_dict)

        return 0 if success else 1

    except OpenMailError as e:
        logger.error(f"Command failed: {e.message}")
        print_error(f"Error: {format_error_message(e)}", Console(stderr=True))
        return 1

    except ValueError as e:
        logger.error(f"Invalid command: {e}")
        print_error(f"Error: {e}", Console(stderr=True))
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code
    """
    console = get_console()
    error_console = Console(stderr=True)

    try:
        parser = setup_argument_parser()
        args = parser.parse_args(argv)

        try:
            config_manager = ConfigManager()
        except OpenMailError as e:
            logger.error(f"Configuration error: {e.message}")
            print_error(f"Configuration error: {e.message}", error_console)
            return 1

        logging_config = config_manager.config.logging
        init_logging(
            logging_config.log_level,
            max_file_size=logging_config.max_file_size,
            backup_count=logging_config.backup_count,
        )

        return asyncio.run(dispatch_command(args, console, config_manager))

    except KeyboardInterrupt:
        print_error("Interrupted by user", error_console)
        return 130  # Standard SIGINT exit code


if __name__ == "__main__":
    raise SystemExit(main())
