"""Argument parser configuration for the open-mail CLI"""

import argparse

from open_mail.formatters import OutputFormat


## Argument Adding Utilities

def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    """Add output format and field selection arguments."""

    output_group = parser.add_argument_group("output", "Control rendered output")

    output_group.add_argument(
        "--format",
        choices=OutputFormat.names(),
        help="Output format (default: from config)"
    )
    output_group.add_argument(
        "--fields",
        help="Fields to show, e.g. 'id,from,subject' or '*,^bodyText'"
    )
    output_group.add_argument(
        "--pretty",
        action="store_true",
        default=None,
        help="Render Markdown output with terminal styling"
    )

def add_input_argument(parser: argparse.ArgumentParser) -> None:
    """Add the record export path argument."""

    parser.add_argument(
        "--input",
        help="JSON export of email records (default: from config)"
    )

def add_pagination_arguments(parser: argparse.ArgumentParser) -> None:
    """Add limit/offset/page arguments. argparse rejects non-integers."""

    pagination_group = parser.add_argument_group("pagination", "Select a page of results")

    pagination_group.add_argument(
        "--limit",
        type=int,
        help="Number of emails per page (default: from config)"
    )
    pagination_group.add_argument(
        "--offset",
        type=int,
        help="Number of emails to skip; overrides --page"
    )
    pagination_group.add_argument(
        "--page",
        type=int,
        help="Page number, starting at 1"
    )

def add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    """Add common filter arguments to the parser."""

    filter_group = parser.add_argument_group("filters", "Filter listed emails")

    flagged = filter_group.add_mutually_exclusive_group()
    flagged.add_argument(
        "--flagged",
        action="store_true",
        help="Show only flagged emails"
    )
    flagged.add_argument(
        "--unflagged",
        action="store_true",
        help="Show only unflagged emails"
    )

    read_state = filter_group.add_mutually_exclusive_group()
    read_state.add_argument(
        "--unread",
        action="store_true",
        help="Show only unread emails"
    )
    read_state.add_argument(
        "--read",
        action="store_true",
        help="Show only read emails"
    )

    filter_group.add_argument(
        "--with-attachments",
        action="store_true",
        help="Show only emails with attachments"
    )

def add_folder_argument(parser: argparse.ArgumentParser) -> None:
    """Add folder argument."""

    parser.add_argument(
        "--folder",
        help="Only show emails from this folder (e.g. INBOX)"
    )


## Command Setup Functions

def setup_list_command(subparsers) -> None:
    """Setup the list command."""

    list_parser = subparsers.add_parser(
        "list",
        help="List emails",
        description="List emails one page at a time"
    )
    add_input_argument(list_parser)
    add_folder_argument(list_parser)
    add_pagination_arguments(list_parser)
    add_filter_arguments(list_parser)
    add_output_arguments(list_parser)

def setup_search_command(subparsers) -> None:
    """Setup the search command."""

    search_parser = subparsers.add_parser(
        "search",
        help="Search emails",
        description="Search subject, addresses and body text for a keyword"
    )
    search_parser.add_argument("keyword", help="Text to search for")
    add_input_argument(search_parser)
    add_folder_argument(search_parser)
    add_pagination_arguments(search_parser)
    add_output_arguments(search_parser)

def setup_read_command(subparsers) -> None:
    """Setup the read command."""

    read_parser = subparsers.add_parser(
        "read",
        help="Show a single email",
        description="Show every field of one email"
    )
    read_parser.add_argument("id", help="Email ID")
    add_input_argument(read_parser)
    add_output_arguments(read_parser)


## Main Parser

def setup_argument_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser."""

    parser = argparse.ArgumentParser(
        prog="open-mail",
        description="Render stored email as JSON, Markdown tables or ID lists"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        help="Command to run"
    )

    setup_list_command(subparsers)
    setup_search_command(subparsers)
    setup_read_command(subparsers)

    return parser
