"""Search command - render emails matching a keyword"""

from typing import Any, Dict, Optional

from open_mail.core.store import EmailStore
from open_mail.features.view import RenderedView, ViewWorkflow
from open_mail.utils.config import ConfigManager

from .base import BaseCommandHandler, parse_int_arg


class SearchCommandHandler(BaseCommandHandler):
    """Handler for ``search``: keyword search with pagination."""

    async def render(
        self, store: EmailStore, args: Dict[str, Any], config_manager: Optional[ConfigManager]
    ) -> RenderedView:
        self.validate_args(args, "keyword")
        workflow = ViewWorkflow(store)

        return await workflow.search_emails(
            args["keyword"].strip(),
            folder=args.get("folder"),
            limit=self.limit(args, config_manager),
            offset=parse_int_arg(args, "offset"),
            page=parse_int_arg(args, "page"),
            fields=args.get("fields"),
            fmt=self.output_format(args, config_manager),
        )
