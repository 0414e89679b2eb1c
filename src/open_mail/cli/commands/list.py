"""List command - render one page of a folder"""

from typing import Any, Dict, Optional

from open_mail.core.store import EmailStore
from open_mail.features.view import EmailFilters, RenderedView, ViewWorkflow
from open_mail.utils.config import ConfigManager

from .base import BaseCommandHandler, parse_int_arg


class ListCommandHandler(BaseCommandHandler):
    """Handler for ``list``: paginated folder listing."""

    async def render(
        self, store: EmailStore, args: Dict[str, Any], config_manager: Optional[ConfigManager]
    ) -> RenderedView:
        workflow = ViewWorkflow(store)

        return await workflow.list_emails(
            folder=args.get("folder"),
            limit=self.limit(args, config_manager),
            offset=parse_int_arg(args, "offset"),
            page=parse_int_arg(args, "page"),
            fields=args.get("fields"),
            fmt=self.output_format(args, config_manager),
            filters=EmailFilters.from_args(args),
        )
