"""Read command - render a single email"""

from typing import Any, Dict, Optional

from open_mail.core.store import EmailStore
from open_mail.features.view import RenderedView, ViewWorkflow
from open_mail.utils.config import ConfigManager

from .base import BaseCommandHandler


class ReadCommandHandler(BaseCommandHandler):
    """Handler for ``read``: one email by ID."""

    async def render(
        self, store: EmailStore, args: Dict[str, Any], config_manager: Optional[ConfigManager]
    ) -> RenderedView:
        self.validate_args(args, "id")
        workflow = ViewWorkflow(store)

        return await workflow.read_email(
            args["id"],
            fields=args.get("fields"),
            fmt=self.output_format(args, config_manager),
        )
