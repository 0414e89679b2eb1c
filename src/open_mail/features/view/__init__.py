"""Email viewing feature.

Public API:
    ViewWorkflow.list_emails(...)   -> Render one page of a folder
    ViewWorkflow.search_emails(...) -> Render one page of search results
    ViewWorkflow.read_email(...)    -> Render a single email
"""

from .filters import EmailFilters
from .workflow import RenderedView, ViewWorkflow, build_list_meta

__all__ = [
    "EmailFilters",
    "RenderedView",
    "ViewWorkflow",
    "build_list_meta",
]
