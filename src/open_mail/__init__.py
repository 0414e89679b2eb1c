"""Open Mail: render email records as JSON, Markdown tables or ID lists."""

__version__ = "0.1.0"
