"""Redaction policy for structured output.

The denylist is a plain table so the policy can be audited in one place.
A key is sensitive when its name contains any fragment from the table,
ignoring case, so ``authToken`` matches ``token``.
"""

from typing import Any, Dict, Mapping

REDACTED_KEY_FRAGMENTS = (
    "password",
    "token",
    "secret",
)

REDACTION_MARKER = "***REDACTED***"
HTML_PLACEHOLDER = "<HTML content>"
HTML_BODY_KEY = "bodyHtml"
PRIVATE_KEY_PREFIX = "_"


def is_sensitive_key(key: str) -> bool:
    """Check whether a field name matches the redaction denylist."""
    lowered = key.lower()
    return any(fragment in lowered for fragment in REDACTED_KEY_FRAGMENTS)


def sanitize_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a sanitized copy of a record for structured output.

    Private keys (leading underscore) are dropped, sensitive keys are
    replaced with the redaction marker and a truthy HTML body collapses
    to a placeholder. Other values pass through untouched.
    """
    result: Dict[str, Any] = {}

    for key, value in record.items():
        if key.startswith(PRIVATE_KEY_PREFIX):
            continue

        if is_sensitive_key(key):
            result[key] = REDACTION_MARKER
        elif key == HTML_BODY_KEY:
            result[key] = HTML_PLACEHOLDER if value else None
        else:
            result[key] = value

    return result
