"""Centralized path definitions for the open-mail application.

Every path hangs off a single base directory, which defaults to
``~/.open_mail`` and can be moved with the ``OPEN_MAIL_HOME`` variable.
"""

import os
from pathlib import Path

# Base application directory
OPEN_MAIL_DIR = Path(os.environ.get("OPEN_MAIL_HOME", Path.home() / ".open_mail"))

# Subdirectories
DATA_DIR = OPEN_MAIL_DIR / "data"
LOGS_DIR = OPEN_MAIL_DIR / "logs"

# Specific files
CONFIG_PATH = OPEN_MAIL_DIR / "config.json"
RECORDS_PATH = DATA_DIR / "emails.json"
