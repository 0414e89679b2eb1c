"""
Shared test fixtures and configuration for pytest
"""
import json
import os
import tempfile

# Keep logs and config out of the real home directory. Must run before
# anything from open_mail is imported.
os.environ["OPEN_MAIL_HOME"] = tempfile.mkdtemp(prefix="open_mail_test_")

import pytest

from open_mail.core.store import InMemoryEmailStore
from open_mail.utils.config import ConfigManager
from open_mail.utils.console import reset_console

from .test_helpers import EmailTestHelper


@pytest.fixture(autouse=True)
def reset_singletons():
    """Give every test a fresh ConfigManager and shared console"""
    ConfigManager.reset_instance()
    reset_console()
    yield
    ConfigManager.reset_instance()
    reset_console()


@pytest.fixture
def test_email():
    """Sample test email record"""
    return EmailTestHelper.create_mock_email()


@pytest.fixture
def test_emails():
    """Three emails across two folders, one of them read"""
    return [
        EmailTestHelper.create_mock_email(id=1, subject='Quarterly report', isRead=True),
        EmailTestHelper.create_mock_email(
            id=2, subject='Lunch plans', **{'from': 'alice@example.com'}
        ),
        EmailTestHelper.create_mock_email(
            id=3, subject='Invoice attached', folder='Archive',
            hasAttachments=True, isFlagged=True,
            attachments=[{'filename': 'invoice.pdf', 'size': 2048}],
        ),
    ]


@pytest.fixture
def email_store(test_emails):
    """In-memory store over the sample emails"""
    return InMemoryEmailStore(test_emails)


@pytest.fixture
def export_file(tmp_path, test_emails):
    """JSON export of the sample emails on disk"""
    path = tmp_path / 'emails.json'
    path.write_text(json.dumps(test_emails), encoding='utf-8')
    return path


@pytest.fixture
def config_manager(tmp_path):
    """ConfigManager backed by a temporary config file"""
    return ConfigManager(tmp_path / 'config.json')
