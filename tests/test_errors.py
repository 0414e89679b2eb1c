"""
Tests for error handling and logging utilities
"""
import json
import logging

import pytest

from open_mail.utils.errors import (
    EmailNotFoundError,
    ErrorCategory,
    ErrorHandler,
    OpenMailError,
    StorageError,
    ValidationError,
    format_error_message,
)
from open_mail.utils.logging import (
    ContextAdapter,
    JSONFormatter,
    SensitiveDataMasker,
    get_logger,
)


class TestErrorHierarchy:
    """Tests for custom exceptions"""

    def test_default_message(self):
        """Test the user message is used when none is given"""
        error = EmailNotFoundError()
        assert error.message == 'Email not found'
        assert error.category is ErrorCategory.STORAGE
        assert isinstance(error, StorageError)

    def test_to_dict(self):
        """Test errors serialise with their category"""
        error = ValidationError('bad limit', details={'argument': 'limit'})
        assert error.to_dict() == {
            'error_type': 'ValidationError',
            'category': 'validation',
            'message': 'bad limit',
            'details': {'argument': 'limit'},
        }

    def test_format_error_message(self):
        """Test user facing messages"""
        assert format_error_message(StorageError('disk gone')) == 'disk gone'
        assert 'unexpected' in format_error_message(RuntimeError('boom'))


class TestErrorHandler:
    """Tests for ErrorHandler"""

    def test_handle_known_error(self):
        """Test known errors keep their details"""
        result = ErrorHandler.handle(EmailNotFoundError('gone', {'email_id': 4}), log_traceback=False)
        assert result['error_type'] == 'EmailNotFoundError'
        assert result['details'] == {'email_id': 4}

    def test_handle_unknown_error(self):
        """Test other exceptions are reported as unknown"""
        result = ErrorHandler.handle(KeyError('x'), context='loading', log_traceback=False)
        assert result['error_type'] == 'UnknownError'
        assert result['category'] == 'unknown'
        assert result['details'] == {'context': 'loading'}

    def test_wrap_sync(self):
        """Test unexpected errors are converted"""
        @ErrorHandler.wrap
        def explode():
            raise RuntimeError('boom')

        with pytest.raises(OpenMailError) as exc_info:
            explode()
        assert exc_info.value.message == 'Unexpected error: boom'
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_wrap_passes_known_errors(self):
        """Test open-mail errors propagate unchanged"""
        @ErrorHandler.wrap
        def missing():
            raise EmailNotFoundError('gone')

        with pytest.raises(EmailNotFoundError):
            missing()

    @pytest.mark.asyncio
    async def test_wrap_async(self):
        """Test coroutines are wrapped too"""
        @ErrorHandler.wrap
        async def explode():
            raise ValueError('bad')

        with pytest.raises(OpenMailError) as exc_info:
            await explode()
        assert exc_info.value.details == {'function': 'explode'}

    @pytest.mark.asyncio
    async def test_wrap_async_result(self):
        """Test wrapped coroutines return normally"""
        @ErrorHandler.wrap
        async def answer():
            return 42

        assert await answer() == 42


class TestSensitiveDataMasker:
    """Tests for log masking"""

    def setup_method(self):
        self.masker = SensitiveDataMasker()

    @pytest.mark.parametrize('text,expected', [
        ('password=hunter2', 'password=[REDACTED]'),
        ('token: abc123 ok', 'token: [REDACTED] ok'),
        ('{"secret": "s3"}', '{"secret": "[REDACTED]"}'),
        ('nothing to hide', 'nothing to hide'),
    ])
    def test_mask_string(self, text, expected):
        """Test secrets are masked inside messages"""
        assert self.masker.mask_string(text) == expected

    def test_mask_dict(self):
        """Test sensitive keys are masked recursively"""
        data = {'authToken': 't', 'nested': {'password': 'p', 'id': 1}, 'note': 'secret=x'}
        assert self.masker.mask_dict(data) == {
            'authToken': '[REDACTED]',
            'nested': {'password': '[REDACTED]', 'id': 1},
            'note': 'secret=[REDACTED]',
        }


class TestLogging:
    """Tests for logger setup"""

    def test_logger_names_are_namespaced(self):
        """Test loggers live under the open_mail root"""
        assert get_logger('tests.sample').name == 'open_mail.tests.sample'
        assert get_logger('open_mail.core').name == 'open_mail.core'

    def test_context_adapter(self):
        """Test context is merged without touching the caller's dict"""
        adapter = get_logger('tests.ctx', command='list')
        assert isinstance(adapter, ContextAdapter)

        context = {'page': 2}
        _, kwargs = adapter.process('msg', {'extra': {'context': context}})

        assert kwargs['extra']['context'] == {'page': 2, 'command': 'list'}
        assert context == {'page': 2}

    def test_json_formatter(self):
        """Test log records are written as JSON lines"""
        record = logging.LogRecord('open_mail.test', logging.INFO, __file__, 10, 'hello %s', ('world',), None)
        record.context = {'page': 1}

        entry = json.loads(JSONFormatter().format(record))

        assert entry['message'] == 'hello world'
        assert entry['level'] == 'INFO'
        assert entry['context'] == {'page': 1}
