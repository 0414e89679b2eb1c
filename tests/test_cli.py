"""
Tests for CLI command processing and argument handling

Tests cover:
- Argument parsing
- Command routing
- CLI and daemon execution
- Error handling and exit codes
"""
import json
from argparse import Namespace
from unittest.mock import patch

import pytest

from open_mail.cli.cli import _args_to_dict, dispatch_command, main
from open_mail.cli.cli_parser import setup_argument_parser
from open_mail.cli.commands import (
    CommandResult,
    ListCommandHandler,
    ReadCommandHandler,
    SearchCommandHandler,
    parse_int_arg,
)
from open_mail.cli.router import CommandRouter
from open_mail.utils.errors import InvalidPaginationError

from .test_helpers import ConsoleTestHelper


class TestArgumentParsing:
    """Tests for the argument parser"""

    def setup_method(self):
        self.parser = setup_argument_parser()

    def test_list_arguments(self):
        """Test list options are parsed with their types"""
        args = self.parser.parse_args(
            ['list', '--folder', 'INBOX', '--limit', '5', '--page', '2',
             '--format', 'json', '--fields', 'id,subject', '--unread']
        )
        assert args.command == 'list'
        assert args.limit == 5
        assert args.page == 2
        assert args.format == 'json'
        assert args.fields == 'id,subject'
        assert args.unread is True

    def test_search_keyword(self):
        """Test search takes a positional keyword"""
        args = self.parser.parse_args(['search', 'invoice', '--offset', '10'])
        assert args.keyword == 'invoice'
        assert args.offset == 10

    def test_read_id(self):
        """Test read takes a positional id"""
        args = self.parser.parse_args(['read', '42', '--format', 'ids'])
        assert args.id == '42'

    @pytest.mark.parametrize('argv', [
        [],
        ['list', '--format', 'xml'],
        ['list', '--limit', 'abc'],
        ['list', '--flagged', '--unflagged'],
        ['list', '--read', '--unread'],
        ['search'],
    ])
    def test_invalid_arguments(self, argv):
        """Test argparse rejects malformed command lines"""
        with pytest.raises(SystemExit):
            self.parser.parse_args(argv)

    def test_args_to_dict(self):
        """Test unset options are dropped"""
        args = Namespace(command='list', limit=None, format='ids', unread=False)
        assert _args_to_dict(args) == {'format': 'ids', 'unread': False}


class TestParseIntArg:
    """Tests for parse_int_arg"""

    @pytest.mark.parametrize('value,expected', [
        (None, None), ('', None), (5, 5), ('7', 7), (' 12 ', 12), ('-3', -3),
    ])
    def test_valid_values(self, value, expected):
        """Test integers and integer strings"""
        assert parse_int_arg({'limit': value}, 'limit') == expected

    def test_missing_key(self):
        """Test a missing argument is None"""
        assert parse_int_arg({}, 'page') is None

    @pytest.mark.parametrize('value', ['abc', '1.5', True])
    def test_invalid_values(self, value):
        """Test non-integers are rejected"""
        with pytest.raises(InvalidPaginationError) as exc_info:
            parse_int_arg({'offset': value}, 'offset')
        assert exc_info.value.details['argument'] == 'offset'


class TestCommandRouter:
    """Tests for command routing"""

    def test_available_commands(self, config_manager):
        """Test every command has a handler"""
        router = CommandRouter(config_manager=config_manager)
        for command in router.get_available_commands():
            assert router.get_handler(command) is not None

    def test_handler_types(self, config_manager):
        """Test commands map to their handler classes"""
        router = CommandRouter(config_manager=config_manager)
        assert isinstance(router.get_handler('list'), ListCommandHandler)
        assert isinstance(router.get_handler('search'), SearchCommandHandler)
        assert isinstance(router.get_handler('read'), ReadCommandHandler)
        assert router.get_handler('compose') is None

    @pytest.mark.asyncio
    async def test_unknown_command(self, config_manager):
        """Test routing an unknown command"""
        router = CommandRouter(config_manager=config_manager)
        with pytest.raises(ValueError):
            await router.route('compose', {})

    @pytest.mark.asyncio
    async def test_bad_route_arguments(self, config_manager):
        """Test argument type checks"""
        router = CommandRouter(config_manager=config_manager)
        with pytest.raises(TypeError):
            await router.route('list', ['not', 'a', 'dict'])

    @pytest.mark.asyncio
    async def test_route_list(self, config_manager, export_file):
        """Test routing list prints rendered output"""
        console, buffer = ConsoleTestHelper.create_console()
        router = CommandRouter(console, config_manager)

        result = await router.route('list', {'input': str(export_file), 'format': 'ids'})

        assert result is True
        assert buffer.getvalue() == '1 2 3\n'


class TestCLIExecution:
    """Tests for execute_cli"""

    @pytest.mark.asyncio
    async def test_config_defaults_apply(self, config_manager, export_file):
        """Test the configured limit and format are used"""
        config_manager.set_config('output.default_limit', 2, persist=False)
        config_manager.set_config('output.default_format', 'ids', persist=False)
        console, buffer = ConsoleTestHelper.create_console()

        await ListCommandHandler(console).execute_cli({'input': str(export_file)}, config_manager)

        assert buffer.getvalue() == '1 2\n'

    @pytest.mark.asyncio
    async def test_records_path_from_config(self, config_manager, export_file):
        """Test the store path falls back to config"""
        config_manager.set_config('data.records_path', str(export_file), persist=False)
        console, buffer = ConsoleTestHelper.create_console()

        await ReadCommandHandler(console).execute_cli({'id': '2', 'format': 'ids'}, config_manager)

        assert buffer.getvalue() == '2\n'

    @pytest.mark.asyncio
    async def test_markdown_is_printed_verbatim(self, config_manager, export_file):
        """Test plain Markdown output is not reinterpreted"""
        console, buffer = ConsoleTestHelper.create_console()

        await SearchCommandHandler(console).execute_cli(
            {'input': str(export_file), 'keyword': 'lunch'}, config_manager
        )

        output = buffer.getvalue()
        assert output.startswith('## Search: lunch (1 unread, 1 total)')
        assert '| 2 | alice@example.com | Lunch plans |' in output

    @pytest.mark.asyncio
    async def test_pretty_markdown(self, config_manager, export_file):
        """Test pretty output renders Markdown for the terminal"""
        console, buffer = ConsoleTestHelper.create_console()

        await ListCommandHandler(console).execute_cli(
            {'input': str(export_file), 'pretty': True}, config_manager
        )

        output = buffer.getvalue()
        assert 'Results' in output
        assert '## Results' not in output

    @pytest.mark.asyncio
    async def test_invalid_fields_warning(self, config_manager, export_file, capsys):
        """Test unknown fields produce a warning on stderr"""
        console, buffer = ConsoleTestHelper.create_console()

        await ListCommandHandler(console).execute_cli(
            {'input': str(export_file), 'fields': 'id,bogus', 'format': 'ids'}, config_manager
        )

        assert buffer.getvalue() == '1 2 3\n'
        assert 'Unknown fields ignored: bogus' in capsys.readouterr().err


class TestDaemonExecution:
    """Tests for execute_daemon and safe_execute_daemon"""

    @pytest.mark.asyncio
    async def test_list_result(self, email_store):
        """Test a daemon list returns body and metadata"""
        result = await ListCommandHandler().safe_execute_daemon(
            email_store, {'format': 'markdown', 'limit': '1', 'page': '2'}
        )

        assert isinstance(result, CommandResult)
        assert result.success is True
        assert result.metadata['content_type'] == 'text/markdown'
        assert result.metadata['showing'] == '2-2'
        assert result.metadata['count'] == 1
        assert '| 2 |' in result.data

    @pytest.mark.asyncio
    async def test_json_is_the_daemon_default(self, email_store):
        """Test daemon output defaults to JSON"""
        result = await ListCommandHandler().safe_execute_daemon(email_store, {})

        assert result.metadata['content_type'] == 'application/json'
        assert len(json.loads(result.data)['data']) == 3

    @pytest.mark.asyncio
    async def test_invalid_pagination(self, email_store):
        """Test non-integer pagination is reported, not raised"""
        result = await ListCommandHandler().safe_execute_daemon(email_store, {'limit': 'abc'})

        assert result.success is False
        assert result.metadata['error_type'] == 'InvalidPaginationError'
        assert result.metadata['category'] == 'validation'
        assert result.to_dict()['error'] == result.error

    @pytest.mark.asyncio
    async def test_missing_email(self, email_store):
        """Test a missing email is reported as a storage error"""
        result = await ReadCommandHandler().safe_execute_daemon(email_store, {'id': '99'})

        assert result.success is False
        assert result.error == 'Email 99 not found'
        assert result.metadata['category'] == 'storage'

    @pytest.mark.asyncio
    async def test_blank_keyword(self, email_store):
        """Test search requires a keyword"""
        result = await SearchCommandHandler().safe_execute_daemon(email_store, {'keyword': '  '})

        assert result.success is False
        assert result.metadata['missing_args'] == ['keyword']

    @pytest.mark.asyncio
    async def test_unknown_format(self, email_store):
        """Test an unknown format is reported with the valid choices"""
        result = await ReadCommandHandler().safe_execute_daemon(
            email_store, {'id': '1', 'format': 'xml'}
        )

        assert result.success is False
        assert result.metadata['valid_formats'] == ['json', 'markdown', 'ids']


class TestMain:
    """Tests for the main entry point"""

    @pytest.mark.asyncio
    async def test_dispatch_command_error(self, config_manager, tmp_path, capsys):
        """Test errors become exit code 1"""
        console, _ = ConsoleTestHelper.create_console()
        args = Namespace(command='list', input=str(tmp_path / 'missing.json'))

        assert await dispatch_command(args, console, config_manager) == 1
        assert 'Error:' in capsys.readouterr().err

    def test_main_list(self, export_file, capsys):
        """Test a full list invocation"""
        exit_code = main(['list', '--input', str(export_file), '--format', 'ids'])

        assert exit_code == 0
        assert capsys.readouterr().out == '1 2 3\n'

    def test_main_read_json(self, export_file, capsys):
        """Test a full read invocation"""
        exit_code = main(['read', '3', '--input', str(export_file), '--format', 'json'])

        assert exit_code == 0
        document = json.loads(capsys.readouterr().out)
        assert document['data']['subject'] == 'Invoice attached'

    def test_main_not_found(self, export_file, capsys):
        """Test a missing email exits with 1"""
        exit_code = main(['read', '99', '--input', str(export_file)])

        assert exit_code == 1
        assert 'Email 99 not found' in capsys.readouterr().err

    def test_main_interrupted(self, export_file):
        """Test Ctrl-C exits with 130"""
        def interrupt(coro):
            coro.close()
            raise KeyboardInterrupt

        with patch('open_mail.cli.cli.asyncio.run', side_effect=interrupt):
            assert main(['list', '--input', str(export_file)]) == 130
