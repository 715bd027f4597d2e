"""Tests for CLI command handlers."""

from unittest.mock import Mock

from cli.client import ShareNoteClient
from cli.commands import (
    handle_browse,
    handle_explore,
    handle_login,
    handle_ls,
    handle_mkdir,
    handle_new,
    handle_open,
    handle_register,
    handle_share,
)
from cli.models import (
    BrowseCommand,
    ExploreCommand,
    ListCommand,
    LoginCommand,
    MkdirCommand,
    NewCommand,
    OpenCommand,
    RegisterCommand,
    ShareCommand,
)
from cli.repl import dispatch_command


def _mock_client():
    return Mock(spec=ShareNoteClient)


def test_handle_register():
    client = _mock_client()
    client.register.return_value = "Registration successful!"

    result = handle_register(RegisterCommand(username='alice', password='pw', display_name='Alice'), client=client)

    assert 'Registration successful' in result
    client.register.assert_called_once_with('alice', 'pw', 'Alice')


def test_handle_login():
    client = _mock_client()
    handle_login(LoginCommand(username='alice', password='pw'), client=client)
    client.login.assert_called_once_with('alice', 'pw')


def test_handle_new_passes_all_options():
    client = _mock_client()
    cmd = NewCommand(title='Plan', file_path='plan.md', path='/work/plan.md', permission='unlisted', slug='plan')

    handle_new(cmd, client=client)

    client.create_note.assert_called_once_with(
        'Plan',
        body=None,
        file_path='plan.md',
        path='/work/plan.md',
        permission='unlisted',
        custom_slug='plan',
    )


def test_handle_mkdir():
    client = _mock_client()
    handle_mkdir(MkdirCommand(path='/work', permission='public'), client=client)
    client.create_folder.assert_called_once_with('/work', 'public')


def test_handle_ls():
    client = _mock_client()
    handle_ls(ListCommand(path='/work'), client=client)
    client.list_own.assert_called_once_with('/work')


def test_handle_share():
    client = _mock_client()
    handle_share(ShareCommand(content_id='abc', slug='my-slug', is_public=True), client=client)
    client.share.assert_called_once_with('abc', custom_slug='my-slug', is_public=True)


def test_handle_open_browse_explore():
    client = _mock_client()

    handle_open(OpenCommand(identifier='my-note'), client=client)
    handle_browse(BrowseCommand(identifier='docs', path='/sub'), client=client)
    handle_explore(ExploreCommand(sort='name', limit=3), client=client)

    client.open_shared.assert_called_once_with('my-note')
    client.browse.assert_called_once_with('docs', '/sub')
    client.explore.assert_called_once_with('name', 3)


def test_dispatch_routes_to_handler(monkeypatch):
    client = _mock_client()
    client.open_shared.return_value = "content"
    monkeypatch.setattr('cli.commands.get_client', lambda: client)

    assert dispatch_command(OpenCommand(identifier='x')) == "content"


def test_dispatch_unknown_object():
    assert dispatch_command(object()).startswith('Unknown command type')
