"""Tests for CLI command parsing."""

import pytest

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
from cli.parser import ParseError, parse_command


def test_register_with_quoted_display_name():
    assert parse_command('register alice pw "Alice Doe"') == RegisterCommand(
        username='alice', password='pw', display_name='Alice Doe'
    )


def test_login():
    assert parse_command('login alice pw') == LoginCommand(username='alice', password='pw')


def test_new_with_options():
    cmd = parse_command('new "My Note" --body "hello world" --path /notes/my.txt --permission public --slug mine')
    assert cmd == NewCommand(
        title='My Note', body='hello world', path='/notes/my.txt', permission='public', slug='mine'
    )


def test_new_from_file():
    cmd = parse_command('new plan.md --file ./plan.md')
    assert cmd.file_path == './plan.md'
    assert cmd.body is None


def test_mkdir_and_ls():
    assert parse_command('mkdir /work --permission unlisted') == MkdirCommand(path='/work', permission='unlisted')
    assert parse_command('ls') == ListCommand(path='/')
    assert parse_command('ls /work') == ListCommand(path='/work')


def test_share_flags():
    assert parse_command('share abc') == ShareCommand(content_id='abc')
    assert parse_command('share abc --public') == ShareCommand(content_id='abc', is_public=True)
    assert parse_command('share abc --unlisted --slug x') == ShareCommand(content_id='abc', slug='x', is_public=False)


def test_open_and_browse():
    assert parse_command('open my-note') == OpenCommand(identifier='my-note')
    assert parse_command('browse docs') == BrowseCommand(identifier='docs', path='/')
    assert parse_command('browse docs /sub') == BrowseCommand(identifier='docs', path='/sub')


def test_explore_arguments_in_any_order():
    assert parse_command('explore') == ExploreCommand()
    assert parse_command('explore popular') == ExploreCommand(sort='popular')
    assert parse_command('explore 5 name') == ExploreCommand(sort='name', limit=5)


@pytest.mark.parametrize("line", [
    '',
    '   ',
    'frobnicate',
    'login alice',
    'register alice',
    'new',
    'new a b',
    'new title --body',
    'new title --body x --file y',
    'new title --permission secret',
    'new title --color red',
    'mkdir',
    'mkdir /',
    'share',
    'share abc --public --unlisted',
    'open',
    'browse',
    'explore sideways',
    'explore 0',
    'ls a b',
    'open "unterminated',
])
def test_invalid_input_raises_parse_error(line):
    with pytest.raises(ParseError):
        parse_command(line)
