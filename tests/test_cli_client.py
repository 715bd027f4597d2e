"""Unit tests for ShareNoteClient."""

import httpx
import pytest

from cli.client import ShareNoteClient


def _client_with(temp_config, handler) -> ShareNoteClient:
    client = ShareNoteClient(temp_config)
    client.session = httpx.Client(transport=httpx.MockTransport(handler), base_url='http://test')
    return client


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def mock_client(temp_config, requests_seen):
    """ShareNoteClient whose transport answers like a healthy server."""
    def handler(request):
        requests_seen.append(request)
        path = request.url.path
        if path == '/auth/register':
            return httpx.Response(201, json={'api_key': 'sn_test123', 'user_id': 'user_abc'})
        if path == '/auth/login':
            return httpx.Response(200, json={'api_key': 'sn_newkey456'})
        if path == '/contents' and request.method == 'POST':
            return httpx.Response(201, json={
                'content_id': 'c0ffee00-1111-2222-3333-444455556666',
                'title': 'My Note',
                'path': '/my-note',
                'permission': 'private',
                'slug': 'my-note',
                'share_code': 'a' * 32,
            })
        if path == '/contents' and request.method == 'GET':
            return httpx.Response(200, json={'path': '/', 'items': [
                {'content_id': 'f0' * 16, 'name': 'docs', 'content_type': 'folder', 'size': 0},
                {'content_id': 'e0' * 16, 'name': 'a.txt', 'content_type': 'file', 'size': 2048},
            ]})
        if path.endswith('/share'):
            return httpx.Response(200, json={
                'slug': 'my-note', 'share_code': 'a' * 32, 'permission': 'unlisted',
                'slug_url': '/share/my-note', 'share_code_url': f"/share/{'a' * 32}",
            })
        if path == '/share/my-note':
            return httpx.Response(200, json={
                'title': 'My Note', 'language': 'plaintext', 'owner_name': 'Alice',
                'access_count': 4, 'size': 5, 'updated_at': '2024-01-01T00:00:00Z',
                'content_type': 'file', 'body': 'hello', 'slug': 'my-note',
            })
        if path == '/explore':
            return httpx.Response(200, json={'items': [
                {'name': 'Public', 'owner_name': 'Alice', 'access_count': 9, 'slug': 'public'},
            ]})
        return httpx.Response(404, json={'detail': 'Content not found', 'code': 'NOT_FOUND'})

    return _client_with(temp_config, handler)


def test_register_saves_api_key(mock_client, temp_config, requests_seen):
    result = mock_client.register('alice', 'password123', 'Alice')

    assert 'Registration successful' in result
    assert temp_config.get_api_key() == 'sn_test123'
    assert b'"display_name"' in requests_seen[0].content


def test_register_failure_maps_error_code(temp_config):
    client = _client_with(
        temp_config,
        lambda request: httpx.Response(400, json={'detail': 'exists', 'code': 'USER_ALREADY_EXISTS'})
    )
    assert 'Username already taken' in client.register('alice', 'pw')


def test_login_updates_api_key(mock_client, temp_config):
    assert 'Login successful' in mock_client.login('alice', 'password123')
    assert temp_config.get_api_key() == 'sn_newkey456'


def test_create_note_anonymously_sends_no_auth_header(mock_client, requests_seen):
    result = mock_client.create_note('My Note', body='hello')

    assert 'Created: My Note' in result
    assert 'http://localhost:8000/share/my-note' in result
    assert 'authorization' not in requests_seen[-1].headers


def test_create_note_reads_local_file(mock_client, temp_config, requests_seen, tmp_path):
    temp_config.set_api_key('sn_test')
    source = tmp_path / 'note.md'
    source.write_text('# from disk', encoding='utf-8')

    mock_client.create_note('My Note', file_path=str(source), permission='public')

    request = requests_seen[-1]
    assert request.headers['authorization'] == 'Bearer sn_test'
    assert b'# from disk' in request.content
    assert b'"permission":"public"' in request.content.replace(b' ', b'')


def test_create_note_missing_local_file(mock_client, tmp_path):
    result = mock_client.create_note('x', file_path=str(tmp_path / 'missing.txt'))
    assert result.startswith('Error reading')


def test_list_own_requires_login(mock_client):
    assert 'Not logged in' in mock_client.list_own('/')


def test_list_own_formats_folders_and_files(mock_client, temp_config):
    temp_config.set_api_key('sn_test')
    result = mock_client.list_own('/')

    assert '[dir]  docs/' in result
    assert '[file] a.txt  2.00 KiB' in result


def test_share_prints_both_links(mock_client, temp_config):
    temp_config.set_api_key('sn_test')
    result = mock_client.share('some-id', is_public=False)

    assert 'Shared (unlisted)' in result
    assert '/share/my-note' in result
    assert f"/share/{'a' * 32}" in result


def test_open_shared_shows_body(mock_client):
    result = mock_client.open_shared('my-note')
    assert 'by Alice' in result
    assert 'hello' in result


def test_open_missing_content(mock_client):
    assert 'Content not found' in mock_client.open_shared('nope')


def test_explore_lists_entries(mock_client, requests_seen):
    result = mock_client.explore('popular', 5)

    assert 'Public  by Alice' in result
    assert requests_seen[-1].url.params['sort'] == 'popular'
    assert requests_seen[-1].url.params['limit'] == '5'


def test_server_errors_are_retried(temp_config, monkeypatch):
    monkeypatch.setattr('cli.client.time.sleep', lambda seconds: None)
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json={'items': []})

    client = _client_with(temp_config, handler)

    assert client.explore() == 'No public content yet.'
    assert len(calls) == 3


def test_connection_failure_is_reported(temp_config, monkeypatch):
    monkeypatch.setattr('cli.client.time.sleep', lambda seconds: None)

    def handler(request):
        raise httpx.ConnectError('refused', request=request)

    client = _client_with(temp_config, handler)

    assert 'Cannot connect to ShareNote server' in client.explore()
