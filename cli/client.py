"""HTTP client for communicating with the ShareNote server."""

import time
import uuid
from pathlib import Path
from typing import Optional

import httpx

from common.constants import SHARE_URL_PREFIX
from common.logging_config import get_logger
from cli.config import Config
from cli.utils import format_file_size, short_id

logger = get_logger(__name__)


class ShareNoteClient:
    """HTTP client for the ShareNote API with retry logic and error handling."""

    def __init__(self, config: Config):
        """
        Initialize the client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized ShareNoteClient [base_url={config.get_base_url()}]")

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        if 'headers' not in kwargs:
            kwargs['headers'] = {}
        kwargs['headers']['X-Request-ID'] = self.request_id

        logger.debug(
            f"Making request: {method} {endpoint} [request_id={self.request_id}]"
        )

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if 400 <= response.status_code < 500:
                    logger.warning(
                        f"Client error: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                    )
                    return response

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                logger.error(
                    f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Server may be overloaded.")
        raise ConnectionError("Cannot connect to ShareNote server. Is it running?")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.

        Args:
            response: HTTP response object

        Returns:
            User-friendly error message
        """
        try:
            error_data = response.json()
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'

        error_messages = {
            'INVALID_API_KEY': 'Not authenticated. Please run: login <username> <password>',
            'USER_ALREADY_EXISTS': 'Username already taken. Try logging in or choose a different username.',
            'INVALID_CREDENTIALS': 'Invalid username or password.',
            'NOT_FOUND': 'Content not found.',
            'UNAUTHORIZED_ACCESS': 'You do not have permission for this operation.',
            'INVALID_TITLE': 'Title must contain at least one letter or digit.',
            'INVALID_CUSTOM_SLUG': f'Invalid custom slug: {detail}',
            'SLUG_TAKEN': 'That slug is already taken. Choose another one.',
            'INVALID_PATH': f'Invalid path: {detail}',
            'PATH_CONFLICT': 'Something already exists at that path.',
            'INVALID_CONTENT': f'Invalid request: {detail}',
            'SLUG_GENERATION_EXHAUSTED': 'Server could not allocate a link. Please try again.',
            'TIMEOUT': 'Server timed out handling the request.',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            401: 'Not authenticated',
            403: 'Access forbidden',
            404: 'Not found',
            409: 'Conflict',
            422: 'Invalid request parameters',
            500: 'Server error',
            503: 'Service unavailable',
            504: 'Server timed out',
        }

        message = status_messages.get(response.status_code, detail)
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def _get_auth_header(self, required: bool = True) -> dict:
        """
        Get Authorization header with API key.

        Args:
            required: Raise when no key is stored instead of sending no header

        Raises:
            ValueError: If required and no API key is configured
        """
        api_key = self.config.get_api_key()
        if not api_key:
            if required:
                raise ValueError("Not logged in. Please run: login <username> <password>")
            return {}
        return {'Authorization': f'Bearer {api_key}'}

    def _format_share_links(self, slug: Optional[str], share_code: Optional[str]) -> str:
        base_url = self.config.get_base_url()
        lines = []
        if slug:
            lines.append(f"  Link:      {base_url}{SHARE_URL_PREFIX}{slug}")
        if share_code:
            lines.append(f"  Private:   {base_url}{SHARE_URL_PREFIX}{share_code}")
        return '\n'.join(lines)

    def register(self, username: str, password: str, display_name: Optional[str] = None) -> str:
        """
        Register a new user account and store its API key.

        Returns:
            Success or error message
        """
        logger.info(f"Attempting to register user: {username}")
        payload = {'username': username, 'password': password}
        if display_name:
            payload['display_name'] = display_name

        try:
            response = self._request_with_retry('POST', '/auth/register', json=payload)

            if response.status_code == 201:
                data = response.json()
                self.config.set_api_key(data['api_key'])
                logger.info(f"Registration successful for user: {username} [user_id={data['user_id']}]")
                return f"Registration successful!\nUser ID: {data['user_id']}\nAPI key saved to config."

            logger.warning(f"Registration failed for user: {username} status={response.status_code}")
            return f"Registration failed: {self._format_error(response)}"

        except ConnectionError as e:
            logger.error(f"Connection error during registration: {e}")
            return f"Error: {e}"

    def login(self, username: str, password: str) -> str:
        """
        Login and store a fresh API key.

        Returns:
            Success or error message
        """
        logger.info(f"Attempting to login user: {username}")
        try:
            response = self._request_with_retry(
                'POST',
                '/auth/login',
                json={'username': username, 'password': password}
            )

            if response.status_code == 200:
                self.config.set_api_key(response.json()['api_key'])
                logger.info(f"Login successful for user: {username}")
                return "Login successful!\nAPI key updated in config."

            logger.warning(f"Login failed for user: {username} status={response.status_code}")
            return f"Login failed: {self._format_error(response)}"

        except ConnectionError as e:
            logger.error(f"Connection error during login: {e}")
            return f"Error: {e}"

    def create_note(
        self,
        title: str,
        body: Optional[str] = None,
        file_path: Optional[str] = None,
        path: Optional[str] = None,
        permission: Optional[str] = None,
        custom_slug: Optional[str] = None,
    ) -> str:
        """
        Create a note. Works anonymously when no API key is stored.

        Args:
            title: Note title
            body: Inline text
            file_path: Local UTF-8 file to read the text from
            path: Location in the caller's tree
            permission: public, unlisted or private
            custom_slug: Optional slug to request

        Returns:
            Result message with the share links
        """
        if file_path is not None:
            try:
                body = Path(file_path).read_text(encoding='utf-8')
            except (OSError, UnicodeDecodeError) as e:
                return f"Error reading {file_path}: {e}"

        payload = {'title': title, 'content_type': 'file', 'body': body or ''}
        if path is not None:
            payload['path'] = path
        if permission is not None:
            payload['permission'] = permission
        if custom_slug is not None:
            payload['custom_slug'] = custom_slug

        try:
            response = self._request_with_retry(
                'POST', '/contents', json=payload, headers=self._get_auth_header(required=False)
            )

            if response.status_code == 201:
                data = response.json()
                return (
                    f"Created: {data['title']} (ID: {data['content_id']})\n"
                    f"  Path:      {data['path']}\n"
                    f"  Access:    {data['permission']}\n"
                    f"{self._format_share_links(data['slug'], data['share_code'])}"
                )
            return f"Error: {self._format_error(response)}"

        except ConnectionError as e:
            return f"Error: {e}"

    def create_folder(self, path: str, permission: Optional[str] = None) -> str:
        """
        Create a folder at path. The folder is named after the last path segment.
        """
        try:
            headers = self._get_auth_header()
        except ValueError as e:
            return f"Error: {e}"

        name = [segment for segment in path.split('/') if segment][-1]
        payload = {'title': name, 'content_type': 'folder', 'path': path}
        if permission is not None:
            payload['permission'] = permission

        try:
            response = self._request_with_retry('POST', '/contents', json=payload, headers=headers)

            if response.status_code == 201:
                data = response.json()
                return (
                    f"Folder created: {data['path']} (ID: {data['content_id']})\n"
                    f"{self._format_share_links(data['slug'], data['share_code'])}"
                )
            return f"Error: {self._format_error(response)}"

        except ConnectionError as e:
            return f"Error: {e}"

    def list_own(self, path: str = "/") -> str:
        """
        List direct children of a directory in the caller's own tree.
        """
        try:
            headers = self._get_auth_header()
        except ValueError as e:
            return f"Error: {e}"

        try:
            response = self._request_with_retry('GET', '/contents', headers=headers, params={'path': path})

            if response.status_code == 200:
                return self._format_listing(response.json())
            return f"Error: {self._format_error(response)}"

        except ConnectionError as e:
            return f"Error: {e}"

    def _format_listing(self, data: dict) -> str:
        items = data['items']
        if not items:
            return f"{data['path']} is empty."

        output = [f"{data['path']} ({len(items)} item(s)):"]
        for item in items:
            if item['content_type'] == 'folder':
                output.append(f"  [dir]  {item['name']}/  (ID: {short_id(item['content_id'])})")
            else:
                output.append(
                    f"  [file] {item['name']}  {format_file_size(item['size'])}  (ID: {short_id(item['content_id'])})"
                )
        return '\n'.join(output)

    def share(self, content_id: str, custom_slug: Optional[str] = None, is_public: Optional[bool] = None) -> str:
        """
        Ensure share links exist for a record and print them.
        """
        try:
            headers = self._get_auth_header()
        except ValueError as e:
            return f"Error: {e}"

        payload = {}
        if custom_slug is not None:
            payload['custom_slug'] = custom_slug
        if is_public is not None:
            payload['is_public'] = is_public

        try:
            response = self._request_with_retry(
                'POST', f'/contents/{content_id}/share', json=payload, headers=headers
            )

            if response.status_code == 200:
                data = response.json()
                return (
                    f"Shared ({data['permission']}):\n"
                    f"{self._format_share_links(data['slug'], data['share_code'])}"
                )
            return f"Error: {self._format_error(response)}"

        except ConnectionError as e:
            return f"Error: {e}"

    def open_shared(self, identifier: str) -> str:
        """
        Fetch shared content by slug or share code.
        """
        try:
            response = self._request_with_retry(
                'GET', f'{SHARE_URL_PREFIX}{identifier}', headers=self._get_auth_header(required=False)
            )

            if response.status_code == 200:
                return self._format_view(response.json())
            return f"Error: {self._format_error(response)}"

        except ConnectionError as e:
            return f"Error: {e}"

    def _format_view(self, data: dict) -> str:
        header = (
            f"{data['title']}  [{data['language']}]  by {data.get('owner_name') or 'anonymous'}\n"
            f"Views: {data['access_count']}  Size: {format_file_size(data['size'])}  Updated: {data['updated_at']}"
        )
        if data['content_type'] == 'folder':
            return f"{header}\n(folder: use 'browse {data['slug']}' to list it)"
        return f"{header}\n{'-' * 40}\n{data['body']}"

    def browse(self, identifier: str, path: str = "/") -> str:
        """
        List a path inside a shared folder.
        """
        try:
            response = self._request_with_retry(
                'GET',
                f'/shared-folder/{identifier}/contents',
                params={'path': path},
                headers=self._get_auth_header(required=False),
            )

            if response.status_code == 200:
                return self._format_listing(response.json())
            return f"Error: {self._format_error(response)}"

        except ConnectionError as e:
            return f"Error: {e}"

    def explore(self, sort: str = "recent", limit: Optional[int] = None) -> str:
        """
        List public content.
        """
        params = {'sort': sort}
        if limit is not None:
            params['limit'] = limit

        try:
            response = self._request_with_retry('GET', '/explore', params=params)

            if response.status_code == 200:
                items = response.json()['items']
                if not items:
                    return "No public content yet."

                output = [f"Public content ({sort}):"]
                for item in items:
                    output.append(
                        f"  {item['name']}  by {item['owner_name']}  "
                        f"views={item['access_count']}  {SHARE_URL_PREFIX}{item['slug']}"
                    )
                return '\n'.join(output)
            return f"Error: {self._format_error(response)}"

        except ConnectionError as e:
            return f"Error: {e}"

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
