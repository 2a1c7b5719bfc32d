"""
Async UrBackup API transport.

Issues single form-encoded POST requests against the server's
``/x?a=<action>`` endpoint and returns the decoded JSON body.
"""
import json
import asyncio
import logging
from typing import Dict, Optional, Any, Mapping
from urllib.parse import urlsplit, urlunsplit

import aiohttp

from .config import APIConfig
from ..exceptions import TransportError, ValidationError
from ..logging import get_logger, mask
from ..session import SessionState


def build_api_url(endpoint: str) -> str:
    """
    Normalize a server URL to its API path.

    Args:
        endpoint: Server URL with protocol, host and port
            (for example ``http://127.0.0.1:55414``)

    Returns:
        URL of the JSON API (path replaced by ``/x``)

    Raises:
        ValidationError: If the URL has no scheme or host
    """
    parts = urlsplit(endpoint or '')
    if parts.scheme not in ('http', 'https') or not parts.netloc:
        raise ValidationError(f"Invalid server URL: {endpoint!r}")
    return urlunsplit((parts.scheme, parts.netloc, '/x', '', ''))


def encode_form_value(value: Any) -> str:
    """Encode a parameter value the way the web interface sends it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


class AsyncAPIClient:
    """
    Asynchronous UrBackup API transport.

    Features:
    - Session token (``ses``) attached automatically once logged in
    - Configurable proxy, SSL, timeouts
    - Retry with exponential backoff for idempotent calls only
    - Connection pooling

    The transport does not interpret business semantics: a body such as
    ``{"success": false}`` is returned to the caller as-is.

    Example:
        >>> async with AsyncAPIClient('http://127.0.0.1:55414') as api:
        ...     body = await api.call('login')
    """

    # Responses carrying session tokens or challenges are not logged
    _SECRET_ACTIONS = frozenset({'login', 'salt'})

    def __init__(
        self,
        endpoint: str,
        session_state: Optional[SessionState] = None,
        config: Optional[APIConfig] = None
    ):
        """
        Initialize async API transport.

        Args:
            endpoint: Server URL
            session_state: Shared session state (token source)
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._url = build_api_url(endpoint)
        self._state = session_state if session_state is not None else SessionState()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False

        self._logger = get_logger('urbackupy.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def url(self) -> str:
        """API URL requests are sent to."""
        return self._url

    @property
    def session_state(self) -> SessionState:
        """Session state whose token is attached to requests."""
        return self._state

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close transport and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None

    def _build_body(self, params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        """Form body: parameters (None dropped) plus session token."""
        body = {
            key: encode_form_value(value)
            for key, value in (params or {}).items()
            if value is not None
        }
        if self._state.token and 'ses' not in body:
            body['ses'] = self._state.token
        return body

    async def call(
        self,
        action: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        idempotent: bool = False
    ) -> Any:
        """
        Make one API call.

        Args:
            action: Server action name (``a`` query parameter)
            params: Form parameters
            idempotent: Allow retrying on network failure

        Returns:
            Decoded JSON body

        Raises:
            TransportError: Non-2xx status, network failure or invalid JSON
        """
        if self._closed:
            raise TransportError("Client is closed", action)

        body = self._build_body(params)
        attempts = self._config.retry.max_retries + 1 if idempotent else 1

        for attempt in range(attempts):
            try:
                return await self._post(action, body)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                if attempt + 1 >= attempts:
                    self._logger.error(f"Network error on '{action}': {e!r}")
                    raise TransportError(f"Network error: {e!r}", action) from e

                delay = self._config.retry.calculate_delay(attempt)
                self._logger.warning(
                    f"Retrying '{action}' after network error, attempt {attempt + 1}"
                )
                await asyncio.sleep(delay)

    async def _post(self, action: str, body: Dict[str, str]) -> Any:
        """Send one request and decode the response."""
        session = await self._ensure_session()

        self._logger.debug(
            f"Request '{action}' to {self._url} "
            f"(params: {sorted(k for k in body if k not in ('ses', 'password'))}, "
            f"ses: {mask(body.get('ses', ''))})"
        )

        async with session.post(
            self._url,
            params={'a': action},
            data=body,
            **self._config.get_request_kwargs()
        ) as response:
            response_text = await response.text()

            if not 200 <= response.status < 300:
                self._logger.warning(f"Action '{action}' failed with HTTP {response.status}")
                raise TransportError(
                    f"HTTP {response.status} for action '{action}'",
                    action,
                    status=response.status
                )

        if action not in self._SECRET_ACTIONS:
            self._logger.debug(
                f"Response data: {response_text[:1000] if len(response_text) > 1000 else response_text}"
            )
        return self._parse_response(action, response_text)

    def _parse_response(self, action: str, response_text: str) -> Any:
        """Parse API response."""
        try:
            return json.loads(response_text)
        except json.JSONDecodeError as e:
            raise TransportError(f"Invalid JSON in response to '{action}'", action) from e
