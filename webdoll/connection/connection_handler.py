from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional
from urllib.parse import quote

import aiohttp

from webdoll.connection.error_mapper import map_error
from webdoll.exceptions import (
    CommandTimeout,
    DriverConnectionError,
    InvalidSessionId,
    SerializationError,
)

if TYPE_CHECKING:
    from webdoll.protocol.base import Command, T_CommandParams, T_CommandResponse

logger = logging.getLogger(__name__)

_JSON_CONTENT_TYPE = 'application/json; charset=utf-8'


class ConnectionHandler:
    """
    HTTP transport for WebDriver commands.

    Turns a ``Command`` into a request against the driver endpoint, performs
    the round trip and decodes the response: the ``value`` of a successful
    response is returned verbatim, a failed response is raised as the mapped
    ``CommandError``. Nothing is ever retried.
    """

    def __init__(
        self,
        base_url: str,
        request_timeout: Optional[float] = None,
        headers: Optional[dict[str, str]] = None,
        session_factory: Callable[..., aiohttp.ClientSession] = aiohttp.ClientSession,
    ):
        """
        Initialize the handler. No connection is opened until the first command.

        Args:
            base_url: Driver endpoint, e.g. ``http://localhost:4444``.
            request_timeout: Seconds allowed per round trip (None = no limit).
            headers: Extra HTTP headers sent with every request.
            session_factory: Callable creating the ``aiohttp.ClientSession``.
        """
        self._base_url = base_url.rstrip('/')
        self._request_timeout = request_timeout
        self._headers = {'Accept': 'application/json', **(headers or {})}
        self._session_factory = session_factory
        self._http_session: Optional[aiohttp.ClientSession] = None
        logger.debug(
            f'ConnectionHandler initialized: base_url={self._base_url}, '
            f'request_timeout={request_timeout}'
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def is_open(self) -> bool:
        """Whether an HTTP session is currently open."""
        return self._http_session is not None and not self._http_session.closed

    async def execute_command(
        self,
        command: Command[T_CommandParams, T_CommandResponse],
        session_id: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> T_CommandResponse:
        """
        Send a command and return the ``value`` of the driver's response.

        Args:
            command: Command to send.
            session_id: Remote session id substituted into the route.
            timeout: Per-call deadline in seconds, overriding the handler default.

        Returns:
            The ``value`` member of the response body.

        Raises:
            SerializationError: If the parameters cannot be encoded as JSON or a
                successful response cannot be decoded.
            DriverConnectionError: If the endpoint cannot be reached.
            CommandTimeout: If the deadline passes before the response arrives.
            CommandError: The mapped driver error for any non-2xx response.
        """
        url = self._base_url + self.build_path(command, session_id)
        method = command['method']
        data = self._encode_body(command) if method == 'POST' else None

        logger.debug(f'Sending command: name={command["name"]}, method={method}, url={url}')
        status, raw_body = await self._send(method, url, data, timeout)

        if not 200 <= status < 300:
            error = map_error(status, self._decode_error_body(raw_body))
            logger.debug(
                f'Command failed: name={command["name"]}, status={status}, '
                f'code={error.code!r}, message={error.message!r}'
            )
            raise error

        value = self._decode_success_body(command['name'], raw_body)
        logger.debug(f'Command succeeded: name={command["name"]}, status={status}')
        return value

    async def close(self):
        """Close the underlying HTTP session, if any."""
        if self._http_session is None:
            return
        if not self._http_session.closed:
            await self._http_session.close()
            logger.debug('HTTP session closed')
        self._http_session = None

    @staticmethod
    def build_path(command: Command, session_id: Optional[str] = None) -> str:
        """
        Fill the route template of a command.

        Path parameters are percent-encoded so that names such as attribute
        or cookie names cannot change the shape of the path.

        Raises:
            InvalidSessionId: If the route needs a session id and none is given.
        """
        route = command['route']
        path_params = {
            key: quote(str(value), safe='')
            for key, value in command.get('path_params', {}).items()
        }
        if '{session_id}' in route:
            if not session_id:
                raise InvalidSessionId(
                    f'Command {command["name"]!r} requires a session but none is active'
                )
            path_params['session_id'] = quote(session_id, safe='')
        return route.format(**path_params)

    async def _send(
        self, method: str, url: str, data: Optional[bytes], timeout: Optional[float]
    ) -> tuple[int, bytes]:
        http_session = await self._ensure_http_session()
        request_kwargs: dict[str, Any] = {}
        if data is not None:
            request_kwargs['data'] = data
            request_kwargs['headers'] = {'Content-Type': _JSON_CONTENT_TYPE}
        if timeout is not None:
            request_kwargs['timeout'] = aiohttp.ClientTimeout(total=timeout)

        try:
            async with http_session.request(method, url, **request_kwargs) as response:
                return response.status, await response.read()
        except asyncio.TimeoutError as exc:
            logger.error(f'Command timed out: method={method}, url={url}')
            raise CommandTimeout(f'{method} {url} timed out') from exc
        except (aiohttp.ClientError, OSError) as exc:
            logger.error(f'Connection to driver failed: method={method}, url={url}: {exc}')
            raise DriverConnectionError(f'{method} {url} failed: {exc}') from exc

    async def _ensure_http_session(self) -> aiohttp.ClientSession:
        if not self.is_open:
            timeout = aiohttp.ClientTimeout(total=self._request_timeout)
            self._http_session = self._session_factory(headers=self._headers, timeout=timeout)
            logger.debug('HTTP session opened')
        return self._http_session

    @staticmethod
    def _encode_body(command: Command) -> bytes:
        params = command.get('params', {})
        try:
            return json.dumps(params, allow_nan=False).encode('utf-8')
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f'Parameters of {command["name"]!r} are not JSON serializable: {exc}'
            ) from exc

    @staticmethod
    def _decode_success_body(command_name: str, raw_body: bytes) -> Any:
        try:
            body = json.loads(raw_body.decode('utf-8'))
        except (UnicodeDecodeError, ValueError) as exc:
            raise SerializationError(
                f'Response to {command_name!r} is not valid JSON: {raw_body[:200]!r}'
            ) from exc

        if not isinstance(body, dict) or 'value' not in body:
            raise SerializationError(
                f'Response to {command_name!r} has no "value" member: {body!r}'
            )
        return body['value']

    @staticmethod
    def _decode_error_body(raw_body: bytes) -> Any:
        try:
            return json.loads(raw_body.decode('utf-8'))
        except (UnicodeDecodeError, ValueError):
            return raw_body.decode('utf-8', errors='replace')
