from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from webdoll.browser.context import BrowsingContext, WindowHandle
from webdoll.commands import ContextCommands, SessionCommands
from webdoll.constants import SessionState, WindowType
from webdoll.exceptions import (
    CommandError,
    InvalidSessionId,
    NoSuchWindow,
    SerializationError,
    StaleElementReference,
)

if TYPE_CHECKING:
    from webdoll.connection import ConnectionHandler
    from webdoll.elements.web_element import WebElement
    from webdoll.protocol.base import Command
    from webdoll.protocol.context.types import NewWindowResponse
    from webdoll.protocol.session.types import NewSessionResponse

logger = logging.getLogger(__name__)


class Session:
    """
    One WebDriver session and its browsing context state.

    The session owns the connection handler and the remote session id, and
    tracks the current browsing context (window handle plus frame stack).
    Clients and element handles share a session by reference; only the
    frame and window operations defined here change the current context.

    Commands are serialized with a lock: a command that changes the context
    and the matching local update happen in the same critical section, so a
    concurrent task never observes one without the other.
    """

    def __init__(self, connection_handler: ConnectionHandler):
        self._connection_handler = connection_handler
        self._session_id: Optional[str] = None
        self._capabilities: dict[str, Any] = {}
        self._state = SessionState.NOT_STARTED
        self._context = BrowsingContext(window=None)
        self._lock = asyncio.Lock()

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    @property
    def capabilities(self) -> dict[str, Any]:
        """Capabilities the endpoint reported when the session was created."""
        return self._capabilities

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state == SessionState.ACTIVE

    @property
    def context(self) -> BrowsingContext:
        """Browsing context the next context-scoped command targets."""
        return self._context

    @property
    def connection_handler(self) -> ConnectionHandler:
        return self._connection_handler

    async def start(
        self,
        always_match: Optional[dict[str, Any]] = None,
        first_match: Optional[list[dict[str, Any]]] = None,
    ) -> NewSessionResponse:
        """
        Perform the new session handshake and select the initial window.

        If the initial window cannot be read, the remote session is deleted
        again and this session ends up closed.

        Raises:
            InvalidSessionId: If this session was already started.
            SessionNotCreated: If the endpoint refuses the capabilities.
        """
        async with self._lock:
            if self._state != SessionState.NOT_STARTED:
                raise InvalidSessionId(f'Session is already {self._state.value}')

            response: NewSessionResponse = await self._connection_handler.execute_command(
                SessionCommands.new_session(always_match, first_match)
            )
            if not isinstance(response, dict) or not response.get('sessionId'):
                raise SerializationError(f'New Session response has no sessionId: {response!r}')

            self._session_id = response['sessionId']
            self._capabilities = response.get('capabilities', {})
            self._state = SessionState.ACTIVE
            logger.info(f'Session created: session_id={self._session_id}')

            try:
                handle = await self._execute(ContextCommands.get_window_handle())
            except Exception:
                await self._abandon()
                raise
            self._context = BrowsingContext(window=handle)
            logger.debug(f'Initial browsing context: {self._context}')
            return response

    async def execute_command(
        self,
        command: Command,
        *,
        element: Optional[WebElement] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Send a session command and return the response value.

        Args:
            command: Command to send.
            element: Element the command addresses. It must have been found in
                the current browsing context.
            timeout: Per-call deadline in seconds.

        Raises:
            InvalidSessionId: If the session is not active.
            StaleElementReference: If ``element`` belongs to another context.
        """
        async with self._lock:
            self._ensure_active()
            if element is not None:
                self._ensure_element_context(element)
            return await self._execute(command, timeout=timeout)

    async def execute_in_context(
        self,
        build_command: Callable[[BrowsingContext], Command],
        *,
        element: Optional[WebElement] = None,
        timeout: Optional[float] = None,
    ) -> tuple[Any, BrowsingContext]:
        """
        Build and send a context-scoped command against the live context.

        The command is built while the session lock is held, so arguments
        that depend on the context (element references) are checked against
        the context the command really runs in.

        Returns:
            The response value and the context the command ran in.
        """
        async with self._lock:
            self._ensure_active()
            if element is not None:
                self._ensure_element_context(element)
            context = self._context
            value = await self._execute(build_command(context), timeout=timeout)
            return value, context

    async def navigate(self, command: Command) -> Any:
        """
        Send a navigation command (navigate to, back, forward, refresh).

        Navigation always targets the top-level context of the current window
        and leaves it selected, so the frame stack is dropped.
        """
        async with self._lock:
            value = await self._execute(command)
            self._context = self._context.top_level()
            return value

    async def enter_frame(
        self,
        frame_id: Any,
        frame_key: Optional[str],
        element: Optional[WebElement] = None,
    ) -> BrowsingContext:
        """
        Switch to a frame of the current context.

        Args:
            frame_id: Wire form of the target (``None``, an index or a web
                element reference).
            frame_key: Identifier pushed on the frame stack; ``None`` selects
                the top-level context of the current window.
            element: The frame element when ``frame_id`` references one.
        """
        async with self._lock:
            self._ensure_active()
            if element is not None:
                self._ensure_element_context(element)
            await self._execute(ContextCommands.switch_to_frame(frame_id))
            if frame_key is None:
                self._context = self._context.top_level()
            else:
                self._context = self._context.enter(frame_key)
            logger.info(f'Entered frame: context={self._context}')
            return self._context

    async def enter_parent_frame(self) -> BrowsingContext:
        """Switch to the parent frame; a top-level context stays where it is."""
        async with self._lock:
            await self._execute(ContextCommands.switch_to_parent_frame())
            self._context = self._context.parent()
            logger.info(f'Entered parent frame: context={self._context}')
            return self._context

    async def switch_to_window(self, handle: WindowHandle) -> BrowsingContext:
        async with self._lock:
            await self._execute(ContextCommands.switch_to_window(handle))
            self._context = BrowsingContext(window=handle)
            logger.info(f'Switched to window: handle={handle}')
            return self._context

    async def new_window(self, window_type: WindowType) -> NewWindowResponse:
        """Open a new top-level context; the current context is not changed."""
        async with self._lock:
            response: NewWindowResponse = await self._execute(
                ContextCommands.new_window(window_type)
            )
            if not isinstance(response, dict) or not isinstance(response.get('handle'), str):
                raise SerializationError(f'New Window response has no handle: {response!r}')
            logger.info(f'Opened new {window_type.value}: handle={response["handle"]}')
            return response

    async def close_window(self) -> list[WindowHandle]:
        """
        Close the current top-level context.

        The current window handle is left dangling until the caller switches
        to another window. Closing the last window ends the session.

        Raises:
            NoSuchWindow: If the session already ended because its last window
                was closed.
        """
        async with self._lock:
            if self._state == SessionState.CLOSED:
                raise NoSuchWindow(
                    f'No window left to close: session {self._session_id} has ended'
                )
            remaining: list[WindowHandle] = await self._execute(ContextCommands.close_window())
            if not isinstance(remaining, list):
                raise SerializationError(
                    f'Close Window response is not a list of handles: {remaining!r}'
                )
            logger.info(
                f'Closed window: handle={self._context.window}, remaining={len(remaining)}'
            )
            if not remaining:
                logger.info(f'Last window closed; session {self._session_id} ended')
                await self._mark_closed()
            return remaining

    async def close(self):
        """
        Delete the remote session and release the transport.

        Raises:
            InvalidSessionId: If the session is not active.
        """
        async with self._lock:
            self._ensure_active()
            try:
                await self._connection_handler.execute_command(
                    SessionCommands.delete_session(), self._session_id
                )
                logger.info(f'Session closed: session_id={self._session_id}')
            finally:
                await self._mark_closed()

    async def _execute(self, command: Command, timeout: Optional[float] = None) -> Any:
        self._ensure_active()
        try:
            return await self._connection_handler.execute_command(
                command, self._session_id, timeout=timeout
            )
        except InvalidSessionId:
            logger.warning(f'Driver no longer knows session {self._session_id}')
            await self._mark_closed()
            raise

    def _ensure_active(self):
        if self._state == SessionState.NOT_STARTED:
            raise InvalidSessionId('Session has not been started')
        if self._state == SessionState.CLOSED:
            raise InvalidSessionId(f'Session {self._session_id} is closed')

    def _ensure_element_context(self, element: WebElement):
        if element.context != self._context:
            raise StaleElementReference(
                f'Element {element.element_id} was found in context {element.context} '
                f'but the current context is {self._context}'
            )

    async def _abandon(self):
        """Delete a session whose setup failed after the handshake and close it locally."""
        if self._state == SessionState.ACTIVE:
            try:
                await self._connection_handler.execute_command(
                    SessionCommands.delete_session(), self._session_id
                )
            except CommandError as exc:
                logger.warning(f'Could not delete session {self._session_id}: {exc!r}')
        await self._mark_closed()

    async def _mark_closed(self):
        self._state = SessionState.CLOSED
        await self._connection_handler.close()
