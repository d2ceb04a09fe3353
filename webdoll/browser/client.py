from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

import aiofiles

from webdoll.browser.options import WebDriverOptions
from webdoll.browser.session import Session
from webdoll.commands import (
    ContextCommands,
    CookieCommands,
    DocumentCommands,
    ElementCommands,
    NavigationCommands,
    PromptCommands,
    SessionCommands,
)
from webdoll.connection import ConnectionHandler
from webdoll.constants import WindowType
from webdoll.elements.locator import Locator
from webdoll.elements.mixins import FindElementsMixin
from webdoll.elements.serialization import decode_value, element_id_from_reference, encode_value
from webdoll.elements.web_element import WebElement
from webdoll.exceptions import InvalidFileExtension, MissingScreenshotPath
from webdoll.utils import decode_base64_to_bytes

if TYPE_CHECKING:
    from webdoll.browser.context import BrowsingContext, WindowHandle
    from webdoll.protocol.base import Command
    from webdoll.protocol.context.types import WindowRect
    from webdoll.protocol.cookie.types import Cookie
    from webdoll.protocol.session.types import StatusResponse, Timeouts

logger = logging.getLogger(__name__)

FrameTarget = Union[None, int, Locator, WebElement]


class Client(FindElementsMixin):
    """
    Asynchronous client for one WebDriver session.

    Primary interface for driving a browser through a W3C WebDriver
    endpoint (chromedriver, geckodriver, a Selenium grid, ...). Navigation,
    windows, frames, element finding, scripts, cookies and user prompts are
    all exposed as coroutines; failures are raised as ``CommandError``
    subclasses and never turned into empty results.

    Usage:
        async with await Client.connect('http://localhost:4444') as client:
            await client.goto('https://example.com')
            heading = await client.find(Locator.css('h1'))
            print(await heading.text())
    """

    def __init__(self, session: Session):
        """
        Initialize the client around an already started session.

        Use ``Client.connect`` to create and start the session in one step.
        """
        self._session = session

    @classmethod
    async def connect(
        cls, webdriver_url: str, options: Optional[WebDriverOptions] = None
    ) -> Client:
        """
        Open a session against a WebDriver endpoint.

        Args:
            webdriver_url: Base URL of the endpoint, e.g. ``http://localhost:4444``.
            options: Requested capabilities and transport settings.

        Raises:
            SessionNotCreated: If the endpoint cannot satisfy the capabilities.
            DriverConnectionError: If the endpoint cannot be reached.
        """
        options = options or WebDriverOptions()
        handler = ConnectionHandler(
            webdriver_url,
            request_timeout=options.request_timeout,
            headers={'User-Agent': options.user_agent},
        )
        session = Session(handler)
        try:
            await session.start(always_match=options.to_capabilities())
        except Exception:
            await handler.close()
            raise
        logger.info(f'Connected to {webdriver_url}: session_id={session.session_id}')
        return cls(session)

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._session.is_active:
            await self.close()

    @property
    def session(self) -> Session:
        return self._session

    @property
    def session_id(self) -> Optional[str]:
        return self._session.session_id

    @property
    def capabilities(self) -> dict[str, Any]:
        return self._session.capabilities

    @property
    def context(self) -> BrowsingContext:
        """Current browsing context (window handle and frame stack)."""
        return self._session.context

    async def close(self):
        """
        End the session and release the HTTP transport.

        Raises:
            InvalidSessionId: If the session is already closed.
        """
        await self._session.close()

    async def status(self) -> StatusResponse:
        """
        Readiness of the endpoint; does not need an active session.

        Without an active session the HTTP transport is closed again after
        the call.
        """
        handler = self._session.connection_handler
        try:
            return await handler.execute_command(SessionCommands.status())
        finally:
            if not self._session.is_active:
                await handler.close()

    async def get_timeouts(self) -> Timeouts:
        return await self._session.execute_command(SessionCommands.get_timeouts())

    async def set_timeouts(
        self,
        script: Optional[int] = None,
        page_load: Optional[int] = None,
        implicit: Optional[int] = None,
    ):
        """Update session timeouts (milliseconds)."""
        await self._session.execute_command(
            SessionCommands.set_timeouts(script=script, page_load=page_load, implicit=implicit)
        )

    async def goto(self, url: str):
        """
        Navigate the current top-level context to ``url``.

        Any frame that was selected is left; the page's top-level document
        becomes the current context.
        """
        logger.info(f'Navigating to: {url}')
        await self._session.navigate(NavigationCommands.navigate_to(url))

    async def current_url(self) -> str:
        return await self._session.execute_command(NavigationCommands.get_current_url())

    async def back(self):
        await self._session.navigate(NavigationCommands.back())

    async def forward(self):
        await self._session.navigate(NavigationCommands.forward())

    async def refresh(self):
        await self._session.navigate(NavigationCommands.refresh())

    async def title(self) -> str:
        return await self._session.execute_command(NavigationCommands.get_title())

    async def source(self) -> str:
        """Serialized DOM of the current context."""
        return await self._session.execute_command(DocumentCommands.get_page_source())

    async def new_window(self, as_tab: bool = False) -> WindowHandle:
        """
        Open a new top-level browsing context without switching to it.

        Returns:
            Handle of the new window or tab.
        """
        window_type = WindowType.TAB if as_tab else WindowType.WINDOW
        response = await self._session.new_window(window_type)
        return response['handle']

    async def windows(self) -> list[WindowHandle]:
        """Handles of every open top-level context, in the driver's order."""
        return await self._session.execute_command(ContextCommands.get_window_handles())

    async def window(self) -> WindowHandle:
        """
        Handle of the current window.

        Raises:
            NoSuchWindow: If the current window was closed.
        """
        return await self._session.execute_command(ContextCommands.get_window_handle())

    async def switch_to_window(self, handle: WindowHandle):
        """Select a window; its top-level document becomes the current context."""
        await self._session.switch_to_window(handle)

    async def close_window(self) -> list[WindowHandle]:
        """
        Close the current window.

        No window is selected afterwards; switch to one of the returned
        handles before issuing more commands. Closing the last window ends
        the session.

        Returns:
            Handles of the windows still open.
        """
        return await self._session.close_window()

    async def get_window_rect(self) -> WindowRect:
        return await self._session.execute_command(ContextCommands.get_window_rect())

    async def set_window_rect(
        self,
        x: Optional[int] = None,
        y: Optional[int] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> WindowRect:
        return await self._session.execute_command(
            ContextCommands.set_window_rect(x=x, y=y, width=width, height=height)
        )

    async def maximize_window(self) -> WindowRect:
        return await self._session.execute_command(ContextCommands.maximize_window())

    async def minimize_window(self) -> WindowRect:
        return await self._session.execute_command(ContextCommands.minimize_window())

    async def fullscreen_window(self) -> WindowRect:
        return await self._session.execute_command(ContextCommands.fullscreen_window())

    async def enter_frame(self, target: FrameTarget = None) -> BrowsingContext:
        """
        Make a frame of the current context the current context.

        Args:
            target: ``None`` for the top-level document of the current window,
                an index into the page's frames, a locator of an
                ``<iframe>``/``<frame>`` element or such an element.

        The frame stack records how a frame was entered, so entering the same
        frame by index and by element yields two different contexts: elements
        found after one are rejected as stale after the other. Enter a frame
        the same way each time to keep handles usable.

        Returns:
            The new current context.

        Raises:
            NoSuchFrame: If the target is not a frame.
            NoSuchElement: If a locator matches nothing.
        """
        if isinstance(target, Locator):
            target = await self.find(target)
        if target is None:
            return await self._session.enter_frame(None, None)
        if isinstance(target, WebElement):
            return await self._session.enter_frame(
                target.to_json(), f'element:{target.element_id}', element=target
            )
        if isinstance(target, bool) or not isinstance(target, int):
            raise TypeError(f'Unsupported frame target: {target!r}')
        return await self._session.enter_frame(target, f'index:{target}')

    async def enter_parent_frame(self) -> BrowsingContext:
        """Select the parent of the current frame; no-op at the top level."""
        return await self._session.enter_parent_frame()

    async def active_element(self) -> WebElement:
        """Element of the current context that has focus."""
        reference, context = await self._session.execute_in_context(
            lambda _: ElementCommands.get_active_element()
        )
        return self._create_element(element_id_from_reference(reference), context)

    async def execute(self, script: str, args: Optional[list] = None) -> Any:
        """
        Run a synchronous script in the current context.

        ``args`` are exposed to the script as ``arguments``; element handles
        in them (at any depth) are passed as web element references, and
        references in the result come back as ``WebElement`` handles.

        Raises:
            SerializationError: If an argument has no JSON form.
            StaleElementReference: If an argument element belongs to another
                context.
            JavascriptError: If the script throws.
        """
        return await self._execute_script(DocumentCommands.execute_script, script, args)

    async def execute_async(self, script: str, args: Optional[list] = None) -> Any:
        """
        Run an asynchronous script in the current context.

        The script signals completion by calling the callback passed as its
        last argument; the value it passes is the result.

        Raises:
            ScriptTimeout: If the callback is not called within the session's
                script timeout.
        """
        return await self._execute_script(DocumentCommands.execute_async_script, script, args)

    async def get_all_cookies(self) -> list[Cookie]:
        return await self._session.execute_command(CookieCommands.get_all_cookies())

    async def get_named_cookie(self, name: str) -> Cookie:
        """
        Raises:
            NoSuchCookie: If no cookie of the current page has this name.
        """
        return await self._session.execute_command(CookieCommands.get_named_cookie(name))

    async def add_cookie(self, cookie: Cookie):
        await self._session.execute_command(CookieCommands.add_cookie(cookie))

    async def delete_cookie(self, name: str):
        await self._session.execute_command(CookieCommands.delete_cookie(name))

    async def delete_all_cookies(self):
        await self._session.execute_command(CookieCommands.delete_all_cookies())

    async def accept_alert(self):
        await self._session.execute_command(PromptCommands.accept_alert())

    async def dismiss_alert(self):
        await self._session.execute_command(PromptCommands.dismiss_alert())

    async def get_alert_text(self) -> str:
        return await self._session.execute_command(PromptCommands.get_alert_text())

    async def send_alert_text(self, text: str):
        """Type into the open ``window.prompt()`` dialog."""
        await self._session.execute_command(PromptCommands.send_alert_text(text))

    async def screenshot(
        self, path: Optional[str | Path] = None, as_base64: bool = False
    ) -> Optional[str]:
        """
        Capture the viewport of the current window as a PNG.

        Args:
            path: File to write the PNG to.
            as_base64: Return the base64 data instead of writing a file.

        Returns:
            Base64 screenshot data if as_base64=True, None otherwise.

        Raises:
            MissingScreenshotPath: If path is None and as_base64 is False.
            InvalidFileExtension: If the path does not end in ``.png``.
        """
        if not path and not as_base64:
            raise MissingScreenshotPath()
        if path and Path(path).suffix.lower() != '.png':
            raise InvalidFileExtension(f'{Path(path).suffix} extension is not supported.')

        logger.info(f'Taking screenshot: path={path}, as_base64={as_base64}')
        data = await self._session.execute_command(DocumentCommands.take_screenshot())
        if as_base64:
            return data

        async with aiofiles.open(str(path), 'wb') as file:
            await file.write(decode_base64_to_bytes(data))
        logger.info(f'Screenshot saved to: {path}')
        return None

    async def issue_command(self, command: Command, timeout: Optional[float] = None) -> Any:
        """
        Send an arbitrary command through this session.

        Intended for vendor extension endpoints that have no dedicated
        method. The route may use the ``{session_id}`` placeholder.
        """
        return await self._session.execute_command(command, timeout=timeout)

    async def _execute_script(self, build, script: str, args: Optional[list]) -> Any:
        args = list(args or [])
        result, context = await self._session.execute_in_context(
            lambda live_context: build(script, encode_value(args, live_context))
        )
        return decode_value(
            result, lambda element_id: self._create_element(element_id, context)
        )

    def __repr__(self):
        return f'Client(session_id={self.session_id!r}, context={str(self.context)!r})'
