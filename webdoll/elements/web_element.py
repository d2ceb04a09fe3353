from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import aiofiles

from webdoll.commands import ElementCommands, NavigationCommands
from webdoll.constants import WEB_ELEMENT_IDENTIFIER
from webdoll.elements.locator import Locator
from webdoll.elements.mixins import FindElementsMixin
from webdoll.exceptions import (
    InvalidFileExtension,
    MissingScreenshotPath,
    NoSuchElement,
    NotASelectElement,
)
from webdoll.utils import decode_base64_to_bytes, escape_css_string

if TYPE_CHECKING:
    from webdoll.browser.context import BrowsingContext
    from webdoll.browser.session import Session
    from webdoll.protocol.element.types import ElementRect, WebElementReference

logger = logging.getLogger(__name__)


class WebElement(FindElementsMixin):
    """
    Handle to a DOM element of a remote browsing context.

    The handle is only valid in the browsing context it was found in and
    only while the node stays attached to its document. Using it from
    another context raises ``StaleElementReference`` before anything is
    sent; a node removed from the document makes the driver report the
    same error. Handles are never re-resolved behind the caller's back.
    """

    def __init__(self, element_id: str, session: Session, context: BrowsingContext):
        """
        Initialize the handle.

        Args:
            element_id: Opaque element id assigned by the driver.
            session: Session the element was found through.
            context: Browsing context that was current when it was found.
        """
        self._element_id = element_id
        self._session = session
        self._context = context

    @property
    def element_id(self) -> str:
        return self._element_id

    @property
    def session(self) -> Session:
        return self._session

    @property
    def context(self) -> BrowsingContext:
        """Browsing context the element was found in."""
        return self._context

    def to_json(self) -> WebElementReference:
        """Web element reference used to pass this element to a script."""
        return {WEB_ELEMENT_IDENTIFIER: self._element_id}

    @classmethod
    def from_json(
        cls, reference: WebElementReference, session: Session, context: BrowsingContext
    ) -> WebElement:
        return cls(reference[WEB_ELEMENT_IDENTIFIER], session, context)

    async def click(self):
        """Click the element at its in-view center point."""
        logger.debug(f'Clicking element: element_id={self._element_id}')
        await self._execute_command(ElementCommands.click(self._element_id))

    async def clear(self):
        """Clear an editable or resettable element."""
        await self._execute_command(ElementCommands.clear(self._element_id))

    async def send_keys(self, text: str):
        """
        Type text into the element.

        Special keys are written with the ``Key`` code points, e.g.
        ``'query' + Key.ENTER``.
        """
        logger.debug(f'Sending {len(text)} keys to element: element_id={self._element_id}')
        await self._execute_command(ElementCommands.send_keys(self._element_id, text))

    async def text(self) -> str:
        """Rendered text of the element."""
        return await self._execute_command(ElementCommands.get_text(self._element_id))

    async def attr(self, name: str) -> Optional[str]:
        """Value of an HTML attribute, or None when the attribute is absent."""
        return await self._execute_command(ElementCommands.get_attribute(self._element_id, name))

    async def prop(self, name: str) -> Any:
        """Value of a DOM property, or None when it is undefined."""
        return await self._execute_command(ElementCommands.get_property(self._element_id, name))

    async def css_value(self, name: str) -> str:
        return await self._execute_command(ElementCommands.get_css_value(self._element_id, name))

    async def tag_name(self) -> str:
        return await self._execute_command(ElementCommands.get_tag_name(self._element_id))

    async def html(self, inner: bool = False) -> str:
        """Outer HTML of the element, or its inner HTML when ``inner`` is set."""
        value = await self.prop('innerHTML' if inner else 'outerHTML')
        return value or ''

    async def rect(self) -> ElementRect:
        return await self._execute_command(ElementCommands.get_rect(self._element_id))

    async def is_displayed(self) -> bool:
        return await self._execute_command(ElementCommands.is_displayed(self._element_id))

    async def is_enabled(self) -> bool:
        return await self._execute_command(ElementCommands.is_enabled(self._element_id))

    async def is_selected(self) -> bool:
        return await self._execute_command(ElementCommands.is_selected(self._element_id))

    async def enter_frame(self):
        """
        Make this ``<iframe>``/``<frame>`` element's document the current context.

        The element itself belongs to the parent context and is unusable
        until the session returns there.
        """
        await self._session.enter_frame(
            self.to_json(), f'element:{self._element_id}', element=self
        )

    async def follow(self):
        """
        Navigate to the target of this link.

        Raises:
            NoSuchElement: If the element has no ``href`` attribute.
        """
        href = await self.prop('href')
        if not href:
            raise NoSuchElement(f'Element {self._element_id} has no href to follow')
        logger.info(f'Following link: href={href}')
        await self._session.navigate(NavigationCommands.navigate_to(href))

    async def select_by_value(self, value: str):
        """Select the ``<option>`` of this ``<select>`` whose value is ``value``."""
        await self._select_option(Locator.css(f'option[value="{escape_css_string(value)}"]'))

    async def select_by_index(self, index: int):
        """Select the ``<option>`` at a zero-based position."""
        await self._ensure_select()
        options = await self.find_all(Locator.css('option'))
        if not 0 <= index < len(options):
            raise NoSuchElement(f'Select has {len(options)} options, no option at index {index}')
        await options[index].click()

    async def select_by_label(self, label: str):
        """Select the ``<option>`` whose visible text equals ``label``."""
        await self._select_option(
            Locator.xpath(f'.//option[normalize-space(.)={_xpath_literal(label)}]')
        )

    async def screenshot(
        self, path: Optional[str | Path] = None, as_base64: bool = False
    ) -> Optional[str]:
        """
        Capture the element's bounding box as a PNG.

        Args:
            path: File to write the PNG to.
            as_base64: Return the base64 data instead of writing a file.

        Raises:
            MissingScreenshotPath: If neither a path nor base64 output is requested.
            InvalidFileExtension: If the path does not end in ``.png``.
        """
        if not path and not as_base64:
            raise MissingScreenshotPath()
        if path and Path(path).suffix.lower() != '.png':
            raise InvalidFileExtension(f'{Path(path).suffix} extension is not supported.')

        data = await self._execute_command(ElementCommands.take_screenshot(self._element_id))
        if as_base64:
            return data

        async with aiofiles.open(str(path), 'wb') as file:
            await file.write(decode_base64_to_bytes(data))
        logger.info(f'Element screenshot saved to: {path}')
        return None

    async def _select_option(self, locator: Locator):
        await self._ensure_select()
        option = await self.find(locator)
        await option.click()

    async def _ensure_select(self):
        if (await self.tag_name()).lower() != 'select':
            raise NotASelectElement()

    async def _execute_command(self, command) -> Any:
        return await self._session.execute_command(command, element=self)

    def _search_root(self) -> Optional[WebElement]:
        return self

    def __eq__(self, other):
        if not isinstance(other, WebElement):
            return NotImplemented
        return self._session is other._session and self._element_id == other._element_id

    def __hash__(self):
        return hash((id(self._session), self._element_id))

    def __repr__(self):
        return f'WebElement(element_id={self._element_id!r}, context={str(self._context)!r})'


def _xpath_literal(value: str) -> str:
    """Quote a string for XPath 1.0, which has no escape syntax."""
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = value.split('"')
    return 'concat(' + ', \'"\', '.join(f'"{part}"' for part in parts) + ')'
