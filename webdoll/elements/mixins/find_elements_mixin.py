from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Literal, Optional, Union, overload

from webdoll.commands import ElementCommands
from webdoll.elements.locator import Locator
from webdoll.elements.serialization import element_id_from_reference
from webdoll.exceptions import NoSuchElement, SerializationError

if TYPE_CHECKING:
    from webdoll.browser.context import BrowsingContext
    from webdoll.browser.session import Session
    from webdoll.elements.web_element import WebElement


logger = logging.getLogger(__name__)

_POLL_INTERVAL = 0.5


def create_web_element(*args, **kwargs):
    """
    Create WebElement instance avoiding circular imports.

    Factory method that dynamically imports WebElement at runtime
    to prevent circular import dependencies.
    """
    from webdoll.elements.web_element import WebElement  # noqa: PLC0415

    return WebElement(*args, **kwargs)


class FindElementsMixin:
    """
    Mixin providing element finding and waiting capabilities.

    Resolves locators through the driver's find commands, either from the
    document of the current browsing context (client) or below an element
    (element handle). Found elements are bound to the context the find
    command ran in.
    """

    if TYPE_CHECKING:
        _session: Session

    async def find(self, locator: Locator, timeout: float = 0) -> WebElement:
        """
        Find the first element matching a locator.

        Args:
            locator: What to look for.
            timeout: Maximum seconds to wait for the element to appear.

        Returns:
            The first matching element, in document order.

        Raises:
            NoSuchElement: If nothing matches (after waiting, when a timeout is set).
        """
        logger.debug(f'find() called with locator={locator}, timeout={timeout}')
        return await self.find_or_wait_element(locator, timeout=timeout, find_all=False)

    async def find_all(self, locator: Locator, timeout: float = 0) -> list[WebElement]:
        """
        Find every element matching a locator.

        Returns:
            Matching elements in the order the driver reports them; an empty
            list when nothing matches before the timeout.
        """
        logger.debug(f'find_all() called with locator={locator}, timeout={timeout}')
        return await self.find_or_wait_element(locator, timeout=timeout, find_all=True)

    @overload
    async def query(
        self, expression: str, timeout: float = ..., find_all: Literal[False] = False
    ) -> WebElement: ...

    @overload
    async def query(
        self, expression: str, timeout: float = ..., find_all: Literal[True] = True
    ) -> list[WebElement]: ...

    async def query(
        self, expression: str, timeout: float = 0, find_all: bool = False
    ) -> Union[WebElement, list[WebElement]]:
        """
        Find element(s) using a raw CSS selector or XPath expression.

        Selector type is determined from the expression
        (see ``Locator.from_expression``).
        """
        locator = Locator.from_expression(expression)
        logger.debug(f'query() resolved {expression!r} to {locator}')
        return await self.find_or_wait_element(locator, timeout=timeout, find_all=find_all)

    async def find_or_wait_element(
        self,
        locator: Locator,
        timeout: float = 0,
        find_all: bool = False,
    ) -> Union[WebElement, list[WebElement]]:
        """
        Core element finding method with optional waiting capability.

        If a timeout is given, repeatedly attempts to find elements with 0.5s
        delays until success or timeout.

        Raises:
            NoSuchElement: For a single-element search that found nothing.
        """
        if not timeout:
            if find_all:
                return await self._find_elements(locator)
            return await self._find_element(locator)

        start_time = asyncio.get_event_loop().time()
        while True:
            try:
                if find_all:
                    elements = await self._find_elements(locator)
                    if elements:
                        logger.debug(f'Found {len(elements)} elements within timeout window')
                        return elements
                else:
                    element = await self._find_element(locator)
                    logger.debug('Found 1 element within timeout window')
                    return element
            except NoSuchElement:
                if asyncio.get_event_loop().time() - start_time > timeout:
                    logger.debug(f'Timed out after {timeout}s waiting for {locator}')
                    raise

            if find_all and asyncio.get_event_loop().time() - start_time > timeout:
                logger.debug(f'Timed out after {timeout}s; no element matches {locator}')
                return []

            await asyncio.sleep(_POLL_INTERVAL)

    async def _find_element(self, locator: Locator) -> WebElement:
        scope = self._search_root()
        reference, context = await self._session.execute_in_context(
            lambda _: ElementCommands.find_element(
                locator.by, locator.value, scope.element_id if scope else None
            ),
            element=scope,
        )
        element_id = element_id_from_reference(reference)
        logger.debug(f'_find_element() found element_id={element_id} for {locator}')
        return self._create_element(element_id, context)

    async def _find_elements(self, locator: Locator) -> list[WebElement]:
        scope = self._search_root()
        references, context = await self._session.execute_in_context(
            lambda _: ElementCommands.find_elements(
                locator.by, locator.value, scope.element_id if scope else None
            ),
            element=scope,
        )
        if not isinstance(references, list):
            raise SerializationError(f'Expected a list of element references, got {references!r}')
        elements = [
            self._create_element(element_id_from_reference(reference), context)
            for reference in references
        ]
        logger.debug(f'_find_elements() returning {len(elements)} elements for {locator}')
        return elements

    def _create_element(self, element_id: str, context: BrowsingContext) -> WebElement:
        return create_web_element(element_id, self._session, context)

    def _search_root(self) -> Optional[WebElement]:
        """Element below which searches run; None searches the whole document."""
        return None
