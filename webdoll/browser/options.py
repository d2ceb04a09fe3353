from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Optional

from webdoll.constants import PageLoadStrategy
from webdoll.exceptions import ArgumentAlreadyExistsInOptions, ArgumentNotFoundInOptions
from webdoll.protocol.session.types import Timeouts

logger = logging.getLogger(__name__)

_VENDOR_OPTIONS_KEYS = {
    'chrome': 'goog:chromeOptions',
    'chromium': 'goog:chromeOptions',
    'microsoftedge': 'ms:edgeOptions',
    'firefox': 'moz:firefoxOptions',
}

_HEADLESS_ARGUMENTS = {
    'goog:chromeOptions': '--headless=new',
    'ms:edgeOptions': '--headless=new',
    'moz:firefoxOptions': '-headless',
}


class WebDriverOptions:
    """
    Session configuration: requested capabilities plus transport settings.

    Capabilities end up in the ``alwaysMatch`` member of the new session
    request. Browser arguments and the binary location go to the vendor
    options object of the selected browser (``goog:chromeOptions``,
    ``moz:firefoxOptions``, ``ms:edgeOptions``).
    """

    def __init__(self, browser_name: Optional[str] = None):
        """
        Initialize options.

        Args:
            browser_name: Browser to request (``chrome``, ``firefox``, ...).
                None lets the endpoint pick its default browser.
        """
        self._browser_name = browser_name
        self._arguments: list[str] = []
        self._binary_location: Optional[str] = None
        self._accept_insecure_certs: Optional[bool] = None
        self._page_load_strategy: Optional[PageLoadStrategy] = None
        self._timeouts = Timeouts()
        self._capabilities: dict[str, Any] = {}
        self._request_timeout: Optional[float] = None
        self._user_agent = 'webdoll'

    @property
    def browser_name(self) -> Optional[str]:
        return self._browser_name

    @browser_name.setter
    def browser_name(self, name: Optional[str]):
        self._browser_name = name

    @property
    def arguments(self) -> list[str]:
        """Command line arguments passed to the browser."""
        return self._arguments

    def add_argument(self, argument: str):
        """
        Add a browser command line argument.

        Raises:
            ArgumentAlreadyExistsInOptions: If the argument was already added.
        """
        if argument in self._arguments:
            raise ArgumentAlreadyExistsInOptions(f'Argument already exists: {argument}')
        self._arguments.append(argument)
        logger.debug(f'Added browser argument: {argument}')

    def remove_argument(self, argument: str):
        if argument not in self._arguments:
            raise ArgumentNotFoundInOptions(f'Argument not found: {argument}')
        self._arguments.remove(argument)
        logger.debug(f'Removed browser argument: {argument}')

    @property
    def headless(self) -> bool:
        argument = _HEADLESS_ARGUMENTS.get(self._vendor_key or '')
        return argument is not None and argument in self._arguments

    @headless.setter
    def headless(self, headless: bool):
        argument = _HEADLESS_ARGUMENTS.get(self._vendor_key or '')
        if argument is None:
            raise ValueError(f'Headless mode is not known for browser {self._browser_name!r}')
        if headless and argument not in self._arguments:
            self._arguments.append(argument)
        elif not headless and argument in self._arguments:
            self._arguments.remove(argument)

    @property
    def binary_location(self) -> Optional[str]:
        return self._binary_location

    @binary_location.setter
    def binary_location(self, location: Optional[str]):
        self._binary_location = location

    @property
    def accept_insecure_certs(self) -> Optional[bool]:
        return self._accept_insecure_certs

    @accept_insecure_certs.setter
    def accept_insecure_certs(self, accept: Optional[bool]):
        self._accept_insecure_certs = accept

    @property
    def page_load_strategy(self) -> Optional[PageLoadStrategy]:
        return self._page_load_strategy

    @page_load_strategy.setter
    def page_load_strategy(self, strategy: Optional[PageLoadStrategy]):
        self._page_load_strategy = PageLoadStrategy(strategy) if strategy else None

    @property
    def timeouts(self) -> Timeouts:
        """Session timeouts in milliseconds (``script``, ``pageLoad``, ``implicit``)."""
        return self._timeouts

    def set_timeouts(
        self,
        script: Optional[int] = None,
        page_load: Optional[int] = None,
        implicit: Optional[int] = None,
    ):
        if script is not None:
            self._timeouts['script'] = script
        if page_load is not None:
            self._timeouts['pageLoad'] = page_load
        if implicit is not None:
            self._timeouts['implicit'] = implicit

    @property
    def request_timeout(self) -> Optional[float]:
        """Seconds the client waits for each round trip (None = no limit)."""
        return self._request_timeout

    @request_timeout.setter
    def request_timeout(self, timeout: Optional[float]):
        if timeout is not None and timeout <= 0:
            raise ValueError('request_timeout must be positive')
        self._request_timeout = timeout

    @property
    def user_agent(self) -> str:
        """User-Agent header of the HTTP transport (not of the browser)."""
        return self._user_agent

    @user_agent.setter
    def user_agent(self, user_agent: str):
        self._user_agent = user_agent

    def set_capability(self, name: str, value: Any):
        """Set an arbitrary capability, e.g. ``platformName`` or a vendor key."""
        self._capabilities[name] = value

    def to_capabilities(self) -> dict[str, Any]:
        """Build the ``alwaysMatch`` capabilities object."""
        capabilities = deepcopy(self._capabilities)
        if self._browser_name:
            capabilities['browserName'] = self._browser_name
        if self._accept_insecure_certs is not None:
            capabilities['acceptInsecureCerts'] = self._accept_insecure_certs
        if self._page_load_strategy is not None:
            capabilities['pageLoadStrategy'] = self._page_load_strategy.value
        if self._timeouts:
            capabilities['timeouts'] = dict(self._timeouts)

        vendor_key = self._vendor_key
        if vendor_key and (self._arguments or self._binary_location):
            vendor_options = capabilities.setdefault(vendor_key, {})
            if self._arguments:
                vendor_options['args'] = [
                    *vendor_options.get('args', []),
                    *self._arguments,
                ]
            if self._binary_location:
                vendor_options['binary'] = self._binary_location
        elif self._arguments or self._binary_location:
            logger.warning(
                f'Browser arguments ignored: no vendor options known for {self._browser_name!r}'
            )
        return capabilities

    @property
    def _vendor_key(self) -> Optional[str]:
        if not self._browser_name:
            return None
        return _VENDOR_OPTIONS_KEYS.get(self._browser_name.lower())
