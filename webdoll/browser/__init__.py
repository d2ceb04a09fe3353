from webdoll.browser.client import Client
from webdoll.browser.context import BrowsingContext, WindowHandle
from webdoll.browser.options import WebDriverOptions
from webdoll.browser.session import Session

__all__ = ['BrowsingContext', 'Client', 'Session', 'WebDriverOptions', 'WindowHandle']
