from webdoll.browser import BrowsingContext, Client, Session, WebDriverOptions
from webdoll.constants import By, Key
from webdoll.elements import Locator, WebElement

__all__ = [
    'BrowsingContext',
    'By',
    'Client',
    'Key',
    'Locator',
    'Session',
    'WebDriverOptions',
    'WebElement',
]
