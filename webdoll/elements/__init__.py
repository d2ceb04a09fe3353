from webdoll.elements.locator import Locator
from webdoll.elements.web_element import WebElement

__all__ = ['Locator', 'WebElement']
