from __future__ import annotations

from dataclasses import dataclass

from webdoll.constants import By
from webdoll.protocol.element.types import FindElementParams
from webdoll.utils import escape_css_string


@dataclass(frozen=True)
class Locator:
    """
    How to find an element: a location strategy and its query.

    Build instances with the class methods rather than the constructor; they
    translate conveniences such as lookup by id into a strategy the driver
    understands.
    """

    by: By
    value: str

    @classmethod
    def css(cls, selector: str) -> Locator:
        return cls(By.CSS_SELECTOR, selector)

    @classmethod
    def link_text(cls, text: str) -> Locator:
        """Anchor whose visible text equals ``text``."""
        return cls(By.LINK_TEXT, text)

    @classmethod
    def partial_link_text(cls, text: str) -> Locator:
        return cls(By.PARTIAL_LINK_TEXT, text)

    @classmethod
    def xpath(cls, expression: str) -> Locator:
        return cls(By.XPATH, expression)

    @classmethod
    def tag_name(cls, name: str) -> Locator:
        return cls(By.TAG_NAME, name)

    @classmethod
    def id(cls, element_id: str) -> Locator:
        """
        Element whose ``id`` attribute equals ``element_id``.

        The protocol has no id strategy; this resolves through an attribute
        CSS selector so ids that are not valid CSS identifiers still work.
        """
        return cls(By.CSS_SELECTOR, f'[id="{escape_css_string(element_id)}"]')

    @classmethod
    def from_expression(cls, expression: str) -> Locator:
        """
        Build a locator from a raw CSS selector or XPath expression.

        Patterns:
        - XPath: starts with ./, /, or (
        - Default: CSS selector
        """
        if expression.startswith(('./', '/', '(')):
            return cls.xpath(expression)
        return cls.css(expression)

    def to_params(self) -> FindElementParams:
        return FindElementParams(using=self.by.value, value=self.value)

    def __str__(self):
        return f'{self.by.value}={self.value!r}'
