"""Conversion between element handles and web element references in script payloads."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Callable

from webdoll.constants import WEB_ELEMENT_IDENTIFIER
from webdoll.exceptions import SerializationError, StaleElementReference

if TYPE_CHECKING:
    from webdoll.browser.context import BrowsingContext
    from webdoll.elements.web_element import WebElement

_SCALAR_TYPES = (str, int, float, bool, type(None))


def is_web_element_reference(value: Any) -> bool:
    """Whether ``value`` is a single-key web element reference object."""
    return (
        isinstance(value, dict)
        and len(value) == 1
        and isinstance(value.get(WEB_ELEMENT_IDENTIFIER), str)
    )


def encode_value(value: Any, context: BrowsingContext) -> Any:
    """
    Turn a script argument into its JSON wire form.

    Element handles become web element references, recursively through
    lists, tuples and dicts. Reference objects written by hand pass through
    untouched; the driver decides whether it knows them.

    Raises:
        StaleElementReference: If an element was found in another browsing
            context than ``context``.
        SerializationError: If a value has no JSON representation.
    """
    from webdoll.elements.web_element import WebElement  # noqa: PLC0415

    if isinstance(value, WebElement):
        if value.context != context:
            raise StaleElementReference(
                f'Element {value.element_id} passed as a script argument was found in '
                f'context {value.context}, not in the current context {context}'
            )
        return value.to_json()
    if isinstance(value, float) and not math.isfinite(value):
        raise SerializationError(f'{value!r} has no JSON representation')
    if isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, (list, tuple)):
        return [encode_value(item, context) for item in value]
    if isinstance(value, dict):
        encoded = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise SerializationError(f'Object keys must be strings, got {key!r}')
            encoded[key] = encode_value(item, context)
        return encoded
    raise SerializationError(f'{type(value).__name__} is not JSON serializable: {value!r}')


def decode_value(value: Any, create_element: Callable[[str], WebElement]) -> Any:
    """
    Turn a script result into Python values.

    Web element references become handles built by ``create_element``;
    everything else is returned as decoded JSON.
    """
    if is_web_element_reference(value):
        return create_element(value[WEB_ELEMENT_IDENTIFIER])
    if isinstance(value, list):
        return [decode_value(item, create_element) for item in value]
    if isinstance(value, dict):
        return {key: decode_value(item, create_element) for key, item in value.items()}
    return value


def element_id_from_reference(reference: Any) -> str:
    """
    Extract the element id from a reference returned by a find command.

    Raises:
        SerializationError: If ``reference`` is not a web element reference.
    """
    if isinstance(reference, dict) and isinstance(reference.get(WEB_ELEMENT_IDENTIFIER), str):
        return reference[WEB_ELEMENT_IDENTIFIER]
    raise SerializationError(f'Expected a web element reference, got {reference!r}')
