from __future__ import annotations

from typing import Optional

from webdoll.constants import By
from webdoll.protocol.base import Command, EmptyParams, EmptyResponse, JsonValue
from webdoll.protocol.element.types import (
    ElementRect,
    FindElementParams,
    SendKeysParams,
    WebElementReference,
)

_ELEMENT_ROUTE = '/session/{session_id}/element/{element_id}'


class ElementCommands:
    """
    Factory for element retrieval, state and interaction commands.

    Commands that take ``element_id`` address a previously resolved element
    of the current browsing context.
    """

    @staticmethod
    def find_element(
        by: By, value: str, element_id: Optional[str] = None
    ) -> Command[FindElementParams, WebElementReference]:
        """
        Create a find command for the first element matching a locator.

        Args:
            by: Location strategy.
            value: Selector for the strategy.
            element_id: Search only below this element when given.
        """
        if element_id is None:
            return Command(
                name='Find Element',
                method='POST',
                route='/session/{session_id}/element',
                params=FindElementParams(using=by.value, value=value),
            )
        return Command(
            name='Find Element From Element',
            method='POST',
            route=f'{_ELEMENT_ROUTE}/element',
            path_params={'element_id': element_id},
            params=FindElementParams(using=by.value, value=value),
        )

    @staticmethod
    def find_elements(
        by: By, value: str, element_id: Optional[str] = None
    ) -> Command[FindElementParams, list[WebElementReference]]:
        if element_id is None:
            return Command(
                name='Find Elements',
                method='POST',
                route='/session/{session_id}/elements',
                params=FindElementParams(using=by.value, value=value),
            )
        return Command(
            name='Find Elements From Element',
            method='POST',
            route=f'{_ELEMENT_ROUTE}/elements',
            path_params={'element_id': element_id},
            params=FindElementParams(using=by.value, value=value),
        )

    @staticmethod
    def get_active_element() -> Command[EmptyParams, WebElementReference]:
        return Command(
            name='Get Active Element', method='GET', route='/session/{session_id}/element/active'
        )

    @staticmethod
    def is_selected(element_id: str) -> Command[EmptyParams, bool]:
        return ElementCommands._element_get('Is Element Selected', element_id, 'selected')

    @staticmethod
    def is_enabled(element_id: str) -> Command[EmptyParams, bool]:
        return ElementCommands._element_get('Is Element Enabled', element_id, 'enabled')

    @staticmethod
    def is_displayed(element_id: str) -> Command[EmptyParams, bool]:
        return ElementCommands._element_get('Is Element Displayed', element_id, 'displayed')

    @staticmethod
    def get_attribute(element_id: str, name: str) -> Command[EmptyParams, Optional[str]]:
        return Command(
            name='Get Element Attribute',
            method='GET',
            route=f'{_ELEMENT_ROUTE}/attribute/{{name}}',
            path_params={'element_id': element_id, 'name': name},
        )

    @staticmethod
    def get_property(element_id: str, name: str) -> Command[EmptyParams, JsonValue]:
        return Command(
            name='Get Element Property',
            method='GET',
            route=f'{_ELEMENT_ROUTE}/property/{{name}}',
            path_params={'element_id': element_id, 'name': name},
        )

    @staticmethod
    def get_css_value(element_id: str, property_name: str) -> Command[EmptyParams, str]:
        return Command(
            name='Get Element CSS Value',
            method='GET',
            route=f'{_ELEMENT_ROUTE}/css/{{property_name}}',
            path_params={'element_id': element_id, 'property_name': property_name},
        )

    @staticmethod
    def get_text(element_id: str) -> Command[EmptyParams, str]:
        return ElementCommands._element_get('Get Element Text', element_id, 'text')

    @staticmethod
    def get_tag_name(element_id: str) -> Command[EmptyParams, str]:
        return ElementCommands._element_get('Get Element Tag Name', element_id, 'name')

    @staticmethod
    def get_rect(element_id: str) -> Command[EmptyParams, ElementRect]:
        return ElementCommands._element_get('Get Element Rect', element_id, 'rect')

    @staticmethod
    def take_screenshot(element_id: str) -> Command[EmptyParams, str]:
        return ElementCommands._element_get('Take Element Screenshot', element_id, 'screenshot')

    @staticmethod
    def click(element_id: str) -> Command[EmptyParams, EmptyResponse]:
        return ElementCommands._element_post('Element Click', element_id, 'click', EmptyParams())

    @staticmethod
    def clear(element_id: str) -> Command[EmptyParams, EmptyResponse]:
        return ElementCommands._element_post('Element Clear', element_id, 'clear', EmptyParams())

    @staticmethod
    def send_keys(element_id: str, text: str) -> Command[SendKeysParams, EmptyResponse]:
        return ElementCommands._element_post(
            'Element Send Keys', element_id, 'value', SendKeysParams(text=text)
        )

    @staticmethod
    def _element_get(name: str, element_id: str, endpoint: str) -> Command:
        return Command(
            name=name,
            method='GET',
            route=f'{_ELEMENT_ROUTE}/{endpoint}',
            path_params={'element_id': element_id},
        )

    @staticmethod
    def _element_post(name: str, element_id: str, endpoint: str, params: dict) -> Command:
        return Command(
            name=name,
            method='POST',
            route=f'{_ELEMENT_ROUTE}/{endpoint}',
            path_params={'element_id': element_id},
            params=params,
        )
