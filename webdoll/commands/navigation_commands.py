from __future__ import annotations

from webdoll.protocol.base import Command, EmptyParams, EmptyResponse


class NavigationCommands:
    """Factory for top-level browsing context navigation commands."""

    @staticmethod
    def navigate_to(url: str) -> Command[dict, EmptyResponse]:
        return Command(
            name='Navigate To',
            method='POST',
            route='/session/{session_id}/url',
            params={'url': url},
        )

    @staticmethod
    def get_current_url() -> Command[EmptyParams, str]:
        return Command(name='Get Current URL', method='GET', route='/session/{session_id}/url')

    @staticmethod
    def back() -> Command[EmptyParams, EmptyResponse]:
        return Command(name='Back', method='POST', route='/session/{session_id}/back')

    @staticmethod
    def forward() -> Command[EmptyParams, EmptyResponse]:
        return Command(name='Forward', method='POST', route='/session/{session_id}/forward')

    @staticmethod
    def refresh() -> Command[EmptyParams, EmptyResponse]:
        return Command(name='Refresh', method='POST', route='/session/{session_id}/refresh')

    @staticmethod
    def get_title() -> Command[EmptyParams, str]:
        return Command(name='Get Title', method='GET', route='/session/{session_id}/title')
