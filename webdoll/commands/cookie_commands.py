from __future__ import annotations

from webdoll.protocol.base import Command, EmptyParams, EmptyResponse
from webdoll.protocol.cookie.types import AddCookieParams, Cookie


class CookieCommands:
    """Factory for cookie commands scoped to the current document."""

    @staticmethod
    def get_all_cookies() -> Command[EmptyParams, list[Cookie]]:
        return Command(name='Get All Cookies', method='GET', route='/session/{session_id}/cookie')

    @staticmethod
    def get_named_cookie(name: str) -> Command[EmptyParams, Cookie]:
        return Command(
            name='Get Named Cookie',
            method='GET',
            route='/session/{session_id}/cookie/{name}',
            path_params={'name': name},
        )

    @staticmethod
    def add_cookie(cookie: Cookie) -> Command[AddCookieParams, EmptyResponse]:
        return Command(
            name='Add Cookie',
            method='POST',
            route='/session/{session_id}/cookie',
            params=AddCookieParams(cookie=cookie),
        )

    @staticmethod
    def delete_cookie(name: str) -> Command[EmptyParams, EmptyResponse]:
        return Command(
            name='Delete Cookie',
            method='DELETE',
            route='/session/{session_id}/cookie/{name}',
            path_params={'name': name},
        )

    @staticmethod
    def delete_all_cookies() -> Command[EmptyParams, EmptyResponse]:
        return Command(
            name='Delete All Cookies', method='DELETE', route='/session/{session_id}/cookie'
        )
