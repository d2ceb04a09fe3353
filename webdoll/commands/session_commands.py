from __future__ import annotations

from typing import Any, Optional

from webdoll.protocol.base import Command, EmptyParams, EmptyResponse
from webdoll.protocol.session.types import (
    CapabilitiesRequest,
    NewSessionParams,
    NewSessionResponse,
    StatusResponse,
    Timeouts,
)


class SessionCommands:
    """
    Factory for session lifecycle commands.

    Covers session creation and deletion, the endpoint status check and the
    session timeouts configuration.
    """

    @staticmethod
    def new_session(
        always_match: Optional[dict[str, Any]] = None,
        first_match: Optional[list[dict[str, Any]]] = None,
    ) -> Command[NewSessionParams, NewSessionResponse]:
        """
        Create a command that asks the endpoint for a new session.

        Args:
            always_match: Capabilities every matched browser must satisfy.
            first_match: Alternative capability sets, tried in order.
        """
        capabilities = CapabilitiesRequest(alwaysMatch=always_match or {})
        if first_match:
            capabilities['firstMatch'] = first_match
        return Command(
            name='New Session',
            method='POST',
            route='/session',
            params=NewSessionParams(capabilities=capabilities),
        )

    @staticmethod
    def delete_session() -> Command[EmptyParams, EmptyResponse]:
        return Command(name='Delete Session', method='DELETE', route='/session/{session_id}')

    @staticmethod
    def status() -> Command[EmptyParams, StatusResponse]:
        return Command(name='Status', method='GET', route='/status')

    @staticmethod
    def get_timeouts() -> Command[EmptyParams, Timeouts]:
        return Command(name='Get Timeouts', method='GET', route='/session/{session_id}/timeouts')

    @staticmethod
    def set_timeouts(
        script: Optional[int] = None,
        page_load: Optional[int] = None,
        implicit: Optional[int] = None,
    ) -> Command[Timeouts, EmptyResponse]:
        """
        Create a command updating the session timeouts.

        All values are milliseconds; omitted values are left untouched by
        the endpoint.
        """
        params = Timeouts()
        if script is not None:
            params['script'] = script
        if page_load is not None:
            params['pageLoad'] = page_load
        if implicit is not None:
            params['implicit'] = implicit
        return Command(
            name='Set Timeouts',
            method='POST',
            route='/session/{session_id}/timeouts',
            params=params,
        )
