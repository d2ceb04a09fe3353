from __future__ import annotations

from webdoll.protocol.base import Command, EmptyParams, EmptyResponse
from webdoll.protocol.prompt.types import SendAlertTextParams


class PromptCommands:
    """Factory for user prompt (alert, confirm, prompt) commands."""

    @staticmethod
    def dismiss_alert() -> Command[EmptyParams, EmptyResponse]:
        return Command(
            name='Dismiss Alert', method='POST', route='/session/{session_id}/alert/dismiss'
        )

    @staticmethod
    def accept_alert() -> Command[EmptyParams, EmptyResponse]:
        return Command(
            name='Accept Alert', method='POST', route='/session/{session_id}/alert/accept'
        )

    @staticmethod
    def get_alert_text() -> Command[EmptyParams, str]:
        return Command(name='Get Alert Text', method='GET', route='/session/{session_id}/alert/text')

    @staticmethod
    def send_alert_text(text: str) -> Command[SendAlertTextParams, EmptyResponse]:
        return Command(
            name='Send Alert Text',
            method='POST',
            route='/session/{session_id}/alert/text',
            params=SendAlertTextParams(text=text),
        )
