from __future__ import annotations

from webdoll.protocol.base import Command, EmptyParams, JsonValue
from webdoll.protocol.element.types import ExecuteScriptParams


class DocumentCommands:
    """Factory for commands acting on the document of the current context."""

    @staticmethod
    def get_page_source() -> Command[EmptyParams, str]:
        return Command(name='Get Page Source', method='GET', route='/session/{session_id}/source')

    @staticmethod
    def execute_script(script: str, args: list) -> Command[ExecuteScriptParams, JsonValue]:
        """
        Create a synchronous script execution command.

        ``args`` must already be in wire form: element handles replaced by
        web element references.
        """
        return Command(
            name='Execute Script',
            method='POST',
            route='/session/{session_id}/execute/sync',
            params=ExecuteScriptParams(script=script, args=args),
        )

    @staticmethod
    def execute_async_script(script: str, args: list) -> Command[ExecuteScriptParams, JsonValue]:
        return Command(
            name='Execute Async Script',
            method='POST',
            route='/session/{session_id}/execute/async',
            params=ExecuteScriptParams(script=script, args=args),
        )

    @staticmethod
    def take_screenshot() -> Command[EmptyParams, str]:
        return Command(
            name='Take Screenshot', method='GET', route='/session/{session_id}/screenshot'
        )
