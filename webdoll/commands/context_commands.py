from __future__ import annotations

from typing import Any, Optional

from webdoll.constants import WindowType
from webdoll.protocol.base import Command, EmptyParams, EmptyResponse
from webdoll.protocol.context.types import (
    NewWindowParams,
    NewWindowResponse,
    SetWindowRectParams,
    SwitchToFrameParams,
    SwitchToWindowParams,
    WindowRect,
)


class ContextCommands:
    """
    Factory for browsing context commands.

    Windows, tabs and frames are all browsing contexts; these commands
    create, close, enumerate and select them, and manipulate the geometry
    of the current top-level window.
    """

    @staticmethod
    def get_window_handle() -> Command[EmptyParams, str]:
        return Command(
            name='Get Window Handle', method='GET', route='/session/{session_id}/window'
        )

    @staticmethod
    def get_window_handles() -> Command[EmptyParams, list[str]]:
        return Command(
            name='Get Window Handles', method='GET', route='/session/{session_id}/window/handles'
        )

    @staticmethod
    def close_window() -> Command[EmptyParams, list[str]]:
        return Command(name='Close Window', method='DELETE', route='/session/{session_id}/window')

    @staticmethod
    def switch_to_window(handle: str) -> Command[SwitchToWindowParams, EmptyResponse]:
        return Command(
            name='Switch To Window',
            method='POST',
            route='/session/{session_id}/window',
            params=SwitchToWindowParams(handle=handle),
        )

    @staticmethod
    def new_window(window_type: WindowType = WindowType.TAB) -> Command[
        NewWindowParams, NewWindowResponse
    ]:
        return Command(
            name='New Window',
            method='POST',
            route='/session/{session_id}/window/new',
            params=NewWindowParams(type=window_type),
        )

    @staticmethod
    def switch_to_frame(frame_id: Any = None) -> Command[SwitchToFrameParams, EmptyResponse]:
        """
        Create a command selecting a child frame of the current context.

        Args:
            frame_id: ``None`` for the top-level context, a frame index, or a
                web element reference to an ``<iframe>``/``<frame>`` element.
        """
        return Command(
            name='Switch To Frame',
            method='POST',
            route='/session/{session_id}/frame',
            params=SwitchToFrameParams(id=frame_id),
        )

    @staticmethod
    def switch_to_parent_frame() -> Command[EmptyParams, EmptyResponse]:
        return Command(
            name='Switch To Parent Frame',
            method='POST',
            route='/session/{session_id}/frame/parent',
            params=EmptyParams(),
        )

    @staticmethod
    def get_window_rect() -> Command[EmptyParams, WindowRect]:
        return Command(
            name='Get Window Rect', method='GET', route='/session/{session_id}/window/rect'
        )

    @staticmethod
    def set_window_rect(
        x: Optional[int] = None,
        y: Optional[int] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
    ) -> Command[SetWindowRectParams, WindowRect]:
        return Command(
            name='Set Window Rect',
            method='POST',
            route='/session/{session_id}/window/rect',
            params=SetWindowRectParams(x=x, y=y, width=width, height=height),
        )

    @staticmethod
    def maximize_window() -> Command[EmptyParams, WindowRect]:
        return Command(
            name='Maximize Window',
            method='POST',
            route='/session/{session_id}/window/maximize',
            params=EmptyParams(),
        )

    @staticmethod
    def minimize_window() -> Command[EmptyParams, WindowRect]:
        return Command(
            name='Minimize Window',
            method='POST',
            route='/session/{session_id}/window/minimize',
            params=EmptyParams(),
        )

    @staticmethod
    def fullscreen_window() -> Command[EmptyParams, WindowRect]:
        return Command(
            name='Fullscreen Window',
            method='POST',
            route='/session/{session_id}/window/fullscreen',
            params=EmptyParams(),
        )
