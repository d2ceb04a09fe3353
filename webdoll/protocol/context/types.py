from __future__ import annotations

from typing import Any, Optional

from typing_extensions import NotRequired, TypedDict

from webdoll.constants import WindowType


class WindowRect(TypedDict):
    x: int
    y: int
    width: int
    height: int


class SetWindowRectParams(TypedDict, total=False):
    x: Optional[int]
    y: Optional[int]
    width: Optional[int]
    height: Optional[int]


class NewWindowParams(TypedDict):
    type: WindowType


class NewWindowResponse(TypedDict):
    handle: str
    type: str


class SwitchToWindowParams(TypedDict):
    handle: str


class SwitchToFrameParams(TypedDict):
    id: NotRequired[Any]
