from __future__ import annotations

from typing import Any

from typing_extensions import NotRequired, TypedDict


class Timeouts(TypedDict, total=False):
    script: int | None
    pageLoad: int
    implicit: int


class CapabilitiesRequest(TypedDict):
    alwaysMatch: NotRequired[dict[str, Any]]
    firstMatch: NotRequired[list[dict[str, Any]]]


class NewSessionParams(TypedDict):
    capabilities: CapabilitiesRequest


class NewSessionResponse(TypedDict):
    sessionId: str
    capabilities: dict[str, Any]


class StatusResponse(TypedDict):
    ready: bool
    message: str
