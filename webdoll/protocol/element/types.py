from __future__ import annotations

from typing_extensions import TypedDict


class FindElementParams(TypedDict):
    using: str
    value: str


class ElementRect(TypedDict):
    x: float
    y: float
    width: float
    height: float


class SendKeysParams(TypedDict):
    text: str


class ExecuteScriptParams(TypedDict):
    script: str
    args: list


WebElementReference = dict[str, str]
