"""Wire shapes shared by every WebDriver command."""

from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar

from typing_extensions import NotRequired, TypedDict

T_CommandParams = TypeVar('T_CommandParams')
T_CommandResponse = TypeVar('T_CommandResponse')

HttpMethod = Literal['GET', 'POST', 'DELETE']


class Command(TypedDict, Generic[T_CommandParams, T_CommandResponse]):
    """
    A single WebDriver command before it is put on the wire.

    ``route`` is a path template relative to the endpoint base URL. The
    ``{session_id}`` placeholder is filled by the connection handler; every
    other placeholder is filled from ``path_params``.
    """

    name: str
    method: HttpMethod
    route: str
    path_params: NotRequired[dict[str, str]]
    params: NotRequired[T_CommandParams]


class Response(TypedDict, Generic[T_CommandResponse]):
    value: T_CommandResponse


class ErrorValue(TypedDict):
    error: str
    message: str
    stacktrace: NotRequired[str]
    data: NotRequired[Any]


class ErrorResponse(TypedDict):
    value: ErrorValue


class EmptyParams(TypedDict):
    pass


EmptyResponse = None
JsonValue = Any
