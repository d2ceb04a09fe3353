from __future__ import annotations

from typing import Literal

from typing_extensions import NotRequired, TypedDict

SameSite = Literal['Lax', 'Strict', 'None']


class Cookie(TypedDict):
    name: str
    value: str
    path: NotRequired[str]
    domain: NotRequired[str]
    secure: NotRequired[bool]
    httpOnly: NotRequired[bool]
    expiry: NotRequired[int]
    sameSite: NotRequired[SameSite]


class AddCookieParams(TypedDict):
    cookie: Cookie
