from typing_extensions import TypedDict


class SendAlertTextParams(TypedDict):
    text: str
