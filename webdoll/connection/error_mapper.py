"""Translation of WebDriver error envelopes into the exception taxonomy."""

from __future__ import annotations

import logging
from typing import Any

from webdoll.constants import ErrorCode
from webdoll.exceptions import (
    CommandError,
    DetachedShadowRoot,
    ElementClickIntercepted,
    ElementNotInteractable,
    InsecureCertificate,
    InvalidArgument,
    InvalidCookieDomain,
    InvalidElementState,
    InvalidSelector,
    InvalidSessionId,
    JavascriptError,
    MoveTargetOutOfBounds,
    NoSuchAlert,
    NoSuchCookie,
    NoSuchElement,
    NoSuchFrame,
    NoSuchShadowRoot,
    NoSuchWindow,
    ScriptTimeout,
    SessionNotCreated,
    StaleElementReference,
    Timeout,
    UnableToCaptureScreen,
    UnableToSetCookie,
    UnexpectedAlertOpen,
    UnknownCommand,
    UnknownMethod,
    UnknownWebDriverError,
    UnsupportedOperation,
)

logger = logging.getLogger(__name__)

ERROR_CLASSES: dict[ErrorCode, type[CommandError]] = {
    ErrorCode.DETACHED_SHADOW_ROOT: DetachedShadowRoot,
    ErrorCode.ELEMENT_CLICK_INTERCEPTED: ElementClickIntercepted,
    ErrorCode.ELEMENT_NOT_INTERACTABLE: ElementNotInteractable,
    ErrorCode.INSECURE_CERTIFICATE: InsecureCertificate,
    ErrorCode.INVALID_ARGUMENT: InvalidArgument,
    ErrorCode.INVALID_COOKIE_DOMAIN: InvalidCookieDomain,
    ErrorCode.INVALID_ELEMENT_STATE: InvalidElementState,
    ErrorCode.INVALID_SELECTOR: InvalidSelector,
    ErrorCode.INVALID_SESSION_ID: InvalidSessionId,
    ErrorCode.JAVASCRIPT_ERROR: JavascriptError,
    ErrorCode.MOVE_TARGET_OUT_OF_BOUNDS: MoveTargetOutOfBounds,
    ErrorCode.NO_SUCH_ALERT: NoSuchAlert,
    ErrorCode.NO_SUCH_COOKIE: NoSuchCookie,
    ErrorCode.NO_SUCH_ELEMENT: NoSuchElement,
    ErrorCode.NO_SUCH_FRAME: NoSuchFrame,
    ErrorCode.NO_SUCH_SHADOW_ROOT: NoSuchShadowRoot,
    ErrorCode.NO_SUCH_WINDOW: NoSuchWindow,
    ErrorCode.SCRIPT_TIMEOUT: ScriptTimeout,
    ErrorCode.SESSION_NOT_CREATED: SessionNotCreated,
    ErrorCode.STALE_ELEMENT_REFERENCE: StaleElementReference,
    ErrorCode.TIMEOUT: Timeout,
    ErrorCode.UNABLE_TO_CAPTURE_SCREEN: UnableToCaptureScreen,
    ErrorCode.UNABLE_TO_SET_COOKIE: UnableToSetCookie,
    ErrorCode.UNEXPECTED_ALERT_OPEN: UnexpectedAlertOpen,
    ErrorCode.UNKNOWN_COMMAND: UnknownCommand,
    ErrorCode.UNKNOWN_ERROR: UnknownWebDriverError,
    ErrorCode.UNKNOWN_METHOD: UnknownMethod,
    ErrorCode.UNSUPPORTED_OPERATION: UnsupportedOperation,
}


def map_error(status: int, body: Any) -> CommandError:
    """
    Build the exception matching a failed WebDriver response.

    Args:
        status: HTTP status code of the response.
        body: Decoded JSON body, normally
            ``{"value": {"error": ..., "message": ..., "stacktrace": ...}}``.

    Returns:
        The ``CommandError`` subclass for the reported error code. Codes that
        are not part of the protocol, and bodies without an error envelope,
        become ``UnknownWebDriverError`` carrying whatever the driver sent.
    """
    value = body.get('value') if isinstance(body, dict) else None
    if not isinstance(value, dict) or 'error' not in value:
        logger.debug(f'Error response without a WebDriver envelope: status={status}')
        return UnknownWebDriverError(
            f'HTTP {status} without a WebDriver error envelope: {body!r}',
            code='',
            status=status,
            data=body,
        )

    code = str(value['error'])
    message = str(value.get('message') or '') or None
    stacktrace = str(value.get('stacktrace') or '')
    data = value.get('data')

    if not ErrorCode.has_value(code):
        logger.debug(f'Unrecognized error code from driver: code={code!r}, status={status}')
        return UnknownWebDriverError(
            message, code=code, stacktrace=stacktrace, status=status, data=data
        )

    error_class = ERROR_CLASSES[ErrorCode(code)]
    return error_class(message, code=code, stacktrace=stacktrace, status=status, data=data)
