from __future__ import annotations

from typing import Any, Optional

from webdoll.constants import ErrorCode


class WebDriverException(Exception):
    """Base exception class for all webdoll exceptions."""

    message = 'An unexpected error occurred.'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def __str__(self):
        return self.message


class CommandError(WebDriverException):
    """
    Error produced by a command sent to the driver endpoint.

    Every failure of a round trip is one of these. Subclasses identify the
    error kind; ``code`` keeps the raw code reported by the driver (or the
    client-side equivalent) so nothing is lost on the way to the caller.
    """

    code: str = ErrorCode.UNKNOWN_ERROR.value
    message = 'The command failed.'

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        stacktrace: str = '',
        status: Optional[int] = None,
        data: Optional[Any] = None,
    ):
        super().__init__(message)
        if code is not None:
            self.code = code
        self.stacktrace = stacktrace
        self.status = status
        self.data = data

    def __repr__(self):
        return f'{type(self).__name__}(code={self.code!r}, message={self.message!r})'


class SerializationError(CommandError):
    code = 'serialization error'
    message = 'A command argument or driver response could not be (de)serialized.'


class DriverConnectionError(CommandError):
    code = 'connection error'
    message = 'Could not reach the driver endpoint.'


class CommandTimeout(DriverConnectionError):
    code = 'command timeout'
    message = 'The driver endpoint did not answer before the deadline.'


class UnknownWebDriverError(CommandError):
    code = ErrorCode.UNKNOWN_ERROR.value
    message = 'The driver endpoint reported an unknown error.'


class DetachedShadowRoot(CommandError):
    code = ErrorCode.DETACHED_SHADOW_ROOT.value
    message = 'The shadow root is no longer attached to the document.'


class ElementClickIntercepted(CommandError):
    code = ErrorCode.ELEMENT_CLICK_INTERCEPTED.value
    message = 'Another element would receive the click.'


class ElementNotInteractable(CommandError):
    code = ErrorCode.ELEMENT_NOT_INTERACTABLE.value
    message = 'The element is not pointer or keyboard interactable.'


class InsecureCertificate(CommandError):
    code = ErrorCode.INSECURE_CERTIFICATE.value
    message = 'Navigation hit an expired or invalid TLS certificate.'


class InvalidArgument(CommandError):
    code = ErrorCode.INVALID_ARGUMENT.value
    message = 'The arguments passed to the command are invalid.'


class InvalidCookieDomain(CommandError):
    code = ErrorCode.INVALID_COOKIE_DOMAIN.value
    message = 'The cookie domain does not match the current page.'


class InvalidElementState(CommandError):
    code = ErrorCode.INVALID_ELEMENT_STATE.value
    message = 'The element is in a state that does not allow this command.'


class InvalidSelector(CommandError):
    code = ErrorCode.INVALID_SELECTOR.value
    message = 'The element selector is invalid.'


class InvalidSessionId(CommandError):
    code = ErrorCode.INVALID_SESSION_ID.value
    message = 'The session does not exist or has been closed.'


class JavascriptError(CommandError):
    code = ErrorCode.JAVASCRIPT_ERROR.value
    message = 'An error occurred while executing the script.'


class MoveTargetOutOfBounds(CommandError):
    code = ErrorCode.MOVE_TARGET_OUT_OF_BOUNDS.value
    message = 'The pointer target is outside the viewport.'


class NoSuchAlert(CommandError):
    code = ErrorCode.NO_SUCH_ALERT.value
    message = 'No user prompt is currently open.'


class NoSuchCookie(CommandError):
    code = ErrorCode.NO_SUCH_COOKIE.value
    message = 'No cookie matches the given name.'


class NoSuchElement(CommandError):
    code = ErrorCode.NO_SUCH_ELEMENT.value
    message = 'The specified element was not found.'


class NoSuchFrame(CommandError):
    code = ErrorCode.NO_SUCH_FRAME.value
    message = 'The frame to switch to was not found.'


class NoSuchShadowRoot(CommandError):
    code = ErrorCode.NO_SUCH_SHADOW_ROOT.value
    message = 'The element does not have a shadow root.'


class NoSuchWindow(CommandError):
    code = ErrorCode.NO_SUCH_WINDOW.value
    message = 'The window is closed or no window is selected.'


class ScriptTimeout(CommandError):
    code = ErrorCode.SCRIPT_TIMEOUT.value
    message = 'The script did not finish before the script timeout.'


class SessionNotCreated(CommandError):
    code = ErrorCode.SESSION_NOT_CREATED.value
    message = 'The driver endpoint could not create a new session.'


class StaleElementReference(CommandError):
    code = ErrorCode.STALE_ELEMENT_REFERENCE.value
    message = 'The element is no longer attached to the document.'


class Timeout(CommandError):
    code = ErrorCode.TIMEOUT.value
    message = 'The operation did not complete before its timeout.'


class UnableToCaptureScreen(CommandError):
    code = ErrorCode.UNABLE_TO_CAPTURE_SCREEN.value
    message = 'The screenshot could not be taken.'


class UnableToSetCookie(CommandError):
    code = ErrorCode.UNABLE_TO_SET_COOKIE.value
    message = 'The cookie could not be set.'


class UnexpectedAlertOpen(CommandError):
    code = ErrorCode.UNEXPECTED_ALERT_OPEN.value
    message = 'A user prompt blocked the command.'


class UnknownCommand(CommandError):
    code = ErrorCode.UNKNOWN_COMMAND.value
    message = 'The driver endpoint does not know this command.'


class UnknownMethod(CommandError):
    code = ErrorCode.UNKNOWN_METHOD.value
    message = 'The HTTP method is not supported for this endpoint.'


class UnsupportedOperation(CommandError):
    code = ErrorCode.UNSUPPORTED_OPERATION.value
    message = 'The driver endpoint does not support this operation.'


class MissingScreenshotPath(WebDriverException):
    message = 'A path is required when the screenshot is not returned as base64.'


class InvalidFileExtension(WebDriverException):
    message = 'The file extension is not supported.'


class NotASelectElement(WebDriverException):
    message = 'The element is not a <select> element.'


class ArgumentAlreadyExistsInOptions(WebDriverException):
    message = 'The argument already exists in the options.'


class ArgumentNotFoundInOptions(WebDriverException):
    message = 'The argument was not found in the options.'
