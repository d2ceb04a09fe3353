from enum import Enum

WEB_ELEMENT_IDENTIFIER = 'element-6066-11e4-a52e-4f735466cecf'
SHADOW_ROOT_IDENTIFIER = 'shadow-6066-11e4-a52e-4f735466cecf'
WEB_FRAME_IDENTIFIER = 'frame-075b-4da1-b6ba-e579c2d3230a'
WEB_WINDOW_IDENTIFIER = 'window-fcc6-11e5-b4f8-330a88ab9d7f'


class By(str, Enum):
    """Element location strategies understood by the driver endpoint."""

    CSS_SELECTOR = 'css selector'
    LINK_TEXT = 'link text'
    PARTIAL_LINK_TEXT = 'partial link text'
    TAG_NAME = 'tag name'
    XPATH = 'xpath'


class WindowType(str, Enum):
    TAB = 'tab'
    WINDOW = 'window'


class PageLoadStrategy(str, Enum):
    NORMAL = 'normal'
    EAGER = 'eager'
    NONE = 'none'


class SessionState(str, Enum):
    NOT_STARTED = 'not started'
    ACTIVE = 'active'
    CLOSED = 'closed'


class ErrorCode(str, Enum):
    """Error codes a driver endpoint reports in the ``error`` field."""

    DETACHED_SHADOW_ROOT = 'detached shadow root'
    ELEMENT_CLICK_INTERCEPTED = 'element click intercepted'
    ELEMENT_NOT_INTERACTABLE = 'element not interactable'
    INSECURE_CERTIFICATE = 'insecure certificate'
    INVALID_ARGUMENT = 'invalid argument'
    INVALID_COOKIE_DOMAIN = 'invalid cookie domain'
    INVALID_ELEMENT_STATE = 'invalid element state'
    INVALID_SELECTOR = 'invalid selector'
    INVALID_SESSION_ID = 'invalid session id'
    JAVASCRIPT_ERROR = 'javascript error'
    MOVE_TARGET_OUT_OF_BOUNDS = 'move target out of bounds'
    NO_SUCH_ALERT = 'no such alert'
    NO_SUCH_COOKIE = 'no such cookie'
    NO_SUCH_ELEMENT = 'no such element'
    NO_SUCH_FRAME = 'no such frame'
    NO_SUCH_SHADOW_ROOT = 'no such shadow root'
    NO_SUCH_WINDOW = 'no such window'
    SCRIPT_TIMEOUT = 'script timeout'
    SESSION_NOT_CREATED = 'session not created'
    STALE_ELEMENT_REFERENCE = 'stale element reference'
    TIMEOUT = 'timeout'
    UNABLE_TO_CAPTURE_SCREEN = 'unable to capture screen'
    UNABLE_TO_SET_COOKIE = 'unable to set cookie'
    UNEXPECTED_ALERT_OPEN = 'unexpected alert open'
    UNKNOWN_COMMAND = 'unknown command'
    UNKNOWN_ERROR = 'unknown error'
    UNKNOWN_METHOD = 'unknown method'
    UNSUPPORTED_OPERATION = 'unsupported operation'

    @classmethod
    def has_value(cls, value: str) -> bool:
        return value in cls._value2member_map_


class Key(str, Enum):
    """Unicode private-use code points the driver interprets as special keys."""

    NULL = '\ue000'
    CANCEL = '\ue001'
    HELP = '\ue002'
    BACKSPACE = '\ue003'
    TAB = '\ue004'
    CLEAR = '\ue005'
    RETURN = '\ue006'
    ENTER = '\ue007'
    SHIFT = '\ue008'
    CONTROL = '\ue009'
    ALT = '\ue00a'
    PAUSE = '\ue00b'
    ESCAPE = '\ue00c'
    SPACE = '\ue00d'
    PAGE_UP = '\ue00e'
    PAGE_DOWN = '\ue00f'
    END = '\ue010'
    HOME = '\ue011'
    LEFT = '\ue012'
    UP = '\ue013'
    RIGHT = '\ue014'
    DOWN = '\ue015'
    INSERT = '\ue016'
    DELETE = '\ue017'
    META = '\ue03d'
