"""Shared fixtures: an in-process fake WebDriver endpoint.

The endpoint implements the part of the W3C WebDriver protocol the client
uses, on top of a small in-memory DOM. It is served by ``http.server`` on a
background thread, so the client under test talks real HTTP to it.
"""

import base64
import json
import re
import socket
import threading
import uuid
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import unquote, urljoin, urlsplit

import pytest
import pytest_asyncio

from webdoll import Client

ELEMENT_KEY = 'element-6066-11e4-a52e-4f735466cecf'
FAKE_PNG = b'\x89PNG\r\n\x1a\nfake-png-data'
PAGE_BASE = 'http://pages.test/'

_ERROR_STATUS = {
    'invalid argument': 400,
    'invalid selector': 400,
    'session not created': 500,
    'invalid session id': 404,
    'no such alert': 404,
    'no such cookie': 404,
    'no such element': 404,
    'no such frame': 404,
    'no such window': 404,
    'stale element reference': 404,
    'unknown command': 404,
    'unknown method': 405,
    'element not interactable': 400,
    'javascript error': 500,
    'script timeout': 500,
}

_LOCATOR_STRATEGIES = {'css selector', 'link text', 'partial link text', 'tag name', 'xpath'}


class DriverError(Exception):
    """Error answered with the W3C error envelope."""

    def __init__(self, code, message):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = _ERROR_STATUS.get(code, 500)


# ── In-memory DOM ──────────────────────────────────────────


class Node:
    def __init__(self, tag, attrs=None, text='', children=()):
        self.tag = tag
        self.attrs = dict(attrs or {})
        self.text = text
        self.children = []
        self.parent = None
        self.document = None
        self.value = self.attrs.get('value', '')
        self.selected = 'selected' in self.attrs or 'checked' in self.attrs
        self.frame_document = None
        self.clicks = 0
        for child in children:
            self.append(child)

    def append(self, child):
        child.parent = self
        self.children.append(child)
        return child

    def remove(self):
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def iter(self):
        yield self
        for child in self.children:
            yield from child.iter()

    def descendants(self):
        for child in self.children:
            yield from child.iter()

    def ancestors(self):
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    @property
    def connected(self):
        root = self
        for root in self.ancestors():
            pass
        return self.document is not None and root is self.document.root

    def text_content(self):
        return self.text + ''.join(child.text_content() for child in self.children)

    def inner_html(self):
        return self.text + ''.join(child.outer_html() for child in self.children)

    def outer_html(self):
        attrs = ''.join(f' {name}="{value}"' for name, value in self.attrs.items())
        return f'<{self.tag}{attrs}>{self.inner_html()}</{self.tag}>'


class Document:
    def __init__(self, url, title='', body=()):
        self.url = url
        self.title = title
        self.discarded = False
        self.root = Node(
            'html',
            children=[
                Node('head', children=[Node('title', text=title)]),
                Node('body', children=body),
            ],
        )
        for node in self.root.iter():
            node.document = self

    def discard(self):
        self.discarded = True
        for node in self.root.iter():
            if node.frame_document is not None:
                node.frame_document.discard()

    def frames(self):
        return [node for node in self.root.iter() if node.tag in ('iframe', 'frame')]


def _sample_page(url):
    return Document(
        url,
        'Sample page',
        [
            Node('h1', {'id': 'heading'}, 'Sample page'),
            Node('p', {'id': 'first', 'class': 'text'}, 'First paragraph'),
            Node('p', {'id': 'second', 'class': 'text'}, 'Second paragraph'),
            Node('a', {'id': 'other_page_id', 'href': 'other_page.html'}, 'Other page'),
            Node('a', {'id': 'iframe_page_id', 'href': 'iframe_page.html'}, 'Iframe page'),
            Node('input', {'id': 'text_input', 'type': 'text'}),
            Node('input', {'id': 'checkbox', 'type': 'checkbox'}),
            Node('button', {'id': 'disabled_button', 'disabled': 'disabled'}, 'Disabled'),
            Node('div', {'id': 'hidden', 'hidden': 'hidden'}, 'Hidden text'),
            Node('div', {'id': 'odd id: "quoted"'}, 'Odd id'),
            Node(
                'select',
                {'id': 'select'},
                children=[
                    Node('option', {'value': 'a'}, 'Alpha'),
                    Node('option', {'value': 'b'}, 'Beta'),
                    Node('option', {'value': 'c'}, 'Gamma'),
                ],
            ),
        ],
    )


def _other_page(url):
    return Document(
        url,
        'Other page',
        [
            Node('h1', {'id': 'heading'}, 'Other page'),
            Node('a', {'id': 'back_link', 'href': 'sample_page.html'}, 'Back to sample'),
        ],
    )


def _iframe_page(url):
    inner = Document(
        urljoin(url, 'inner_frame.html'),
        'Inner frame',
        [
            Node('button', {'id': 'iframe_button'}, 'Inner button'),
            Node('p', {'class': 'text'}, 'Inside the frame'),
        ],
    )
    frame = Node('iframe', {'id': 'iframe', 'src': 'inner_frame.html'})
    frame.frame_document = inner
    return Document(
        url,
        'Iframe page',
        [Node('button', {'id': 'root_button'}, 'Root button'), frame],
    )


_PAGES = {
    'sample_page.html': _sample_page,
    'other_page.html': _other_page,
    'iframe_page.html': _iframe_page,
}


def build_document(url):
    name = urlsplit(url).path.rsplit('/', 1)[-1]
    page = _PAGES.get(name)
    if page is None:
        return Document(url)
    return page(url)


# ── Selectors ──────────────────────────────────────────


def _unescape_css(value):
    result = []
    index = 0
    while index < len(value):
        char = value[index]
        if char != '\\':
            result.append(char)
            index += 1
            continue
        hex_match = re.match(r'[0-9a-fA-F]{1,6} ?', value[index + 1 :])
        if hex_match:
            result.append(chr(int(hex_match.group(0).strip(), 16)))
            index += 1 + len(hex_match.group(0))
        else:
            result.append(value[index + 1 : index + 2])
            index += 2
    return ''.join(result)


_COMPOUND_PART = re.compile(
    r'#(?P<id>[\w-]+)'
    r'|\.(?P<cls>[\w-]+)'
    r'|\[(?P<attr>[\w-]+)(?:="(?P<value>(?:[^"\\]|\\.)*)")?\]'
)


def _split_selector(selector):
    parts, current, in_quotes, depth = [], '', False, 0
    index = 0
    while index < len(selector):
        char = selector[index]
        if char == '\\' and in_quotes:
            current += selector[index : index + 2]
            index += 2
            continue
        if char == '"':
            in_quotes = not in_quotes
        elif char == '[' and not in_quotes:
            depth += 1
        elif char == ']' and not in_quotes:
            depth -= 1
        if char.isspace() and not in_quotes and depth == 0:
            if current:
                parts.append(current)
            current = ''
        else:
            current += char
        index += 1
    if current:
        parts.append(current)
    return parts


def _parse_compound(text):
    tag_match = re.match(r'[A-Za-z][\w-]*|\*', text)
    tag = tag_match.group(0).lower() if tag_match else '*'
    position = tag_match.end() if tag_match else 0
    conditions = []
    while position < len(text):
        match = _COMPOUND_PART.match(text, position)
        if match is None:
            raise DriverError('invalid selector', f'Unsupported selector: {text!r}')
        if match.group('id') is not None:
            conditions.append(('attr', 'id', match.group('id')))
        elif match.group('cls') is not None:
            conditions.append(('class', match.group('cls')))
        elif match.group('value') is not None:
            conditions.append(('attr', match.group('attr'), _unescape_css(match.group('value'))))
        else:
            conditions.append(('has', match.group('attr')))
        position = match.end()
    if not text:
        raise DriverError('invalid selector', 'Empty selector')
    return tag, conditions


def _matches_compound(node, compound):
    tag, conditions = compound
    if tag != '*' and node.tag != tag:
        return False
    for condition in conditions:
        if condition[0] == 'attr' and node.attrs.get(condition[1]) != condition[2]:
            return False
        if condition[0] == 'class' and condition[1] not in node.attrs.get('class', '').split():
            return False
        if condition[0] == 'has' and condition[1] not in node.attrs:
            return False
    return True


def select_css(candidates, selector):
    compounds = [_parse_compound(part) for part in _split_selector(selector)]
    if not compounds:
        raise DriverError('invalid selector', 'Empty selector')
    found = []
    for node in candidates:
        if not _matches_compound(node, compounds[-1]):
            continue
        remaining = compounds[:-1]
        for ancestor in node.ancestors():
            if remaining and _matches_compound(ancestor, remaining[-1]):
                remaining = remaining[:-1]
        if not remaining:
            found.append(node)
    return found


_XPATH = re.compile(
    r'(?P<relative>\.)?//(?P<tag>[\w-]+|\*)'
    r'(?:\[(?:@(?P<attr>[\w-]+)|normalize-space\(\.\))="(?P<value>[^"]*)"\])?'
)


def select_xpath(document, scope, expression):
    match = _XPATH.fullmatch(expression)
    if match is None:
        raise DriverError('invalid selector', f'Unsupported XPath: {expression!r}')
    if match.group('relative'):
        candidates = scope.descendants() if scope is not None else document.root.iter()
    else:
        candidates = document.root.iter()
    found = []
    for node in candidates:
        if match.group('tag') != '*' and node.tag != match.group('tag'):
            continue
        value = match.group('value')
        if value is not None:
            if match.group('attr'):
                if node.attrs.get(match.group('attr')) != value:
                    continue
            elif ' '.join(node.text_content().split()) != value:
                continue
        found.append(node)
    return found


# ── Fake session ──────────────────────────────────────────


class Window:
    def __init__(self, url='about:blank'):
        self.handle = uuid.uuid4().hex
        self.history = [url]
        self.index = 0
        self.document = build_document(url)

    def load(self, url):
        self.document.discard()
        self.document = build_document(url)


class FakeSession:
    def __init__(self, capabilities, on_end):
        self.session_id = uuid.uuid4().hex
        self.capabilities = capabilities
        self.on_end = on_end
        first = Window()
        self.windows = {first.handle: first}
        self.current = first.handle
        self.frames = []
        self.elements = {}
        self.references = {}
        self.cookies = []
        self.timeouts = {'script': 30000, 'pageLoad': 300000, 'implicit': 0}
        self.window_rect = {'x': 0, 'y': 0, 'width': 1280, 'height': 720}

    # state

    def current_window(self):
        window = self.windows.get(self.current)
        if window is None:
            raise DriverError('no such window', 'The current window was closed')
        return window

    def current_document(self):
        window = self.current_window()
        return self.frames[-1] if self.frames else window.document

    def reference(self, node):
        element_id = self.references.get(node)
        if element_id is None:
            element_id = uuid.uuid4().hex
            self.references[node] = element_id
            self.elements[element_id] = node
        return {ELEMENT_KEY: element_id}

    def resolve(self, element_id):
        node = self.elements.get(element_id)
        if node is None:
            raise DriverError('no such element', f'Unknown element {element_id}')
        document = self.current_document()
        if node.document.discarded or not node.connected:
            raise DriverError('stale element reference', f'Element {element_id} is stale')
        if node.document is not document:
            raise DriverError(
                'no such element', f'Element {element_id} is not in the current browsing context'
            )
        return node

    # routing

    def handle(self, method, rest, body):
        head = rest[0] if rest else ''
        tail = rest[1:]
        if head == 'timeouts':
            return self._timeouts(method, body)
        if head == 'url':
            return self._url(method, body)
        if head in ('back', 'forward', 'refresh') and method == 'POST':
            return self._history(head)
        if head == 'title' and method == 'GET':
            return self.current_document().title
        if head == 'source' and method == 'GET':
            return self.current_document().root.outer_html()
        if head == 'window':
            return self._window(method, tail, body)
        if head == 'frame':
            return self._frame(method, tail, body)
        if head == 'element' and tail == ['active'] and method == 'GET':
            return self._active_element()
        if head in ('element', 'elements') and not tail and method == 'POST':
            document = self.current_document()
            return self._find(head == 'elements', document, None, body)
        if head == 'element' and tail:
            return self._element(method, tail, body)
        if head == 'execute' and tail in (['sync'], ['async']) and method == 'POST':
            return self._execute(body, tail == ['async'])
        if head == 'cookie':
            return self._cookie(method, tail, body)
        if head == 'alert':
            self.current_window()
            raise DriverError('no such alert', 'No user prompt is open')
        if head == 'screenshot' and method == 'GET':
            self.current_document()
            return base64.b64encode(FAKE_PNG).decode()
        raise DriverError('unknown command', f'{method} /{"/".join(rest)}')

    def _timeouts(self, method, body):
        if method == 'GET':
            return dict(self.timeouts)
        for key in ('script', 'pageLoad', 'implicit'):
            if key in body:
                if not isinstance(body[key], int) or body[key] < 0:
                    raise DriverError('invalid argument', f'Invalid {key} timeout')
                self.timeouts[key] = body[key]
        return None

    def _url(self, method, body):
        if method == 'GET':
            return self.current_document().url
        url = body.get('url')
        if not isinstance(url, str) or not urlsplit(url).scheme:
            raise DriverError('invalid argument', f'Not an absolute URL: {url!r}')
        self._navigate(url)
        return None

    def _navigate(self, url):
        window = self.current_window()
        window.history = window.history[: window.index + 1] + [url]
        window.index += 1
        window.load(url)
        self.frames = []

    def _history(self, action):
        window = self.current_window()
        if action == 'back' and window.index > 0:
            window.index -= 1
        elif action == 'forward' and window.index < len(window.history) - 1:
            window.index += 1
        window.load(window.history[window.index])
        self.frames = []
        return None

    def _window(self, method, tail, body):
        if not tail:
            if method == 'GET':
                return self.current_window().handle
            if method == 'POST':
                handle = body.get('handle')
                if handle not in self.windows:
                    raise DriverError('no such window', f'Unknown window {handle!r}')
                self.current = handle
                self.frames = []
                return None
            if method == 'DELETE':
                window = self.current_window()
                window.document.discard()
                del self.windows[window.handle]
                self.current = None
                self.frames = []
                if not self.windows:
                    self.on_end(self)
                return list(self.windows)
        if tail == ['handles'] and method == 'GET':
            return list(self.windows)
        if tail == ['new'] and method == 'POST':
            window = Window()
            self.windows[window.handle] = window
            kind = body.get('type') if body.get('type') in ('tab', 'window') else 'tab'
            return {'handle': window.handle, 'type': kind}
        if tail == ['rect']:
            self.current_window()
            if method == 'POST':
                for key in ('x', 'y', 'width', 'height'):
                    if body.get(key) is not None:
                        self.window_rect[key] = body[key]
            return dict(self.window_rect)
        if tail in (['maximize'], ['minimize'], ['fullscreen']) and method == 'POST':
            self.current_window()
            return dict(self.window_rect)
        raise DriverError('unknown command', f'{method} window/{"/".join(tail)}')

    def _frame(self, method, tail, body):
        if method != 'POST':
            raise DriverError('unknown method', 'Frame commands are POST only')
        if tail == ['parent']:
            self.current_window()
            if self.frames:
                self.frames.pop()
            return None
        if 'id' not in body:
            raise DriverError('invalid argument', 'Missing frame id')
        target = body['id']
        document = self.current_document()
        if target is None:
            self.frames = []
            return None
        if isinstance(target, int) and not isinstance(target, bool):
            frames = document.frames()
            if not 0 <= target < len(frames):
                raise DriverError('no such frame', f'No frame at index {target}')
            node = frames[target]
        elif isinstance(target, dict) and ELEMENT_KEY in target:
            node = self.resolve(target[ELEMENT_KEY])
            if node.tag not in ('iframe', 'frame'):
                raise DriverError('no such frame', 'Element is not a frame')
        else:
            raise DriverError('invalid argument', f'Invalid frame id {target!r}')
        self.frames.append(node.frame_document)
        return None

    def _active_element(self):
        document = self.current_document()
        body = document.root.children[1]
        return self.reference(body)

    def _find(self, find_all, document, scope, body):
        using, value = body.get('using'), body.get('value')
        if using not in _LOCATOR_STRATEGIES or not isinstance(value, str):
            raise DriverError('invalid argument', f'Invalid locator {using!r}={value!r}')
        candidates = list(scope.descendants() if scope is not None else document.root.iter())
        if using == 'css selector':
            found = select_css(candidates, value)
        elif using == 'xpath':
            found = select_xpath(document, scope, value)
        elif using == 'tag name':
            found = [node for node in candidates if node.tag == value.lower()]
        elif using == 'link text':
            found = [
                node
                for node in candidates
                if node.tag == 'a' and node.text_content().strip() == value
            ]
        else:
            found = [node for node in candidates if node.tag == 'a' and value in node.text_content()]
        if find_all:
            return [self.reference(node) for node in found]
        if not found:
            raise DriverError('no such element', f'No element matches {using}={value!r}')
        return self.reference(found[0])

    def _element(self, method, tail, body):
        node = self.resolve(tail[0])
        action = tail[1] if len(tail) > 1 else ''
        argument = tail[2] if len(tail) > 2 else None
        if action in ('element', 'elements') and method == 'POST':
            return self._find(action == 'elements', node.document, node, body)
        if method == 'POST' and action == 'click':
            return self._click(node)
        if method == 'POST' and action == 'clear':
            node.value = ''
            return None
        if method == 'POST' and action == 'value':
            text = body.get('text')
            if not isinstance(text, str):
                raise DriverError('invalid argument', 'text must be a string')
            node.value += text
            return None
        if method != 'GET':
            raise DriverError('unknown command', f'{method} element/{action}')
        if action == 'text':
            return '' if 'hidden' in node.attrs else node.text_content().strip()
        if action == 'name':
            return node.tag
        if action == 'attribute':
            return node.attrs.get(argument)
        if action == 'property':
            return self._property(node, argument)
        if action == 'css':
            return 'none' if argument == 'display' and 'hidden' in node.attrs else ''
        if action == 'rect':
            return {'x': 0, 'y': 0, 'width': 100, 'height': 20}
        if action == 'enabled':
            return 'disabled' not in node.attrs
        if action == 'selected':
            return node.selected
        if action == 'displayed':
            return 'hidden' not in node.attrs
        if action == 'screenshot':
            return base64.b64encode(FAKE_PNG).decode()
        raise DriverError('unknown command', f'GET element/{action}')

    def _property(self, node, name):
        if name == 'href' and 'href' in node.attrs:
            return urljoin(node.document.url, node.attrs['href'])
        if name == 'outerHTML':
            return node.outer_html()
        if name == 'innerHTML':
            return node.inner_html()
        if name == 'value':
            return node.value
        if name == 'tagName':
            return node.tag.upper()
        if name == 'checked':
            return node.selected
        return node.attrs.get(name)

    def _click(self, node):
        if 'disabled' in node.attrs:
            raise DriverError('element not interactable', 'Element is disabled')
        node.clicks += 1
        if node.tag == 'option':
            select = next((a for a in node.ancestors() if a.tag == 'select'), None)
            if select is not None:
                for option in select.descendants():
                    option.selected = False
                select.value = node.attrs.get('value', '')
            node.selected = True
        elif node.tag == 'input' and node.attrs.get('type') == 'checkbox':
            node.selected = not node.selected
        elif node.tag == 'a' and 'href' in node.attrs and not self.frames:
            self._navigate(urljoin(node.document.url, node.attrs['href']))
        return None

    def _cookie(self, method, tail, body):
        self.current_document()
        if method == 'GET' and not tail:
            return list(self.cookies)
        if method == 'GET':
            for cookie in self.cookies:
                if cookie['name'] == tail[0]:
                    return cookie
            raise DriverError('no such cookie', f'No cookie named {tail[0]!r}')
        if method == 'POST' and not tail:
            cookie = body.get('cookie')
            if not isinstance(cookie, dict) or 'name' not in cookie or 'value' not in cookie:
                raise DriverError('invalid argument', 'A cookie needs a name and a value')
            self.cookies = [c for c in self.cookies if c['name'] != cookie['name']]
            self.cookies.append({'path': '/', 'secure': False, 'httpOnly': False, **cookie})
            return None
        if method == 'DELETE':
            if tail:
                self.cookies = [c for c in self.cookies if c['name'] != tail[0]]
            else:
                self.cookies = []
            return None
        raise DriverError('unknown command', f'{method} cookie')

    # scripts

    def _execute(self, body, is_async):
        script, args = body.get('script'), body.get('args')
        if not isinstance(script, str) or not isinstance(args, list):
            raise DriverError('invalid argument', 'script must be a string and args a list')
        document = self.current_document()
        args = self._decode_arg(args)
        script = script.strip()
        if 'throw' in script:
            raise DriverError('javascript error', f'Uncaught Error in script: {script}')
        if is_async:
            match = re.fullmatch(r'arguments\[arguments\.length\s*-\s*1\]\((.*)\);?', script)
            if match is None:
                raise DriverError('script timeout', 'The async script never called back')
            return self._encode_result(self._evaluate(match.group(1), document, args))
        for statement in (part.strip() for part in script.split(';')):
            if not statement:
                continue
            if statement.startswith('return '):
                result = self._evaluate(statement[len('return ') :], document, args)
                return self._encode_result(result)
            if statement.endswith('.remove()'):
                target = self._evaluate(statement[: -len('.remove()')], document, args)
                if not isinstance(target, Node):
                    raise DriverError('javascript error', f'Cannot remove {target!r}')
                target.remove()
                continue
            raise DriverError('javascript error', f'Unsupported statement: {statement}')
        return None

    def _evaluate(self, expression, document, args):
        expression = expression.strip()
        if expression == 'arguments':
            return args
        match = re.fullmatch(r'arguments\[(\d+)\]', expression)
        if match:
            index = int(match.group(1))
            if index >= len(args):
                return None
            return args[index]
        if expression == 'document.title':
            return document.title
        if expression in ('document.URL', 'window.location.href'):
            return document.url
        match = re.fullmatch(r'document\.getElementById\(([\'"])(.*)\1\)', expression)
        if match:
            return next(
                (n for n in document.root.iter() if n.attrs.get('id') == match.group(2)), None
            )
        match = re.fullmatch(r'document\.querySelector\(([\'"])(.*)\1\)', expression)
        if match:
            found = select_css(list(document.root.iter()), match.group(2))
            return found[0] if found else None
        try:
            return json.loads(expression)
        except ValueError:
            raise DriverError('javascript error', f'Cannot evaluate {expression!r}') from None

    def _decode_arg(self, value):
        if isinstance(value, dict) and len(value) == 1 and ELEMENT_KEY in value:
            return self.resolve(value[ELEMENT_KEY])
        if isinstance(value, list):
            return [self._decode_arg(item) for item in value]
        if isinstance(value, dict):
            return {key: self._decode_arg(item) for key, item in value.items()}
        return value

    def _encode_result(self, value):
        if isinstance(value, Node):
            return self.reference(value)
        if isinstance(value, list):
            return [self._encode_result(item) for item in value]
        if isinstance(value, dict):
            return {key: self._encode_result(item) for key, item in value.items()}
        return value


class FakeWebDriver:
    """Endpoint state shared by every session of one server."""

    def __init__(self):
        self.sessions = {}
        self.requests = []
        self.url = None
        self._lock = threading.Lock()

    def handle(self, method, path, body, headers):
        with self._lock:
            self.requests.append({'method': method, 'path': path, 'body': body, 'headers': headers})
            segments = [unquote(segment) for segment in path.strip('/').split('/')]
            if segments == ['status'] and method == 'GET':
                return {'ready': True, 'message': 'fake driver ready'}
            if segments == ['session'] and method == 'POST':
                return self._new_session(body)
            if len(segments) >= 2 and segments[0] == 'session':
                session = self.sessions.get(segments[1])
                if session is None:
                    raise DriverError('invalid session id', f'No active session {segments[1]}')
                if len(segments) == 2 and method == 'DELETE':
                    del self.sessions[session.session_id]
                    return None
                return session.handle(method, segments[2:], body)
            raise DriverError('unknown command', f'{method} {path}')

    def _new_session(self, body):
        capabilities = (body.get('capabilities') or {}).get('alwaysMatch') or {}
        if capabilities.get('browserName', 'fake') != 'fake':
            raise DriverError(
                'session not created', f'Browser {capabilities["browserName"]!r} is not installed'
            )
        session = FakeSession(
            {'browserName': 'fake', 'browserVersion': '1.0', **capabilities},
            on_end=self._end_session,
        )
        self.sessions[session.session_id] = session
        return {'sessionId': session.session_id, 'capabilities': session.capabilities}

    def _end_session(self, session):
        self.sessions.pop(session.session_id, None)


class _FakeWebDriverHandler(BaseHTTPRequestHandler):
    """Serves a ``FakeWebDriver`` over HTTP."""

    def do_GET(self):
        self._dispatch('GET')

    def do_POST(self):
        self._dispatch('POST')

    def do_DELETE(self):
        self._dispatch('DELETE')

    def _dispatch(self, method):
        body = None
        if method == 'POST':
            raw = self.rfile.read(int(self.headers.get('Content-Length', 0)))
            try:
                body = json.loads(raw.decode()) if raw else None
            except ValueError:
                body = None
            if not isinstance(body, dict):
                self._respond_error(DriverError('invalid argument', 'Body must be a JSON object'))
                return
        try:
            value = self.server.driver.handle(
                method, urlsplit(self.path).path, body, dict(self.headers)
            )
        except DriverError as exc:
            self._respond_error(exc)
        else:
            self._respond(200, {'value': value})

    def _respond_error(self, error):
        self._respond(
            error.status,
            {'value': {'error': error.code, 'message': error.message, 'stacktrace': ''}},
        )

    def _respond(self, status, payload):
        data = json.dumps(payload).encode()
        self.send_response(status)
        self.send_header('Content-Type', 'application/json; charset=utf-8')
        self.send_header('Content-Length', str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format, *args):
        pass


def _find_free_port():
    """Find a free port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


@pytest.fixture(scope='module')
def fake_driver():
    """Start a fake WebDriver endpoint for the test module."""
    driver = FakeWebDriver()
    port = _find_free_port()
    server = HTTPServer(('127.0.0.1', port), _FakeWebDriverHandler)
    server.driver = driver
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    driver.url = f'http://127.0.0.1:{port}'
    yield driver
    server.shutdown()
    server.server_close()


@pytest_asyncio.fixture
async def client(fake_driver):
    """Client connected to the fake endpoint, closed after the test."""
    client = await Client.connect(fake_driver.url)
    yield client
    if client.session.is_active:
        await client.close()


@pytest.fixture
def page_url():
    """Build the URL of a fixture page."""

    def build(name):
        return PAGE_BASE + name

    return build
