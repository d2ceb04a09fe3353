import base64


def decode_base64_to_bytes(image: str) -> bytes:
    """Decode a base64 payload returned by the driver (screenshots) to bytes."""
    return base64.b64decode(image.encode('utf-8'))


def escape_css_string(value: str) -> str:
    """
    Escape a value for use inside a double-quoted CSS string.

    Backslashes and double quotes are backslash-escaped; line breaks are
    written as CSS hex escapes since they cannot appear literally.
    """
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return escaped.replace('\n', '\\a ').replace('\r', '\\d ')
