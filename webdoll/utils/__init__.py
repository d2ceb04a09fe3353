from webdoll.utils.utils import decode_base64_to_bytes, escape_css_string

__all__ = ['decode_base64_to_bytes', 'escape_css_string']
