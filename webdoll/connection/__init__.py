from webdoll.connection.connection_handler import ConnectionHandler
from webdoll.connection.error_mapper import map_error

__all__ = ['ConnectionHandler', 'map_error']
