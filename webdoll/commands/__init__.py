from webdoll.commands.context_commands import ContextCommands
from webdoll.commands.cookie_commands import CookieCommands
from webdoll.commands.document_commands import DocumentCommands
from webdoll.commands.element_commands import ElementCommands
from webdoll.commands.navigation_commands import NavigationCommands
from webdoll.commands.prompt_commands import PromptCommands
from webdoll.commands.session_commands import SessionCommands

__all__ = [
    'ContextCommands',
    'CookieCommands',
    'DocumentCommands',
    'ElementCommands',
    'NavigationCommands',
    'PromptCommands',
    'SessionCommands',
]
