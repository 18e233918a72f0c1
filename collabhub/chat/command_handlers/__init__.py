# Chat Command Handlers
# Import all handlers to trigger auto-registration via decorators

from collabhub.chat.command_handlers.message_handlers import SendMessageHandler
from collabhub.chat.command_handlers.reaction_handlers import ToggleReactionHandler

__all__ = [
    'SendMessageHandler',
    'ToggleReactionHandler',
]
