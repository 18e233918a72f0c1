# Notification Command Handlers
# Import all handlers to trigger auto-registration via decorators

from collabhub.notification.command_handlers.notification_handlers import MarkNotificationReadHandler

__all__ = [
    'MarkNotificationReadHandler',
]
