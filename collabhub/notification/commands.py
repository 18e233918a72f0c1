# =============================================================================
# File: collabhub/notification/commands.py
# Description: Notification domain commands
# =============================================================================

from collabhub.infra.cqrs.command_bus import Command


class MarkNotificationReadCommand(Command):
    """Owner marks one of their notifications as read"""
    notification_id: int
    user_id: int
