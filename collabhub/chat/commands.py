# =============================================================================
# File: collabhub/chat/commands.py
# Description: Chat domain commands
# =============================================================================

from __future__ import annotations

from collabhub.infra.cqrs.command_bus import Command


class SendMessageCommand(Command):
    """Append a chat message on behalf of a project member"""
    project_id: int
    sender_id: int
    content: str


class ToggleReactionCommand(Command):
    """Flip existence of a (message, user, emoji) reaction"""
    message_id: int
    user_id: int
    emoji: str
    project_id: int
