# =============================================================================
# File: collabhub/chat/exceptions.py
# Description: Chat domain exceptions
# =============================================================================

from collabhub.common.exceptions.exceptions import ValidationError, ResourceNotFoundError


class InvalidContentError(ValidationError):
    """Message content is empty or whitespace-only"""
    def __init__(self, reason: str = "Message content cannot be empty"):
        super().__init__(reason)


class InvalidReactionError(ValidationError):
    """Emoji is empty or longer than the ledger allows"""
    def __init__(self, emoji: str, max_length: int):
        super().__init__(f"Invalid reaction emoji (1-{max_length} characters): {emoji!r}")
        self.emoji = emoji


class MessageNotFoundError(ResourceNotFoundError):
    """Message not found (or not in the given project)"""
    def __init__(self, message_id: int):
        super().__init__(f"Message not found: {message_id}")
        self.message_id = message_id
