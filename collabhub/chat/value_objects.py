# =============================================================================
# File: collabhub/chat/value_objects.py
# Description: Chat value checks shared by every message store / ledger
# =============================================================================

from collabhub.chat.exceptions import InvalidContentError, InvalidReactionError

EMOJI_MAX_LENGTH = 16


def ensure_message_content(content: str) -> str:
    """Return content unchanged, or raise InvalidContentError when blank."""
    if not isinstance(content, str) or not content.strip():
        raise InvalidContentError()
    return content


def ensure_emoji(emoji: str) -> str:
    if not isinstance(emoji, str) or not emoji.strip() or len(emoji) > EMOJI_MAX_LENGTH:
        raise InvalidReactionError(str(emoji), EMOJI_MAX_LENGTH)
    return emoji
