# =============================================================================
# File: collabhub/chat/enums.py
# Description: Chat domain enumerations
# =============================================================================

from enum import Enum


class ReactionToggle(str, Enum):
    """Outcome of toggling a (message, user, emoji) triple"""
    ADDED = "added"
    REMOVED = "removed"
