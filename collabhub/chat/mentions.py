# =============================================================================
# File: collabhub/chat/mentions.py
# Description: Mention detection - pure extraction and roster resolution
# =============================================================================

from __future__ import annotations

import re
from typing import Iterable, List, NamedTuple, Optional

from collabhub.membership.read_models import UserSummary

# "@" followed by ASCII word characters; "@Bob." yields "bob"
MENTION_PATTERN = re.compile(r"@(\w+)", re.ASCII)
_WHITESPACE = re.compile(r"\s+")


class ResolvedMention(NamedTuple):
    token: str
    user: Optional[UserSummary]

    @property
    def resolved(self) -> bool:
        return self.user is not None


def extract_mentions(text: str) -> List[str]:
    """
    Lowercased mention tokens in order of appearance.

    Duplicates are kept: every occurrence is one notification attempt.

    >>> extract_mentions("hi @Alice and @bob_2")
    ['alice', 'bob_2']
    """
    if not text:
        return []
    return [match.lower() for match in MENTION_PATTERN.findall(text)]


def normalize_display_name(name: str) -> str:
    """Display name with all whitespace removed, lowercased ("Bob Smith" -> "bobsmith")."""
    return _WHITESPACE.sub("", name or "").lower()


def resolve_mentions(tokens: Iterable[str], roster: Iterable[UserSummary]) -> List[ResolvedMention]:
    """
    Pair each token with the first roster member whose normalized display
    name equals it. Exact match only; unmatched tokens carry user=None.
    """
    index = {}
    for user in roster:
        index.setdefault(normalize_display_name(user.name), user)

    return [ResolvedMention(token, index.get(token)) for token in tokens]
