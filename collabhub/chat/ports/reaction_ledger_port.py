# =============================================================================
# File: collabhub/chat/ports/reaction_ledger_port.py
# Description: Port interface for the reaction ledger
# Pattern: Hexagonal Architecture / Ports & Adapters
# =============================================================================

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from collabhub.chat.enums import ReactionToggle
from collabhub.chat.read_models import ReactionSummary


@runtime_checkable
class ReactionLedgerPort(Protocol):
    """
    Port: Reaction Ledger

    Implemented by: ReactionReadRepo (collabhub/infra/read_repos/reaction_repo.py)

    A set of unique (message_id, user_id, emoji) triples. The uniqueness
    constraint, not the toggle itself, is the arbiter of existence.
    """

    async def toggle(self, message_id: int, user_id: int, emoji: str) -> ReactionToggle:
        """Remove the triple if present, insert it otherwise."""
        ...

    async def aggregate(self, message_id: int) -> List[ReactionSummary]:
        """Grouped by emoji, ordered by emoji; user_ids ascending."""
        ...
