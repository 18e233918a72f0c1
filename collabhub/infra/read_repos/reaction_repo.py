# =============================================================================
# File: collabhub/infra/read_repos/reaction_repo.py
# Description: PostgreSQL reaction ledger
# =============================================================================

from __future__ import annotations

import logging
from typing import List

from collabhub.chat.enums import ReactionToggle
from collabhub.chat.read_models import ReactionSummary
from collabhub.infra.persistence import pg_client

log = logging.getLogger("collabhub.chat.reaction_repo")


class ReactionReadRepo:
    """
    Implements ReactionLedgerPort on message_reactions.

    toggle() runs DELETE ... RETURNING and, when nothing was deleted,
    INSERT ... ON CONFLICT DO NOTHING, both in one transaction. The unique
    (message_id, user_id, emoji) constraint is the arbiter: the ledger never
    holds a duplicate.

    Known race: two concurrent toggles on an absent triple can both miss the
    DELETE; both report ADDED and only one row exists. Two concurrent toggles
    on a present triple can likewise both report REMOVED. The state self-
    corrects on the next aggregate. A single-statement upsert-or-delete (or a
    SELECT ... FOR UPDATE on the message row) closes the window if stronger
    guarantees are ever needed.
    """

    @staticmethod
    async def toggle(message_id: int, user_id: int, emoji: str) -> ReactionToggle:
        async with pg_client.transaction():
            deleted = await pg_client.fetchval(
                """
                DELETE FROM message_reactions
                WHERE message_id = $1 AND user_id = $2 AND emoji = $3
                RETURNING id
                """,
                message_id, user_id, emoji,
            )
            if deleted is not None:
                return ReactionToggle.REMOVED

            inserted = await pg_client.fetchval(
                """
                INSERT INTO message_reactions (message_id, user_id, emoji)
                VALUES ($1, $2, $3)
                ON CONFLICT ON CONSTRAINT uq_message_reactions_triple DO NOTHING
                RETURNING id
                """,
                message_id, user_id, emoji,
            )
            if inserted is None:
                log.debug(f"Concurrent insert won for ({message_id}, {user_id}, {emoji!r})")
            return ReactionToggle.ADDED

    @staticmethod
    async def aggregate(message_id: int) -> List[ReactionSummary]:
        rows = await pg_client.fetch(
            """
            SELECT emoji,
                   COUNT(*)::int AS count,
                   array_agg(user_id ORDER BY user_id) AS user_ids
            FROM message_reactions
            WHERE message_id = $1
            GROUP BY emoji
            ORDER BY emoji
            """,
            message_id,
        )
        return [
            ReactionSummary(emoji=r["emoji"], count=r["count"], user_ids=list(r["user_ids"]))
            for r in rows
        ]
