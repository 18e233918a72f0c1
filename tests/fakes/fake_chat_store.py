# =============================================================================
# File: tests/fakes/fake_chat_store.py
# Description: Fake MessageStorePort and ReactionLedgerPort
# Pattern: Ports & Adapters - Fake/Stub adapter
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Set, Tuple

from collabhub.chat.enums import ReactionToggle
from collabhub.chat.read_models import MessageReadModel, ReactionSummary
from collabhub.chat.value_objects import ensure_message_content

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


@dataclass
class CallRecord:
    """Record of a method call for verification."""
    method: str
    args: tuple
    kwargs: Dict[str, Any]
    result: Any = None


class FakeMessageStore:
    """
    Append-only in-memory message log.

    created_at advances one second per append so ordering is deterministic;
    `freeze_clock()` makes every message share one timestamp to exercise the
    id tie-breaker.
    """

    def __init__(self):
        self.messages: Dict[int, MessageReadModel] = {}
        self._next_id = 1
        self._frozen_at: Optional[datetime] = None

        self._calls: List[CallRecord] = []
        self._should_fail: Dict[str, str] = {}

    def freeze_clock(self, at: datetime = _EPOCH) -> None:
        self._frozen_at = at

    def configure_failure(self, method: str, error_message: str) -> None:
        self._should_fail[method] = error_message

    def was_called(self, method: str) -> bool:
        return any(c.method == method for c in self._calls)

    def get_call_count(self, method: str) -> int:
        return sum(1 for c in self._calls if c.method == method)

    def _record_call(self, method: str, *args, **kwargs) -> None:
        self._calls.append(CallRecord(method=method, args=args, kwargs=kwargs))

    def _check_failure(self, method: str) -> None:
        if method in self._should_fail:
            raise Exception(self._should_fail[method])

    # =========================================================================
    # MessageStorePort
    # =========================================================================

    async def append(self, project_id: int, sender_id: int, content: str) -> MessageReadModel:
        self._record_call("append", project_id, sender_id, content)
        self._check_failure("append")
        ensure_message_content(content)

        message_id = self._next_id
        self._next_id += 1
        created_at = self._frozen_at or (_EPOCH + timedelta(seconds=message_id))
        message = MessageReadModel(
            id=message_id,
            project_id=project_id,
            sender_id=sender_id,
            content=content,
            created_at=created_at,
        )
        self.messages[message_id] = message
        return message

    async def list_by_project(self, project_id: int) -> List[MessageReadModel]:
        self._record_call("list_by_project", project_id)
        self._check_failure("list_by_project")
        return sorted(
            (m for m in self.messages.values() if m.project_id == project_id),
            key=lambda m: (m.created_at, m.id),
        )

    async def get(self, message_id: int) -> Optional[MessageReadModel]:
        self._record_call("get", message_id)
        return self.messages.get(message_id)


class FakeReactionLedger:
    """Set of (message_id, user_id, emoji) triples."""

    def __init__(self):
        self.reactions: Set[Tuple[int, int, str]] = set()

        self._calls: List[CallRecord] = []
        self._should_fail: Dict[str, str] = {}

    def configure_failure(self, method: str, error_message: str) -> None:
        self._should_fail[method] = error_message

    def was_called(self, method: str) -> bool:
        return any(c.method == method for c in self._calls)

    def _record_call(self, method: str, *args, **kwargs) -> None:
        self._calls.append(CallRecord(method=method, args=args, kwargs=kwargs))

    def _check_failure(self, method: str) -> None:
        if method in self._should_fail:
            raise Exception(self._should_fail[method])

    # =========================================================================
    # ReactionLedgerPort
    # =========================================================================

    async def toggle(self, message_id: int, user_id: int, emoji: str) -> ReactionToggle:
        self._record_call("toggle", message_id, user_id, emoji)
        self._check_failure("toggle")

        triple = (message_id, user_id, emoji)
        if triple in self.reactions:
            self.reactions.discard(triple)
            return ReactionToggle.REMOVED
        self.reactions.add(triple)
        return ReactionToggle.ADDED

    async def aggregate(self, message_id: int) -> List[ReactionSummary]:
        self._record_call("aggregate", message_id)
        self._check_failure("aggregate")

        by_emoji: Dict[str, List[int]] = {}
        for mid, uid, emoji in self.reactions:
            if mid == message_id:
                by_emoji.setdefault(emoji, []).append(uid)

        return [
            ReactionSummary(emoji=emoji, count=len(user_ids), user_ids=sorted(user_ids))
            for emoji, user_ids in sorted(by_emoji.items())
        ]
