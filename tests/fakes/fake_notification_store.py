# =============================================================================
# File: tests/fakes/fake_notification_store.py
# Description: Fake NotificationStorePort and EmailSenderPort
# Pattern: Ports & Adapters - Fake/Stub adapter
# =============================================================================

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from collabhub.notification.read_models import NotificationReadModel

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


@dataclass
class CallRecord:
    """Record of a method call for verification."""
    method: str
    args: tuple
    kwargs: Dict[str, Any]
    result: Any = None


class FakeNotificationStore:
    """
    In-memory notifications.

    `fail_for_user(user_id)` makes create() raise for that recipient only,
    to check per-recipient isolation in the fan-out.
    """

    def __init__(self):
        self.notifications: Dict[int, NotificationReadModel] = {}
        self._next_id = 1
        self._failing_users: set = set()

        self._calls: List[CallRecord] = []
        self._should_fail: Dict[str, str] = {}

    def configure_failure(self, method: str, error_message: str) -> None:
        self._should_fail[method] = error_message

    def fail_for_user(self, user_id: int) -> None:
        self._failing_users.add(user_id)

    def for_user(self, user_id: int) -> List[NotificationReadModel]:
        return [n for n in self.notifications.values() if n.user_id == user_id]

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
    # NotificationStorePort
    # =========================================================================

    async def create(self, user_id: int, message: str) -> NotificationReadModel:
        self._record_call("create", user_id, message)
        self._check_failure("create")
        if user_id in self._failing_users:
            raise Exception(f"insert failed for user {user_id}")

        notification_id = self._next_id
        self._next_id += 1
        notification = NotificationReadModel(
            id=notification_id,
            user_id=user_id,
            message=message,
            is_read=False,
            created_at=_EPOCH + timedelta(seconds=notification_id),
        )
        self.notifications[notification_id] = notification
        return notification

    async def list_for_user(self, user_id: int) -> List[NotificationReadModel]:
        self._record_call("list_for_user", user_id)
        return sorted(self.for_user(user_id), key=lambda n: (n.created_at, n.id), reverse=True)

    async def mark_read(self, notification_id: int, user_id: int) -> Optional[NotificationReadModel]:
        self._record_call("mark_read", notification_id, user_id)
        notification = self.notifications.get(notification_id)
        if notification is None or notification.user_id != user_id:
            return None
        updated = notification.model_copy(update={"is_read": True})
        self.notifications[notification_id] = updated
        return updated


@dataclass
class SentEmail:
    to: str
    subject: str
    template_data: Dict[str, Any]


class FakeEmailSender:
    """
    Records sent mail. `configure_failure("send", ...)` raises from send();
    `delay` holds every send for that many seconds.
    """

    def __init__(self, delay: float = 0.0):
        self.sent: List[SentEmail] = []
        self.delay = delay

        self._calls: List[CallRecord] = []
        self._should_fail: Dict[str, str] = {}

    def configure_failure(self, method: str, error_message: str) -> None:
        self._should_fail[method] = error_message

    def was_called(self, method: str) -> bool:
        return any(c.method == method for c in self._calls)

    def get_call_count(self, method: str) -> int:
        return sum(1 for c in self._calls if c.method == method)

    async def send(self, to: str, subject: str, template_data: Dict[str, Any]) -> None:
        self._calls.append(CallRecord(method="send", args=(to, subject), kwargs={"template_data": template_data}))
        if self.delay:
            await asyncio.sleep(self.delay)
        if "send" in self._should_fail:
            raise Exception(self._should_fail["send"])
        self.sent.append(SentEmail(to=to, subject=subject, template_data=template_data))
