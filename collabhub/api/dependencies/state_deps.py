# collabhub/api/dependencies/state_deps.py
# =============================================================================
# File: collabhub/api/dependencies/state_deps.py
# Description: FastAPI dependencies resolving services from app.state
# =============================================================================

from typing import Any

from fastapi import HTTPException, Request, status

from collabhub.chat.ports.message_store_port import MessageStorePort
from collabhub.chat.ports.reaction_ledger_port import ReactionLedgerPort
from collabhub.config.logging_config import get_logger
from collabhub.infra.cqrs.command_bus import CommandBus
from collabhub.membership.authority import MembershipAuthority
from collabhub.membership.ports.user_directory_port import UserDirectoryPort
from collabhub.notification.ports.notification_store_port import NotificationStorePort
from collabhub.realtime.task_events import TaskEventPublisher

log = get_logger("collabhub.api.dependencies")


def _require_state(request: Request, name: str) -> Any:
    service = getattr(request.app.state, name, None)
    if service is None:
        log.error(f"{name} not available on app.state - startup incomplete?")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up",
        )
    return service


def get_command_bus(request: Request) -> CommandBus:
    return _require_state(request, "command_bus")


def get_membership_authority(request: Request) -> MembershipAuthority:
    return _require_state(request, "membership_authority")


def get_message_store(request: Request) -> MessageStorePort:
    return _require_state(request, "message_repo")


def get_reaction_ledger(request: Request) -> ReactionLedgerPort:
    return _require_state(request, "reaction_repo")


def get_notification_store(request: Request) -> NotificationStorePort:
    return _require_state(request, "notification_repo")


def get_user_directory(request: Request) -> UserDirectoryPort:
    return _require_state(request, "user_repo")


def get_task_events(request: Request) -> TaskEventPublisher:
    return _require_state(request, "task_events")
