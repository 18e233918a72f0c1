# collabhub/core/app_state.py
# =============================================================================
# File: collabhub/core/app_state.py
# Description: Application state definition and global state management
# =============================================================================

from typing import Optional, Dict, Any
from datetime import datetime, timezone

from collabhub.infra.background.side_effects import SideEffectRunner
from collabhub.infra.cqrs.command_bus import CommandBus
from collabhub.infra.read_repos.membership_repo import MembershipReadRepo
from collabhub.infra.read_repos.message_repo import MessageReadRepo
from collabhub.infra.read_repos.notification_repo import NotificationReadRepo
from collabhub.infra.read_repos.reaction_repo import ReactionReadRepo
from collabhub.infra.read_repos.user_repo import ProjectReadRepo, UserReadRepo
from collabhub.membership.authority import MembershipAuthority
from collabhub.notification.fanout import NotificationFanout
from collabhub.notification.ports.email_sender_port import EmailSenderPort
from collabhub.realtime.gateway import RealtimeGateway
from collabhub.realtime.rooms import RoomRouter
from collabhub.realtime.task_events import TaskEventPublisher


# =============================================================================
# APP STATE TYPE DEFINITION
# =============================================================================
class AppState:
    """Type definition for FastAPI app.state with proper type hints"""

    def __init__(self):
        # Read repositories (port implementations)
        self.membership_repo: Optional[MembershipReadRepo] = None
        self.message_repo: Optional[MessageReadRepo] = None
        self.reaction_repo: Optional[ReactionReadRepo] = None
        self.notification_repo: Optional[NotificationReadRepo] = None
        self.user_repo: Optional[UserReadRepo] = None
        self.project_repo: Optional[ProjectReadRepo] = None

        # Domain services
        self.membership_authority: Optional[MembershipAuthority] = None
        self.email_sender: Optional[EmailSenderPort] = None
        self.side_effects: Optional[SideEffectRunner] = None

        # CQRS
        self.command_bus: Optional[CommandBus] = None
        self.cqrs_registration_stats: Optional[Dict[str, Any]] = None

        # Realtime
        self.rooms: Optional[RoomRouter] = None
        self.fanout: Optional[NotificationFanout] = None
        self.gateway: Optional[RealtimeGateway] = None
        self.task_events: Optional[TaskEventPublisher] = None


# =============================================================================
# GLOBAL STATE
# =============================================================================
_START_TIME = datetime.now(timezone.utc)


def get_start_time() -> datetime:
    """Get application start time"""
    return _START_TIME
