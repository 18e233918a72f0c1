# =============================================================================
# File: collabhub/core/startup/services.py
# Description: Read repositories, notification services and realtime wiring
# =============================================================================

import logging
from collabhub.core.fastapi_types import FastAPI

from collabhub.config.email_config import get_email_config
from collabhub.config.realtime_config import get_realtime_config
from collabhub.infra.background.side_effects import SideEffectRunner
from collabhub.infra.email.smtp_sender import SmtpEmailSender
from collabhub.infra.read_repos.membership_repo import MembershipReadRepo
from collabhub.infra.read_repos.message_repo import MessageReadRepo
from collabhub.infra.read_repos.notification_repo import NotificationReadRepo
from collabhub.infra.read_repos.reaction_repo import ReactionReadRepo
from collabhub.infra.read_repos.user_repo import ProjectReadRepo, UserReadRepo
from collabhub.membership.authority import MembershipAuthority
from collabhub.notification.fanout import NotificationFanout
from collabhub.realtime.gateway import RealtimeGateway
from collabhub.realtime.rooms import RoomRouter
from collabhub.realtime.task_events import TaskEventPublisher

logger = logging.getLogger("collabhub.startup.services")


async def initialize_read_repositories(app: FastAPI) -> None:
    """Create the PostgreSQL-backed port implementations"""
    app.state.membership_repo = MembershipReadRepo()
    app.state.message_repo = MessageReadRepo()
    app.state.reaction_repo = ReactionReadRepo()
    app.state.notification_repo = NotificationReadRepo()
    app.state.user_repo = UserReadRepo()
    app.state.project_repo = ProjectReadRepo()

    app.state.membership_authority = MembershipAuthority(app.state.membership_repo)
    logger.info("Read repositories initialized")


async def initialize_services(app: FastAPI) -> None:
    """Side-effect runner, email sender and the room router"""
    realtime_config = get_realtime_config()

    app.state.side_effects = SideEffectRunner(
        failure_log_size=realtime_config.side_effect_failure_log_size
    )

    email_sender = SmtpEmailSender(get_email_config())
    if not email_sender.is_configured:
        logger.warning("SMTP not configured - mention emails will be skipped")
    app.state.email_sender = email_sender

    app.state.rooms = RoomRouter(realtime_config)
    logger.debug(f"Realtime settings: {realtime_config.to_dict()}")
    logger.info("Core services initialized")


async def initialize_realtime(app: FastAPI) -> None:
    """Fan-out, gateway and task event publisher. Needs the command bus."""
    state = app.state

    state.fanout = NotificationFanout(
        memberships=state.membership_repo,
        users=state.user_repo,
        notifications=state.notification_repo,
        live=state.rooms,
        emails=state.email_sender,
        side_effects=state.side_effects,
    )

    state.gateway = RealtimeGateway(
        command_bus=state.command_bus,
        rooms=state.rooms,
        fanout=state.fanout,
        users=state.user_repo,
        projects=state.project_repo,
    )

    state.task_events = TaskEventPublisher(state.rooms)
    logger.info("Realtime gateway initialized")
