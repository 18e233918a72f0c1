# =============================================================================
# File: tests/conftest.py
# Description: Shared fixtures - the realtime core wired on in-memory fakes
# =============================================================================

from __future__ import annotations

from typing import Optional, Tuple

import pytest

from collabhub.config.realtime_config import RealtimeConfig
from collabhub.core.startup.cqrs import build_command_bus
from collabhub.infra.background.side_effects import SideEffectRunner
from collabhub.infra.cqrs.handler_dependencies import HandlerDependencies
from collabhub.membership.authority import MembershipAuthority
from collabhub.notification.fanout import NotificationFanout
from collabhub.realtime.connection import RealtimeConnection
from collabhub.realtime.gateway import RealtimeGateway
from collabhub.realtime.rooms import RoomRouter

from tests.fakes.fake_chat_store import FakeMessageStore, FakeReactionLedger
from tests.fakes.fake_directory import FakeDirectory
from tests.fakes.fake_notification_store import FakeEmailSender, FakeNotificationStore
from tests.fakes.fake_socket import FakeSocket
from tests.fakes.scenario import ALICE, BOB, CAROL, DAVE, EVE, OTHER_PROJECT_ID, PROJECT_ID


@pytest.fixture
def realtime_config() -> RealtimeConfig:
    return RealtimeConfig(send_timeout_seconds=0.2)


@pytest.fixture
def directory() -> FakeDirectory:
    """
    Project 10 "Apollo": Alice, Bob, Carol (full chat rights) and Eve
    (chat disabled). Dave exists but is not a member. Project 20 "Zeus" has
    only Dave.
    """
    d = FakeDirectory()
    d.add_user(ALICE, "Alice", "alice@example.com")
    d.add_user(BOB, "Bob", "bob@example.com")
    d.add_user(CAROL, "Carol Ann", None)
    d.add_user(DAVE, "Dave", "dave@example.com")
    d.add_user(EVE, "Eve", "eve@example.com")

    d.add_project(PROJECT_ID, "Apollo")
    d.add_project(OTHER_PROJECT_ID, "Zeus")

    d.add_member(PROJECT_ID, ALICE, role="owner")
    d.add_member(PROJECT_ID, BOB)
    d.add_member(PROJECT_ID, CAROL)
    d.add_member(PROJECT_ID, EVE, chat=False)
    d.add_member(OTHER_PROJECT_ID, DAVE)
    return d


@pytest.fixture
def message_store() -> FakeMessageStore:
    return FakeMessageStore()


@pytest.fixture
def reaction_ledger() -> FakeReactionLedger:
    return FakeReactionLedger()


@pytest.fixture
def notification_store() -> FakeNotificationStore:
    return FakeNotificationStore()


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def side_effects() -> SideEffectRunner:
    return SideEffectRunner(failure_log_size=50)


@pytest.fixture
def authority(directory) -> MembershipAuthority:
    return MembershipAuthority(directory)


@pytest.fixture
def command_bus(authority, directory, message_store, reaction_ledger, notification_store):
    return build_command_bus(
        HandlerDependencies(
            membership=authority,
            message_store=message_store,
            reaction_ledger=reaction_ledger,
            notification_store=notification_store,
            users=directory,
        )
    )


@pytest.fixture
def rooms(realtime_config) -> RoomRouter:
    return RoomRouter(realtime_config)


@pytest.fixture
def fanout(directory, notification_store, rooms, email_sender, side_effects, realtime_config) -> NotificationFanout:
    return NotificationFanout(
        memberships=directory,
        users=directory,
        notifications=notification_store,
        live=rooms,
        emails=email_sender,
        side_effects=side_effects,
        config=realtime_config,
    )


@pytest.fixture
def gateway(command_bus, rooms, fanout, directory) -> RealtimeGateway:
    return RealtimeGateway(
        command_bus=command_bus,
        rooms=rooms,
        fanout=fanout,
        users=directory,
        projects=directory,
    )


@pytest.fixture
def open_connection(rooms):
    """
    Factory: connect a FakeSocket, optionally register it to a user room
    and join a project room.

        conn, socket = await open_connection(user_id=ALICE, project_id=10)
    """

    async def _open(
            user_id: Optional[int] = None,
            project_id: Optional[int] = None,
            socket: Optional[FakeSocket] = None,
    ) -> Tuple[RealtimeConnection, FakeSocket]:
        socket = socket or FakeSocket()
        connection = RealtimeConnection(transport=socket)
        await rooms.connect(connection)
        if user_id is not None:
            await rooms.register(connection.conn_id, user_id)
        if project_id is not None:
            await rooms.join_project(connection.conn_id, project_id)
        return connection, socket

    return _open
