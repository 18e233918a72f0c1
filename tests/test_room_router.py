# =============================================================================
# File: tests/test_room_router.py
# Description: Presence/Room Router - rooms, broadcast, disconnect
# =============================================================================

import pytest

from collabhub.realtime.types import DisconnectKind, project_room, user_room

from tests.fakes.fake_socket import FakeSocket
from tests.fakes.scenario import ALICE, BOB, PROJECT_ID


class TestRooms:

    @pytest.mark.asyncio
    async def test_register_joins_user_room(self, rooms, open_connection):
        conn, _ = await open_connection(user_id=ALICE)
        assert await rooms.rooms_of(conn.conn_id) == {user_room(ALICE)}
        assert conn.user_id == ALICE

    @pytest.mark.asyncio
    async def test_register_is_idempotent(self, rooms, open_connection):
        conn, _ = await open_connection(user_id=ALICE)
        await rooms.register(conn.conn_id, ALICE)
        assert await rooms.members_of(user_room(ALICE)) == [conn.conn_id]

    @pytest.mark.asyncio
    async def test_user_and_project_rooms_do_not_collide(self, rooms, open_connection):
        # user 10 and project 10 share an id
        user_conn, user_socket = await open_connection(user_id=PROJECT_ID)
        project_conn, project_socket = await open_connection(project_id=PROJECT_ID)

        await rooms.emit_to_project(PROJECT_ID, "receiveMessage", {"id": 1})

        assert project_socket.events() == ["receiveMessage"]
        assert user_socket.frames == []

    @pytest.mark.asyncio
    async def test_join_and_leave_project(self, rooms, open_connection):
        conn, socket = await open_connection(project_id=PROJECT_ID)
        await rooms.leave_project(conn.conn_id, PROJECT_ID)

        assert await rooms.emit_to_project(PROJECT_ID, "receiveMessage", {}) == 0
        assert project_room(PROJECT_ID) not in rooms.rooms

    @pytest.mark.asyncio
    async def test_unknown_connection_cannot_join(self, rooms):
        assert await rooms.register("nope", ALICE) is None
        assert await rooms.join_project("nope", PROJECT_ID) is None

    @pytest.mark.asyncio
    async def test_every_connection_of_a_user_receives(self, rooms, open_connection):
        _, tab1 = await open_connection(user_id=BOB)
        _, tab2 = await open_connection(user_id=BOB)

        sent = await rooms.emit_to_user(BOB, "receiveNotification", {"id": 5})

        assert sent == 2
        assert tab1.frames == tab2.frames == [{"t": "receiveNotification", "p": {"id": 5}}]


class TestBroadcastFailures:

    @pytest.mark.asyncio
    async def test_failing_connection_does_not_stop_broadcast(self, rooms, open_connection):
        _, broken = await open_connection(project_id=PROJECT_ID, socket=FakeSocket(fail=True))
        _, healthy = await open_connection(project_id=PROJECT_ID)

        sent = await rooms.emit_to_project(PROJECT_ID, "receiveMessage", {"id": 1})

        assert sent == 1
        assert healthy.events() == ["receiveMessage"]

    @pytest.mark.asyncio
    async def test_stalled_connection_times_out(self, rooms, open_connection):
        _, stalled = await open_connection(project_id=PROJECT_ID, socket=FakeSocket(hang=True))
        _, healthy = await open_connection(project_id=PROJECT_ID)

        sent = await rooms.emit_to_project(PROJECT_ID, "receiveMessage", {"id": 1})

        assert sent == 1
        assert stalled.frames == []

    @pytest.mark.asyncio
    async def test_emit_to_connection_reports_failure(self, rooms, open_connection):
        conn, _ = await open_connection(socket=FakeSocket(fail=True))
        assert await rooms.emit_to_connection(conn.conn_id, "chatError", {}) is False
        assert await rooms.emit_to_connection("gone", "chatError", {}) is False


class TestDisconnect:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reason", [
        "transport close",
        "transport error",
        "ping timeout",
        "client namespace disconnect",
        "server namespace disconnect",
        1000,
        1001,
        1005,
        1006,
    ])
    async def test_transport_closures_are_expected(self, rooms, open_connection, reason):
        conn, _ = await open_connection(user_id=ALICE, project_id=PROJECT_ID)
        assert await rooms.disconnect(conn.conn_id, reason) is DisconnectKind.EXPECTED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reason", [1011, "server error: RuntimeError", "parse error"])
    async def test_other_reasons_are_unexpected(self, rooms, open_connection, reason):
        conn, _ = await open_connection(user_id=ALICE)
        assert await rooms.disconnect(conn.conn_id, reason) is DisconnectKind.UNEXPECTED

    @pytest.mark.asyncio
    async def test_cleanup_is_the_same_for_both_kinds(self, rooms, open_connection):
        expected, _ = await open_connection(user_id=ALICE, project_id=PROJECT_ID)
        unexpected, _ = await open_connection(user_id=BOB, project_id=PROJECT_ID)

        await rooms.disconnect(expected.conn_id, "transport close")
        await rooms.disconnect(unexpected.conn_id, "boom")

        assert rooms.connections == {}
        assert rooms.rooms == {}

    @pytest.mark.asyncio
    async def test_disconnect_leaves_other_connections(self, rooms, open_connection):
        first, _ = await open_connection(user_id=ALICE, project_id=PROJECT_ID)
        second, _ = await open_connection(user_id=ALICE, project_id=PROJECT_ID)

        await rooms.disconnect(first.conn_id, "transport close")

        assert await rooms.members_of(user_room(ALICE)) == [second.conn_id]
        stats = await rooms.get_stats()
        assert stats == {'active_connections': 1, 'active_users': 1, 'active_rooms': 2}
