# =============================================================================
# File: tests/test_event_handler.py
# Description: Inbound frame parsing and routing for one connection
# =============================================================================

import pytest

from collabhub.realtime.handlers import RealtimeEventHandler

from tests.fakes.scenario import ALICE, BOB, PROJECT_ID


@pytest.fixture
def make_handler(gateway, open_connection):
    async def _make(authenticated_user_id=None):
        connection, socket = await open_connection()
        connection.authenticated_user_id = authenticated_user_id
        return RealtimeEventHandler(connection, gateway), connection, socket
    return _make


class TestFrameFormat:

    @pytest.mark.asyncio
    async def test_short_and_long_envelopes(self, make_handler, rooms):
        handler, connection, _ = await make_handler()

        await handler.handle_message({"t": "register", "p": ALICE})
        await handler.handle_message({"type": "joinProject", "payload": {"projectId": PROJECT_ID}})

        assert await rooms.rooms_of(connection.conn_id) == {"user:1", "project:10"}

    @pytest.mark.asyncio
    async def test_register_user_alias_and_string_id(self, make_handler, rooms):
        handler, connection, _ = await make_handler()

        await handler.handle_message({"t": "registerUser", "p": {"userId": "2"}})

        assert connection.user_id == BOB
        assert "user:2" in await rooms.rooms_of(connection.conn_id)

    @pytest.mark.asyncio
    async def test_unknown_event(self, make_handler):
        handler, _, socket = await make_handler()

        await handler.handle_message({"t": "sendNotification", "p": {}})

        assert socket.last("error")["p"]["code"] == "UNKNOWN_EVENT"

    @pytest.mark.asyncio
    async def test_non_object_frame(self, make_handler):
        handler, _, socket = await make_handler()

        await handler.handle_message([1, 2, 3])

        assert socket.last("error")["p"]["code"] == "INVALID_FRAME"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("event", [["sendMessage"], {"name": "sendMessage"}, 7, None])
    async def test_non_string_event_name(self, make_handler, event):
        handler, _, socket = await make_handler()

        await handler.handle_message({"t": event, "p": {}})

        assert socket.last("error")["p"]["code"] == "INVALID_FRAME"

    @pytest.mark.asyncio
    async def test_invalid_payload(self, make_handler, message_store):
        handler, _, socket = await make_handler()

        await handler.handle_message({"t": "sendMessage", "p": {"content": "no ids"}})

        assert socket.last("error")["p"]["code"] == "INVALID_PAYLOAD"
        assert message_store.messages == {}

    @pytest.mark.asyncio
    async def test_missing_room_id(self, make_handler):
        handler, _, socket = await make_handler()

        await handler.handle_message({"t": "joinProject"})

        assert socket.last("error")["p"]["code"] == "INVALID_PAYLOAD"

    @pytest.mark.asyncio
    async def test_ping_pong(self, make_handler):
        handler, _, socket = await make_handler()

        await handler.handle_message({"t": "ping", "p": {"ts": 42}})

        assert socket.frames == [{"t": "PONG", "p": {"ts": 42}}]

    @pytest.mark.asyncio
    async def test_leave_project(self, make_handler, rooms):
        handler, connection, _ = await make_handler()
        await handler.handle_message({"t": "joinProject", "p": PROJECT_ID})

        await handler.handle_message({"t": "leaveProject", "p": PROJECT_ID})

        assert await rooms.rooms_of(connection.conn_id) == set()


class TestExtractId:

    @pytest.mark.parametrize("payload,expected", [
        (7, 7),
        ("7", 7),
        ({"projectId": 7}, 7),
        ({"projectId": "x"}, None),
        (None, None),
        (True, None),
    ])
    def test_extract(self, payload, expected):
        assert RealtimeEventHandler._extract_id(payload, "projectId") == expected


class TestIdentity:

    @pytest.mark.asyncio
    async def test_authenticated_connection_cannot_register_as_other(self, make_handler, rooms):
        handler, connection, socket = await make_handler(authenticated_user_id=ALICE)

        await handler.handle_message({"t": "register", "p": BOB})

        assert socket.last("error")["p"]["code"] == "FORBIDDEN"
        assert await rooms.rooms_of(connection.conn_id) == set()

    @pytest.mark.asyncio
    async def test_sender_id_must_match_token(self, make_handler, message_store):
        handler, _, socket = await make_handler(authenticated_user_id=ALICE)

        await handler.handle_message({
            "t": "sendMessage",
            "p": {"projectId": PROJECT_ID, "senderId": BOB, "content": "spoofed"},
        })

        assert socket.last("error")["p"]["code"] == "FORBIDDEN"
        assert message_store.messages == {}

    @pytest.mark.asyncio
    async def test_matching_sender_goes_through(self, make_handler, message_store):
        handler, _, _ = await make_handler(authenticated_user_id=ALICE)

        await handler.handle_message({
            "t": "sendMessage",
            "p": {"projectId": PROJECT_ID, "senderId": ALICE, "content": "hi"},
        })

        assert len(message_store.messages) == 1

    @pytest.mark.asyncio
    async def test_reaction_user_id_must_match_token(self, make_handler, message_store, reaction_ledger):
        message = await message_store.append(PROJECT_ID, ALICE, "hi")
        handler, _, socket = await make_handler(authenticated_user_id=ALICE)

        await handler.handle_message({
            "t": "toggleReaction",
            "p": {"messageId": message.id, "userId": BOB, "emoji": "👍", "projectId": PROJECT_ID},
        })

        assert socket.last("error")["p"]["code"] == "FORBIDDEN"
        assert reaction_ledger.reactions == set()
