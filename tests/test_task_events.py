# =============================================================================
# File: tests/test_task_events.py
# Description: Task lifecycle events pushed to project rooms
# =============================================================================

import pytest

from collabhub.realtime.task_events import TaskEventPublisher, TaskEventType

from tests.fakes.scenario import OTHER_PROJECT_ID, PROJECT_ID


@pytest.fixture
def publisher(rooms):
    return TaskEventPublisher(rooms)


class TestTaskEventPublisher:

    @pytest.mark.asyncio
    async def test_created_goes_to_project_room_only(self, publisher, open_connection):
        _, inside = await open_connection(project_id=PROJECT_ID)
        _, outside = await open_connection(project_id=OTHER_PROJECT_ID)
        task = {"id": 3, "title": "Write docs"}

        delivered = await publisher.task_created(PROJECT_ID, task)

        assert delivered == 1
        assert inside.frames == [{"t": "taskCreated", "p": task}]
        assert outside.frames == []

    @pytest.mark.asyncio
    async def test_updated(self, publisher, open_connection):
        _, socket = await open_connection(project_id=PROJECT_ID)

        await publisher.publish(PROJECT_ID, TaskEventType.UPDATED, {"id": 3, "status": "done"})

        assert socket.events() == ["taskUpdated"]

    @pytest.mark.asyncio
    async def test_deleted_carries_only_id(self, publisher, open_connection):
        _, socket = await open_connection(project_id=PROJECT_ID)

        await publisher.task_deleted(PROJECT_ID, 3)

        assert socket.frames == [{"t": "taskDeleted", "p": {"id": 3}}]

    @pytest.mark.asyncio
    async def test_empty_room(self, publisher):
        assert await publisher.task_created(PROJECT_ID, {"id": 1}) == 0
