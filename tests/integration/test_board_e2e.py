"""端到端测试 -- BoardSession -> TaskboardClient -> gateway -> SQLite

测试内容：
1. 演示数据上的拖拽：本地状态与服务器一致
2. 两个会话并发修改：后写入者因任务已删除而失败，重新读取后与服务器一致
3. 统计随拖拽变化
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport
from taskboard.client import BoardSession, TaskboardClient
from taskboard.core.exceptions import ReorderPersistError, TaskNotFoundError
from taskboard.core.models import TaskStatus
from taskboard.core.store import seed_demo_tasks


@pytest_asyncio.fixture
async def api(test_app) -> AsyncGenerator[TaskboardClient, None]:
    await seed_demo_tasks(test_app.state.store_group.task_store)
    async with TaskboardClient(
        base_url="http://test",
        transport=ASGITransport(app=test_app),
    ) as client:
        yield client


def _positions(tasks):
    return {t.id: (t.status, t.order) for t in tasks}


class TestBoardEndToEnd:
    async def test_drag_matches_server(self, api: TaskboardClient):
        board = BoardSession(api)
        await board.refresh()
        todo = board.arrangement()[TaskStatus.TODO]

        result = await board.move(todo[-1], TaskStatus.IN_PROGRESS, 0)

        assert [c.task_id for c in result.status_changes] == [todo[-1]]
        server = await api.list_tasks()
        assert _positions(server) == _positions(board.tasks)

        # 每个分组的 order 仍然连续
        for status in TaskStatus:
            orders = [t.order for t in server if t.status == status]
            assert sorted(orders) == list(range(len(orders)))

    async def test_stale_session_refetches(self, api: TaskboardClient):
        first = BoardSession(api)
        second = BoardSession(api)
        await first.refresh()
        await second.refresh()

        victim = first.arrangement()[TaskStatus.TODO][0]
        assert await api.delete_task(victim) is True

        with pytest.raises(ReorderPersistError) as exc_info:
            await second.move(victim, TaskStatus.COMPLETED)
        assert isinstance(exc_info.value.original_error, TaskNotFoundError)

        assert victim not in {t.id for t in second.tasks}
        assert _positions(second.tasks) == _positions(await api.list_tasks())

    async def test_stats_follow_moves(self, api: TaskboardClient):
        board = BoardSession(api)
        await board.refresh()
        before = await api.stats()

        for task_id in list(board.arrangement()[TaskStatus.TODO]):
            await board.move(task_id, TaskStatus.COMPLETED)

        after = await api.stats()
        assert after.total == before.total
        assert after.by_status[TaskStatus.TODO] == 0
        assert after.by_status[TaskStatus.COMPLETED] == (
            before.by_status[TaskStatus.COMPLETED] + before.by_status[TaskStatus.TODO]
        )
        assert after.completion_rate > before.completion_rate
