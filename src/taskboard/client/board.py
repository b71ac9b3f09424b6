"""BoardSession -- 看板本地状态容器

持有当前任务列表，拖拽时先在本地协调并立即生效（乐观更新），
再通过 bulk_reorder 持久化；持久化失败时用一次全量读取替换本地状态，
不做任何部分合并。同一时刻只处理一个操作，不支持取消。
"""

from collections.abc import Mapping, Sequence

import structlog
from taskboard.core.exceptions import ReorderPersistError
from taskboard.core.models import SortKey, Task, TaskStatus
from taskboard.core.reorder import (
    Arrangement,
    ReconcileResult,
    current_arrangement,
    move_task,
    reconcile,
)
from taskboard.core.store.protocols import TaskSource
from taskboard.core.view import project

log = structlog.get_logger()


class BoardSession:
    """看板会话

    source 可以是 SqliteTaskStore（本地）或 TaskboardClient（HTTP）。
    """

    def __init__(self, source: TaskSource, tasks: Sequence[Task] | None = None) -> None:
        self._source = source
        self._tasks: list[Task] = list(tasks or [])

    @property
    def tasks(self) -> list[Task]:
        """当前本地任务列表（副本）"""
        return list(self._tasks)

    def arrangement(self) -> Arrangement:
        """当前本地排列"""
        return current_arrangement(self._tasks)

    def view(
        self,
        status: TaskStatus | str | None = None,
        sort_by: SortKey | str | None = SortKey.DUE_DATE,
        query: str | None = None,
    ) -> list[Task]:
        """列表视图投影"""
        return project(self._tasks, status=status, sort_by=sort_by, query=query)

    async def refresh(self) -> list[Task]:
        """用数据源的全量读取替换本地状态"""
        self._tasks = list(await self._source.list_tasks())
        return self.tasks

    async def move(
        self,
        task_id: str,
        to_status: TaskStatus | str,
        index: int | None = None,
    ) -> ReconcileResult:
        """把任务拖到 to_status 的 index 位置（None 表示追加到末尾）

        Raises:
            TaskNotFoundError: 本地状态中没有该任务
            ReorderPersistError: 持久化失败（本地状态已重新读取）
        """
        arrangement = move_task(self._tasks, task_id, to_status, index)
        return await self.apply_arrangement(arrangement)

    async def apply_arrangement(
        self, arrangement: Mapping[str, Sequence[str]]
    ) -> ReconcileResult:
        """两阶段应用新排列：本地生效 -> 持久化 -> 失败则重新读取

        Raises:
            InvalidArrangementError: 排列与本地任务集合不一致（本地状态不变）
            ReorderPersistError: 持久化失败（本地状态已重新读取；读取也失败时恢复为操作前的状态）
        """
        result = reconcile(self._tasks, arrangement)

        # 阶段一：本地立即生效
        previous = self._tasks
        self._tasks = list(result.tasks)

        changed_ids = set(result.changed_ids)
        changed = [task for task in result.tasks if task.id in changed_ids]
        if not changed:
            return result

        # 阶段二：持久化
        try:
            await self._source.bulk_reorder(changed)
        except Exception as e:
            log.warning(
                "board_reorder_persist_failed",
                error_type=type(e).__name__,
                changed_count=len(changed),
            )
            try:
                await self.refresh()
            except Exception as refetch_error:
                # 重新读取也失败：撤销未持久化的本地修改
                self._tasks = previous
                log.warning(
                    "board_refetch_failed",
                    error_type=type(refetch_error).__name__,
                )
            raise ReorderPersistError(e) from e

        log.info(
            "board_reorder_persisted",
            changed_count=len(changed),
            status_change_count=len(result.status_changes),
        )
        return result
