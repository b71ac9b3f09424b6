"""TaskService -- 任务增删改查 / 排序协调业务逻辑

路由层只做请求解析和错误码映射，业务规则集中在这里：
1. 创建时校验必填字段（缺失/为空 -> MissingRequiredFieldsError）
2. 排列协调在内存中完成，通过 bulk_reorder 一次事务落盘
3. 协调失败（InvalidArrangementError）时不写入任何数据
"""

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

import structlog
from taskboard.core.models import SortKey, Task, TaskCreate, TaskStatus, TaskUpdate
from taskboard.core.reorder import ReconcileResult, move_task, reconcile
from taskboard.core.stats import DashboardStats, compute_dashboard
from taskboard.core.store import StoreGroup
from taskboard.core.view import project

log = structlog.get_logger()


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_tasks(
        self,
        status: TaskStatus | None = None,
        sort_by: SortKey | None = None,
        query: str | None = None,
    ) -> list[Task]:
        """查询任务列表；未指定 sort_by 时保持看板顺序"""
        tasks = await self._stores.task_store.list_tasks()
        return project(tasks, status=status, sort_by=sort_by, query=query)

    async def get_task(self, task_id: str) -> Task | None:
        """查询任务详情"""
        return await self._stores.task_store.get_task(task_id)

    async def create_task(self, payload: dict[str, Any]) -> Task:
        """校验请求体并创建任务

        Raises:
            MissingRequiredFieldsError: 必填字段缺失或为空
            pydantic.ValidationError: 字段取值非法
        """
        data = TaskCreate.from_payload(payload)
        return await self._stores.task_store.create_task(data)

    async def update_task(self, task_id: str, changes: TaskUpdate) -> Task | None:
        """部分更新任务"""
        return await self._stores.task_store.update_task(task_id, changes)

    async def delete_task(self, task_id: str) -> bool:
        """删除任务"""
        return await self._stores.task_store.delete_task(task_id)

    async def reorder_tasks(self, tasks: Sequence[Task]) -> list[Task]:
        """按调用方给出的 order / status 原样批量写入，返回最新全量列表"""
        await self._stores.task_store.bulk_reorder(tasks)
        return await self._stores.task_store.list_tasks()

    async def apply_arrangement(
        self, arrangement: Mapping[str, Sequence[str]]
    ) -> list[Task]:
        """服务端协调新排列并落盘

        Raises:
            InvalidArrangementError: 排列与当前任务集合不一致（不写入任何数据）
        """
        tasks = await self._stores.task_store.list_tasks()
        result = reconcile(tasks, arrangement)
        return await self._persist(result)

    async def move_task(
        self, task_id: str, to_status: TaskStatus, index: int | None = None
    ) -> list[Task]:
        """单个任务拖拽到 to_status 的 index 位置（None 表示追加到末尾）

        Raises:
            TaskNotFoundError: 任务不存在
        """
        tasks = await self._stores.task_store.list_tasks()
        arrangement = move_task(tasks, task_id, to_status, index)
        result = reconcile(tasks, arrangement)
        return await self._persist(result)

    async def dashboard(self) -> DashboardStats:
        """看板统计"""
        tasks = await self._stores.task_store.list_tasks()
        return compute_dashboard(tasks, today=datetime.now(UTC).date())

    async def _persist(self, result: ReconcileResult) -> list[Task]:
        """只写入 order / status 发生变化的任务"""
        changed_ids = set(result.changed_ids)
        changed = [task for task in result.tasks if task.id in changed_ids]
        if changed:
            await self._stores.task_store.bulk_reorder(changed)

        for change in result.status_changes:
            log.info(
                "task_status_changed",
                task_id=change.task_id,
                from_status=change.from_status.value,
                to_status=change.to_status.value,
            )
        log.info(
            "arrangement_applied",
            changed_count=len(changed),
            status_change_count=len(result.status_changes),
        )
        return result.tasks
