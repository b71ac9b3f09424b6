"""Store Protocol 接口定义

定义 TaskStore 的抽象接口，使用 Python Protocol 实现结构化子类型（duck typing）。
SqliteTaskStore（本地）和 TaskboardClient（HTTP）都满足该接口。
"""

from collections.abc import Iterable
from typing import Protocol

from ..models.task import Task, TaskCreate, TaskUpdate


class TaskSource(Protocol):
    """看板会话所需的最小接口：全量读取 + 批量重排"""

    async def list_tasks(self, status: str | None = None) -> list[Task]:
        """查询任务列表，支持按状态筛选"""
        ...

    async def bulk_reorder(self, tasks: Iterable[Task]) -> None:
        """原子持久化每个任务的 order 和 status"""
        ...


class TaskStore(TaskSource, Protocol):
    """Task 存储接口（CRUD + 批量重排）"""

    async def get_task(self, task_id: str) -> Task | None:
        """根据 id 查询任务，不存在返回 None"""
        ...

    async def create_task(self, data: TaskCreate) -> Task:
        """创建任务（分配 id、createdAt、order）"""
        ...

    async def update_task(self, task_id: str, changes: TaskUpdate) -> Task | None:
        """部分更新任务，不存在返回 None"""
        ...

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，不存在返回 False"""
        ...
