"""TaskStore SQLite 实现

负责 ID 唯一性、创建时的 order 分配（分组内 max + 1）以及批量重排的原子提交。
"""

from collections.abc import Iterable
from datetime import UTC, date, datetime

import aiosqlite
import structlog
from ulid import ULID

from ..exceptions import TaskNotFoundError
from ..models.enums import TaskStatus
from ..models.task import Task, TaskCreate, TaskUpdate
from .transaction import atomic

log = structlog.get_logger()

_COLUMNS = "id, title, description, status, priority, due_date, created_at, sort_order"

# 列表按看板列顺序返回，列内按 order
_LIST_ORDER_BY = """
ORDER BY CASE status
             WHEN 'todo' THEN 0
             WHEN 'in-progress' THEN 1
             ELSE 2
         END,
         sort_order ASC, created_at ASC, id ASC
"""


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def list_tasks(self, status: str | None = None) -> list[Task]:
        """查询任务列表，支持按状态筛选"""
        if status:
            cursor = await self._conn.execute(
                f"SELECT {_COLUMNS} FROM tasks WHERE status = ? {_LIST_ORDER_BY}",
                (status,),
            )
        else:
            cursor = await self._conn.execute(f"SELECT {_COLUMNS} FROM tasks {_LIST_ORDER_BY}")
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def get_task(self, task_id: str) -> Task | None:
        """根据 id 查询任务，不存在返回 None"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def count_tasks(self) -> int:
        """任务总数"""
        cursor = await self._conn.execute("SELECT COUNT(*) FROM tasks")
        row = await cursor.fetchone()
        return int(row[0])

    async def create_task(self, data: TaskCreate) -> Task:
        """创建任务：分配 id、created_at，order 追加到目标分组末尾"""
        async with atomic(self._conn):
            task = Task(
                id=str(ULID()),
                title=data.title,
                description=data.description,
                status=data.status,
                priority=data.priority,
                due_date=data.due_date,
                created_at=datetime.now(UTC).date(),
                order=await self._next_order(data.status),
            )
            await self._insert(task)

        log.info("task_created", task_id=task.id, status=task.status.value, order=task.order)
        return task

    async def insert_tasks(self, tasks: Iterable[Task]) -> None:
        """按原样写入完整的任务记录（导入 / 演示数据）"""
        async with atomic(self._conn):
            for task in tasks:
                await self._insert(task)

    async def update_task(self, task_id: str, changes: TaskUpdate) -> Task | None:
        """部分更新任务，不存在返回 None

        仅修改 status 而未指定 order 时，任务追加到新分组末尾。
        """
        async with atomic(self._conn):
            current = await self.get_task(task_id)
            if current is None:
                return None

            fields = changes.changes()
            moved = "status" in fields and fields["status"] != current.status
            if moved and "order" not in fields:
                fields["order"] = await self._next_order(fields["status"])

            updated = current.model_copy(update=fields)
            await self._conn.execute(
                """
                UPDATE tasks
                SET title = ?, description = ?, status = ?, priority = ?,
                    due_date = ?, sort_order = ?
                WHERE id = ?
                """,
                (
                    updated.title,
                    updated.description,
                    updated.status.value,
                    updated.priority.value,
                    updated.due_date.isoformat(),
                    updated.order,
                    task_id,
                ),
            )

        log.info("task_updated", task_id=task_id, fields=sorted(fields))
        return updated

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，返回是否真的删除了记录"""
        async with atomic(self._conn):
            cursor = await self._conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            deleted = cursor.rowcount > 0

        log.info("task_deleted", task_id=task_id, deleted=deleted)
        return deleted

    async def bulk_reorder(self, tasks: Iterable[Task]) -> None:
        """在一个事务内持久化每个任务的 order 和 status

        Raises:
            TaskNotFoundError: 批次中任一任务不存在（整个批次回滚）
        """
        count = 0
        async with atomic(self._conn):
            for task in tasks:
                cursor = await self._conn.execute(
                    "UPDATE tasks SET status = ?, sort_order = ? WHERE id = ?",
                    (TaskStatus(task.status).value, task.order, task.id),
                )
                if cursor.rowcount == 0:
                    raise TaskNotFoundError(task.id)
                count += 1

        log.info("tasks_reordered", task_count=count)

    async def _next_order(self, status: str) -> int:
        """分组内 max(order) + 1，空分组返回 0"""
        cursor = await self._conn.execute(
            "SELECT MAX(sort_order) FROM tasks WHERE status = ?",
            (TaskStatus(status).value,),
        )
        row = await cursor.fetchone()
        return 0 if row is None or row[0] is None else int(row[0]) + 1

    async def _insert(self, task: Task) -> None:
        await self._conn.execute(
            f"INSERT INTO tasks ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                task.id,
                task.title,
                task.description,
                task.status.value,
                task.priority.value,
                task.due_date.isoformat(),
                task.created_at.isoformat(),
                task.order,
            ),
        )

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row[0],
            title=row[1],
            description=row[2],
            status=row[3],
            priority=row[4],
            due_date=date.fromisoformat(row[5]),
            created_at=date.fromisoformat(row[6]),
            order=row[7],
        )
