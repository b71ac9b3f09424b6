"""演示数据

空库且 TASKBOARD_SEED_DEMO=true 时写入，也可通过 `python -m taskboard.core seed-demo` 手动写入。
"""

from datetime import date

import structlog
from ulid import ULID

from ..models.enums import TaskPriority, TaskStatus
from ..models.task import Task
from .task_store import SqliteTaskStore

log = structlog.get_logger()

# (title, description, status, priority, due_date, created_at, order)
_DEMO_ROWS: list[tuple[str, str, TaskStatus, TaskPriority, str, str, int]] = [
    (
        "Design new landing page",
        "Create wireframes and high-fidelity mockups for the new marketing landing page.",
        TaskStatus.IN_PROGRESS,
        TaskPriority.HIGH,
        "2025-01-15",
        "2024-12-20",
        0,
    ),
    (
        "Set up CI/CD pipeline",
        "Configure automated testing and deployment to the staging environment.",
        TaskStatus.TODO,
        TaskPriority.HIGH,
        "2025-01-10",
        "2024-12-18",
        0,
    ),
    (
        "Write API documentation",
        "Document all REST API endpoints using an OpenAPI specification.",
        TaskStatus.TODO,
        TaskPriority.MEDIUM,
        "2025-01-20",
        "2024-12-19",
        1,
    ),
    (
        "Fix navigation bug on mobile",
        "The hamburger menu doesn't close after selecting a menu item on iOS devices.",
        TaskStatus.COMPLETED,
        TaskPriority.MEDIUM,
        "2024-12-22",
        "2024-12-15",
        0,
    ),
    (
        "Implement user authentication",
        "Add login, registration, and password reset functionality.",
        TaskStatus.IN_PROGRESS,
        TaskPriority.HIGH,
        "2025-01-05",
        "2024-12-10",
        1,
    ),
    (
        "Optimize database queries",
        "Review and optimize slow queries identified in the performance audit.",
        TaskStatus.TODO,
        TaskPriority.LOW,
        "2025-02-01",
        "2024-12-21",
        2,
    ),
    (
        "Update dependencies",
        "Update all packages to their latest stable versions and fix breaking changes.",
        TaskStatus.COMPLETED,
        TaskPriority.LOW,
        "2024-12-20",
        "2024-12-12",
        1,
    ),
    (
        "Create onboarding flow",
        "Design and implement a step-by-step onboarding experience for new users.",
        TaskStatus.TODO,
        TaskPriority.MEDIUM,
        "2025-01-25",
        "2024-12-22",
        3,
    ),
]


def demo_tasks() -> list[Task]:
    """构造演示任务（每次调用生成新的 ID）"""
    return [
        Task(
            id=str(ULID()),
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=date.fromisoformat(due),
            created_at=date.fromisoformat(created),
            order=order,
        )
        for title, description, status, priority, due, created, order in _DEMO_ROWS
    ]


async def seed_demo_tasks(task_store: SqliteTaskStore) -> int:
    """空库时写入演示任务

    Returns:
        写入的任务数；库非空时为 0
    """
    if await task_store.count_tasks() > 0:
        return 0
    tasks = demo_tasks()
    await task_store.insert_tasks(tasks)
    log.info("demo_tasks_seeded", task_count=len(tasks))
    return len(tasks)
