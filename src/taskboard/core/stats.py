"""看板统计 -- 由任务列表推导出图表所需的数据

只做计算，不涉及任何渲染。所有日期比较均为日期精度。
"""

from collections import Counter
from collections.abc import Sequence
from datetime import date, timedelta

from pydantic import BaseModel, Field

from .config import UPCOMING_WINDOW_DAYS, WEEKLY_PROGRESS_DAYS
from .models.enums import TaskPriority, TaskStatus
from .models.task import Task


class DayProgress(BaseModel):
    """周进度图中的一天"""

    day: date
    created: int = 0
    completed: int = 0


class DashboardStats(BaseModel):
    """看板统计结果"""

    total: int = 0
    by_status: dict[TaskStatus, int] = Field(default_factory=dict)
    by_priority: dict[TaskPriority, int] = Field(default_factory=dict)
    completion_rate: int = Field(default=0, description="完成率（百分比，四舍五入）")
    productivity_score: int = Field(
        default=0, description="完成计 100 分、进行中计 50 分后的加权百分比"
    )
    upcoming: list[Task] = Field(default_factory=list, description="即将到期的未完成任务")
    overdue: list[Task] = Field(default_factory=list, description="已逾期的未完成任务")
    weekly_progress: list[DayProgress] = Field(default_factory=list)


def _percent(numerator: float, denominator: float) -> int:
    if denominator == 0:
        return 0
    # 与前端 Math.round 一致：.5 向上取整
    return int(numerator * 100 / denominator + 0.5)


def compute_dashboard(
    tasks: Sequence[Task],
    today: date,
    upcoming_days: int = UPCOMING_WINDOW_DAYS,
) -> DashboardStats:
    """计算看板统计

    Args:
        tasks: 全部任务
        today: 参考日期（由调用方传入，便于测试）
        upcoming_days: "即将到期" 的窗口天数（含 today 和窗口末日）

    Returns:
        DashboardStats
    """
    status_counts = Counter(task.status for task in tasks)
    priority_counts = Counter(task.priority for task in tasks)
    total = len(tasks)
    completed = status_counts[TaskStatus.COMPLETED]
    in_progress = status_counts[TaskStatus.IN_PROGRESS]

    open_tasks = [task for task in tasks if task.status != TaskStatus.COMPLETED]
    window_end = today + timedelta(days=upcoming_days)
    upcoming = sorted(
        (task for task in open_tasks if today <= task.due_date <= window_end),
        key=lambda task: task.due_date,
    )
    overdue = [task for task in open_tasks if task.due_date < today]

    weekly_progress = []
    for offset in range(WEEKLY_PROGRESS_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        created_that_day = [task for task in tasks if task.created_at == day]
        weekly_progress.append(
            DayProgress(
                day=day,
                created=len(created_that_day),
                completed=sum(
                    1 for task in created_that_day if task.status == TaskStatus.COMPLETED
                ),
            )
        )

    return DashboardStats(
        total=total,
        by_status={status: status_counts[status] for status in TaskStatus},
        by_priority={priority: priority_counts[priority] for priority in TaskPriority},
        completion_rate=_percent(completed, total),
        productivity_score=_percent(completed * 100 + in_progress * 50, total * 100),
        upcoming=upcoming,
        overdue=overdue,
        weekly_progress=weekly_progress,
    )
