"""枚举定义

包含 TaskStatus 分组键、TaskPriority 优先级、SortKey 排序方式，
以及看板列顺序 STATUS_COLUMNS 和优先级排序权重 PRIORITY_RANK。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """任务状态 -- 同时也是看板列（status group）的键"""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    """任务优先级"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SortKey(StrEnum):
    """列表视图排序方式（取值与前端查询参数一致）"""

    DUE_DATE = "dueDate"
    PRIORITY = "priority"
    CREATED_AT = "createdAt"


# 看板列从左到右的顺序
STATUS_COLUMNS: tuple[TaskStatus, ...] = (
    TaskStatus.TODO,
    TaskStatus.IN_PROGRESS,
    TaskStatus.COMPLETED,
)

# 优先级排序权重：high 最靠前
PRIORITY_RANK: dict[TaskPriority, int] = {
    TaskPriority.HIGH: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.LOW: 2,
}


def status_position(status: TaskStatus) -> int:
    """返回状态所在看板列的下标"""
    return STATUS_COLUMNS.index(status)
