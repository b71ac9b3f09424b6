"""Taskboard Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import (
    PRIORITY_RANK,
    STATUS_COLUMNS,
    SortKey,
    TaskPriority,
    TaskStatus,
    status_position,
)
from .task import REQUIRED_CREATE_FIELDS, Task, TaskCreate, TaskUpdate

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskPriority",
    "SortKey",
    # 列顺序 / 排序权重
    "STATUS_COLUMNS",
    "PRIORITY_RANK",
    "status_position",
    # Task
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "REQUIRED_CREATE_FIELDS",
]
