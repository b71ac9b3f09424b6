"""看板排序协调模块

把拖拽产生的新排列（每个 status 分组内有序的 task_id 列表）转换为
每个任务正确的 order / status 字段。全部为纯函数：输入不会被修改，
持久化由调用方负责。

order 只由分组内位置推导，不做自增，因此对同一排列重复协调结果不变。
"""

from collections.abc import Iterable, Mapping, Sequence

import structlog
from pydantic import BaseModel, Field

from .exceptions import InvalidArrangementError, TaskNotFoundError
from .models.enums import STATUS_COLUMNS, TaskStatus
from .models.task import Task

log = structlog.get_logger()

# status -> 该分组内从上到下的 task_id 列表
Arrangement = dict[TaskStatus, list[str]]


class StatusChange(BaseModel):
    """一次协调中跨列移动的任务"""

    task_id: str
    from_status: TaskStatus
    to_status: TaskStatus


class ReconcileResult(BaseModel):
    """协调结果"""

    tasks: list[Task] = Field(description="协调后的全部任务，按列顺序、列内 order 排列")
    status_changes: list[StatusChange] = Field(
        default_factory=list, description="status 发生变化的任务"
    )
    changed_ids: list[str] = Field(
        default_factory=list, description="order 或 status 发生变化的任务 ID"
    )


def _normalize_arrangement(arrangement: Mapping[str, Sequence[str]]) -> Arrangement:
    """补齐缺省分组，并校验分组键是合法状态"""
    groups: Arrangement = {status: [] for status in STATUS_COLUMNS}
    for key, task_ids in arrangement.items():
        try:
            status = TaskStatus(key)
        except ValueError as e:
            raise InvalidArrangementError(f"Unknown status group: {key!r}") from e
        groups[status] = list(task_ids)
    return groups


def reconcile(
    tasks: Sequence[Task],
    arrangement: Mapping[str, Sequence[str]],
) -> ReconcileResult:
    """按新排列重算每个任务的 order，并识别跨列移动

    Args:
        tasks: 当前任务列表（除 order / status 外所有字段的事实来源）
        arrangement: 每个分组内有序的 task_id；缺少的分组视为空列

    Returns:
        ReconcileResult，任务数量和 ID 集合与输入一致

    Raises:
        InvalidArrangementError: 排列缺失任务、包含未知或重复 ID、分组键非法
    """
    groups = _normalize_arrangement(arrangement)
    by_id = {task.id: task for task in tasks}
    if len(by_id) != len(tasks):
        raise InvalidArrangementError("Current task list contains duplicate ids")

    seen: set[str] = set()
    duplicate_ids: list[str] = []
    unknown_ids: list[str] = []
    for status in STATUS_COLUMNS:
        for task_id in groups[status]:
            if task_id in seen:
                duplicate_ids.append(task_id)
                continue
            seen.add(task_id)
            if task_id not in by_id:
                unknown_ids.append(task_id)
    missing_ids = [task.id for task in tasks if task.id not in seen]

    if missing_ids or unknown_ids or duplicate_ids:
        log.warning(
            "reorder_rejected",
            missing_ids=missing_ids,
            unknown_ids=unknown_ids,
            duplicate_ids=duplicate_ids,
        )
        raise InvalidArrangementError(
            "Arrangement does not match the current task set",
            missing_ids=missing_ids,
            unknown_ids=unknown_ids,
            duplicate_ids=duplicate_ids,
        )

    reconciled: list[Task] = []
    status_changes: list[StatusChange] = []
    changed_ids: list[str] = []
    for status in STATUS_COLUMNS:
        for index, task_id in enumerate(groups[status]):
            original = by_id[task_id]
            if original.status != status:
                status_changes.append(
                    StatusChange(
                        task_id=task_id,
                        from_status=original.status,
                        to_status=status,
                    )
                )
            if original.status != status or original.order != index:
                changed_ids.append(task_id)
            reconciled.append(original.model_copy(update={"status": status, "order": index}))

    return ReconcileResult(
        tasks=reconciled,
        status_changes=status_changes,
        changed_ids=changed_ids,
    )


def _position_key(task: Task) -> tuple[int, object, str]:
    # order 相同时用 created_at、id 打破平局
    return (task.order, task.created_at, task.id)


def current_arrangement(tasks: Iterable[Task]) -> Arrangement:
    """由当前字段值推导出排列（分组内按 order 排序）"""
    groups: dict[TaskStatus, list[Task]] = {status: [] for status in STATUS_COLUMNS}
    for task in tasks:
        groups[task.status].append(task)
    return {
        status: [task.id for task in sorted(members, key=_position_key)]
        for status, members in groups.items()
    }


def move_task(
    tasks: Sequence[Task],
    task_id: str,
    to_status: TaskStatus | str,
    index: int | None = None,
) -> Arrangement:
    """构造单次拖拽后的排列

    任务从原分组移除，插入到 to_status 的 index 位置；index 为 None 时追加到末尾，
    越界的 index 会被截断到 [0, len]。同列内调整位置也使用此函数。

    Raises:
        TaskNotFoundError: task_id 不在当前任务列表中
        InvalidArrangementError: to_status 不是合法状态
    """
    task = next((t for t in tasks if t.id == task_id), None)
    if task is None:
        raise TaskNotFoundError(task_id)

    try:
        target_status = TaskStatus(to_status)
    except ValueError as e:
        raise InvalidArrangementError(f"Unknown status group: {to_status!r}") from e

    arrangement = current_arrangement(tasks)
    arrangement[task.status].remove(task_id)

    target = arrangement[target_status]
    if index is None:
        target.append(task_id)
    else:
        target.insert(max(0, min(index, len(target))), task_id)
    return arrangement


def normalize_orders(tasks: Sequence[Task]) -> ReconcileResult:
    """把每个分组的 order 压实为 0..n-1，不改变相对顺序"""
    return reconcile(tasks, current_arrangement(tasks))

