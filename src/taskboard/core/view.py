"""列表视图投影 -- 过滤 + 搜索 + 排序

纯函数，只改变展示顺序，不修改任何任务的 order。
同一组参数在任意时刻都能从规范任务列表重新推导出同样的结果。
"""

from collections.abc import Callable, Iterable

from .models.enums import PRIORITY_RANK, SortKey, TaskStatus
from .models.task import Task


def _matches_query(task: Task, query: str) -> bool:
    needle = query.casefold()
    return needle in task.title.casefold() or needle in task.description.casefold()


_SORTERS: dict[SortKey, tuple[Callable[[Task], object], bool]] = {
    SortKey.DUE_DATE: (lambda t: t.due_date, False),
    SortKey.PRIORITY: (lambda t: PRIORITY_RANK[t.priority], False),
    # 最新创建的排在前面
    SortKey.CREATED_AT: (lambda t: t.created_at, True),
}


def project(
    tasks: Iterable[Task],
    status: TaskStatus | str | None = None,
    sort_by: SortKey | str | None = SortKey.DUE_DATE,
    query: str | None = None,
) -> list[Task]:
    """按状态过滤、按关键字搜索，再按 sort_by 稳定排序

    Args:
        tasks: 规范任务列表
        status: 只保留该状态的任务；None 表示全部
        sort_by: 排序方式；None 表示保持输入顺序
        query: 标题或描述包含的关键字（不区分大小写）；None 或空串表示不过滤

    Returns:
        新的任务列表，排序键相同的任务保持输入中的相对顺序
    """
    result = list(tasks)
    if status is not None:
        wanted = TaskStatus(status)
        result = [task for task in result if task.status == wanted]
    if query and query.strip():
        result = [task for task in result if _matches_query(task, query.strip())]
    if sort_by is not None:
        key, reverse = _SORTERS[SortKey(sort_by)]
        result = sorted(result, key=key, reverse=reverse)
    return result
