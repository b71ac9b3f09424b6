"""Taskboard 异常体系"""


class TaskboardError(Exception):
    """Taskboard 基础异常"""

    # 网关返回给客户端的错误码
    code: str = "OPERATION_FAILED"


class TaskNotFoundError(TaskboardError):
    """任务不存在"""

    code = "TASK_NOT_FOUND"

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with id {task_id} does not exist")
        self.task_id = task_id


class InvalidArrangementError(TaskboardError):
    """新排列与当前任务集合不一致

    调用方不得部分应用，任何任务都不能被静默丢弃。
    """

    code = "INVALID_ARRANGEMENT"

    def __init__(
        self,
        message: str,
        missing_ids: list[str] | None = None,
        unknown_ids: list[str] | None = None,
        duplicate_ids: list[str] | None = None,
    ) -> None:
        """
        Args:
            message: 错误描述
            missing_ids: 当前存在但排列中缺失的任务 ID
            unknown_ids: 排列中出现但当前不存在的任务 ID
            duplicate_ids: 排列中重复出现的任务 ID
        """
        super().__init__(message)
        self.missing_ids = missing_ids or []
        self.unknown_ids = unknown_ids or []
        self.duplicate_ids = duplicate_ids or []


class MissingRequiredFieldsError(TaskboardError):
    """创建任务时必填字段缺失或为空"""

    code = "MISSING_REQUIRED_FIELDS"

    def __init__(self, fields: list[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(fields)}")
        self.fields = fields


class ReorderPersistError(TaskboardError):
    """乐观排序后持久化失败

    抛出前本地状态已经用一次全量读取替换。
    """

    code = "REORDER_PERSIST_FAILED"

    def __init__(self, original_error: Exception) -> None:
        super().__init__(f"Failed to persist reorder: {original_error}")
        self.original_error = original_error
