"""Task Domain Model

对外 JSON 字段使用 camelCase（dueDate / createdAt），与前端保持一致；
Python 侧统一使用 snake_case 字段名。
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import MissingRequiredFieldsError
from .enums import TaskPriority, TaskStatus

# 创建任务时必须提供且不能为空的字段（使用对外字段名）
REQUIRED_CREATE_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "status",
    "priority",
    "dueDate",
)


class Task(BaseModel):
    """Task 数据模型

    order 只在同一 status 分组内有意义，跨分组比较没有定义。
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="唯一标识，ULID 格式，创建后不再变更")
    title: str = Field(description="任务标题")
    description: str = Field(description="任务描述")
    status: TaskStatus = Field(description="当前状态（看板列）")
    priority: TaskPriority = Field(description="优先级")
    due_date: date = Field(alias="dueDate", description="截止日期")
    created_at: date = Field(alias="createdAt", description="创建日期")
    order: int = Field(default=0, ge=0, description="分组内位置")


class TaskCreate(BaseModel):
    """创建任务的输入字段（id / createdAt / order 由 Store 分配）"""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(min_length=1, description="任务标题")
    description: str = Field(min_length=1, description="任务描述")
    status: TaskStatus = Field(description="目标状态")
    priority: TaskPriority = Field(description="优先级")
    due_date: date = Field(alias="dueDate", description="截止日期")

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TaskCreate":
        """从请求体构造，缺失或为空的必填字段统一报 MissingRequiredFieldsError

        字段存在但取值非法（如未知 status、日期格式错误）时抛出
        pydantic.ValidationError。
        """
        missing = [
            name
            for name in REQUIRED_CREATE_FIELDS
            if payload.get(name) is None or str(payload.get(name)).strip() == ""
        ]
        if missing:
            raise MissingRequiredFieldsError(missing)
        return cls.model_validate({name: payload[name] for name in REQUIRED_CREATE_FIELDS})


class TaskUpdate(BaseModel):
    """部分更新字段，None 表示保持不变"""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: date | None = Field(default=None, alias="dueDate")
    order: int | None = Field(default=None, ge=0)

    @field_validator("title", "description")
    @classmethod
    def _not_blank(cls, value: str | None) -> str | None:
        # 与创建时一致：只含空白视为空
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value

    def changes(self) -> dict[str, Any]:
        """返回实际需要写入的字段（snake_case 字段名）"""
        return self.model_dump(exclude_none=True)
