"""Task 模型与枚举测试

测试内容：
1. 枚举取值与看板列顺序
2. camelCase 别名序列化
3. TaskCreate.from_payload 必填字段校验
4. TaskUpdate.changes 只包含实际修改的字段
"""

from datetime import date

import pytest
from pydantic import ValidationError
from taskboard.core.exceptions import MissingRequiredFieldsError
from taskboard.core.models import (
    PRIORITY_RANK,
    STATUS_COLUMNS,
    SortKey,
    Task,
    TaskCreate,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)
from taskboard.core.models.enums import status_position


def _payload(**overrides):
    payload = {
        "title": "Write docs",
        "description": "Document the API",
        "status": "todo",
        "priority": "high",
        "dueDate": "2025-01-20",
    }
    payload.update(overrides)
    return payload


class TestEnums:
    def test_status_values(self):
        assert TaskStatus.IN_PROGRESS == "in-progress"
        assert [s.value for s in STATUS_COLUMNS] == ["todo", "in-progress", "completed"]

    def test_status_position(self):
        assert status_position(TaskStatus.TODO) == 0
        assert status_position(TaskStatus.COMPLETED) == 2

    def test_priority_rank_high_first(self):
        ranked = sorted(TaskPriority, key=lambda p: PRIORITY_RANK[p])
        assert ranked == [TaskPriority.HIGH, TaskPriority.MEDIUM, TaskPriority.LOW]

    def test_sort_key_values(self):
        assert SortKey("dueDate") == SortKey.DUE_DATE
        assert SortKey("createdAt") == SortKey.CREATED_AT


class TestTaskModel:
    def test_dump_uses_camel_case(self, task_factory):
        """对外 JSON 使用 dueDate / createdAt"""
        data = task_factory("A").model_dump(mode="json", by_alias=True)
        assert data["dueDate"] == "2025-01-10"
        assert data["createdAt"] == "2024-12-20"
        assert "due_date" not in data

    def test_accepts_alias_and_field_name(self):
        by_alias = Task.model_validate(
            {
                "id": "A",
                "title": "t",
                "description": "d",
                "status": "todo",
                "priority": "low",
                "dueDate": "2025-01-01",
                "createdAt": "2024-12-01",
            }
        )
        assert by_alias.due_date == date(2025, 1, 1)
        assert by_alias.order == 0

    def test_negative_order_rejected(self, task_factory):
        with pytest.raises(ValidationError):
            task_factory("A", order=-1)


class TestTaskCreate:
    def test_from_payload_ok(self):
        data = TaskCreate.from_payload(_payload())
        assert data.status == TaskStatus.TODO
        assert data.due_date == date(2025, 1, 20)

    def test_missing_fields_reported_together(self):
        """缺失和空白字段一起报告"""
        payload = _payload(title="   ")
        del payload["dueDate"]
        with pytest.raises(MissingRequiredFieldsError) as exc_info:
            TaskCreate.from_payload(payload)
        assert exc_info.value.fields == ["title", "dueDate"]
        assert exc_info.value.code == "MISSING_REQUIRED_FIELDS"
        assert "title, dueDate" in str(exc_info.value)

    def test_invalid_status_raises_validation_error(self):
        with pytest.raises(ValidationError):
            TaskCreate.from_payload(_payload(status="done"))

    def test_invalid_date_raises_validation_error(self):
        with pytest.raises(ValidationError):
            TaskCreate.from_payload(_payload(dueDate="not-a-date"))

    def test_extra_fields_ignored(self):
        data = TaskCreate.from_payload(_payload(id="client-chosen", order=9))
        assert not hasattr(data, "id")


class TestTaskUpdate:
    def test_changes_only_set_fields(self):
        update = TaskUpdate.model_validate({"status": "completed", "dueDate": "2025-03-01"})
        assert update.changes() == {
            "status": TaskStatus.COMPLETED,
            "due_date": date(2025, 3, 1),
        }

    def test_empty_update(self):
        assert TaskUpdate().changes() == {}

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            TaskUpdate(title="")

    def test_whitespace_only_rejected(self):
        """只含空白的标题 / 描述与创建时一样视为空"""
        with pytest.raises(ValidationError):
            TaskUpdate(title="   ")
        with pytest.raises(ValidationError):
            TaskUpdate(description="\t\n")

    def test_surrounding_whitespace_kept(self):
        assert TaskUpdate(title=" Plan ").changes() == {"title": " Plan "}
