"""列表视图投影测试"""

from datetime import date

import pytest
from taskboard.core.models import SortKey, TaskPriority, TaskStatus
from taskboard.core.view import project


@pytest.fixture
def tasks(task_factory):
    return [
        task_factory(
            "A",
            TaskStatus.TODO,
            0,
            title="Write API docs",
            priority=TaskPriority.LOW,
            due_date=date(2025, 1, 20),
            created_at=date(2024, 12, 19),
        ),
        task_factory(
            "B",
            TaskStatus.IN_PROGRESS,
            0,
            title="Fix login",
            description="Password reset is broken",
            priority=TaskPriority.HIGH,
            due_date=date(2025, 1, 5),
            created_at=date(2024, 12, 10),
        ),
        task_factory(
            "C",
            TaskStatus.TODO,
            1,
            title="Deploy",
            priority=TaskPriority.HIGH,
            due_date=date(2025, 1, 5),
            created_at=date(2024, 12, 22),
        ),
    ]


def _ids(tasks):
    return [task.id for task in tasks]


class TestProject:
    def test_default_sorts_by_due_date_stable(self, tasks):
        """due date 相同的任务保持输入顺序"""
        assert _ids(project(tasks)) == ["B", "C", "A"]

    def test_sort_by_priority(self, tasks):
        assert _ids(project(tasks, sort_by=SortKey.PRIORITY)) == ["B", "C", "A"]

    def test_sort_by_created_newest_first(self, tasks):
        assert _ids(project(tasks, sort_by="createdAt")) == ["C", "A", "B"]

    def test_no_sort_keeps_input_order(self, tasks):
        assert _ids(project(tasks, sort_by=None)) == ["A", "B", "C"]

    def test_filter_by_status(self, tasks):
        assert _ids(project(tasks, status="todo")) == ["C", "A"]

    def test_query_matches_title_and_description(self, tasks):
        assert _ids(project(tasks, query="api")) == ["A"]
        assert _ids(project(tasks, query="PASSWORD")) == ["B"]

    def test_blank_query_ignored(self, tasks):
        assert len(project(tasks, query="   ")) == 3

    def test_orders_untouched(self, tasks):
        """投影不改变任务的 order"""
        projected = project(tasks, sort_by=SortKey.PRIORITY)
        assert {t.id: t.order for t in projected} == {"A": 0, "B": 0, "C": 1}

    def test_unknown_sort_key(self, tasks):
        with pytest.raises(ValueError):
            project(tasks, sort_by="title")
