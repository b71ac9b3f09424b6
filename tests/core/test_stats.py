"""看板统计测试"""

from datetime import date, timedelta

from taskboard.core.models import TaskPriority, TaskStatus
from taskboard.core.stats import compute_dashboard

TODAY = date(2025, 1, 10)


class TestComputeDashboard:
    def test_empty(self):
        stats = compute_dashboard([], today=TODAY)
        assert stats.total == 0
        assert stats.completion_rate == 0
        assert stats.productivity_score == 0
        assert stats.by_status == {s: 0 for s in TaskStatus}
        assert len(stats.weekly_progress) == 7

    def test_counts_and_rates(self, task_factory):
        tasks = [
            task_factory("A", TaskStatus.COMPLETED, priority=TaskPriority.HIGH),
            task_factory("B", TaskStatus.IN_PROGRESS),
            task_factory("C", TaskStatus.TODO, priority=TaskPriority.LOW),
        ]
        stats = compute_dashboard(tasks, today=TODAY)
        assert stats.total == 3
        assert stats.by_status[TaskStatus.COMPLETED] == 1
        assert stats.by_priority[TaskPriority.MEDIUM] == 1
        # 1/3 -> 33%；(100 + 50) / 300 -> 50%
        assert stats.completion_rate == 33
        assert stats.productivity_score == 50

    def test_rounding_half_up(self, task_factory):
        tasks = [
            task_factory("A", TaskStatus.IN_PROGRESS),
            task_factory("B", TaskStatus.TODO),
            task_factory("C", TaskStatus.TODO),
            task_factory("D", TaskStatus.TODO),
            task_factory("E", TaskStatus.TODO),
            task_factory("F", TaskStatus.TODO),
            task_factory("G", TaskStatus.TODO),
            task_factory("H", TaskStatus.TODO),
        ]
        # 50 / 800 = 6.25% -> 6
        assert compute_dashboard(tasks, today=TODAY).productivity_score == 6

    def test_upcoming_and_overdue(self, task_factory):
        tasks = [
            task_factory("past", due_date=TODAY - timedelta(days=1)),
            task_factory("today", due_date=TODAY),
            task_factory("edge", due_date=TODAY + timedelta(days=7)),
            task_factory("far", due_date=TODAY + timedelta(days=8)),
            task_factory("done", TaskStatus.COMPLETED, due_date=TODAY - timedelta(days=3)),
        ]
        stats = compute_dashboard(tasks, today=TODAY, upcoming_days=7)
        assert [t.id for t in stats.upcoming] == ["today", "edge"]
        assert [t.id for t in stats.overdue] == ["past"]

    def test_upcoming_sorted_by_due_date(self, task_factory):
        tasks = [
            task_factory("later", due_date=TODAY + timedelta(days=3)),
            task_factory("sooner", due_date=TODAY + timedelta(days=1)),
        ]
        stats = compute_dashboard(tasks, today=TODAY)
        assert [t.id for t in stats.upcoming] == ["sooner", "later"]

    def test_weekly_progress(self, task_factory):
        tasks = [
            task_factory("A", TaskStatus.COMPLETED, created_at=TODAY),
            task_factory("B", TaskStatus.TODO, created_at=TODAY),
            task_factory("C", TaskStatus.TODO, created_at=TODAY - timedelta(days=6)),
            task_factory("D", TaskStatus.TODO, created_at=TODAY - timedelta(days=7)),
        ]
        progress = compute_dashboard(tasks, today=TODAY).weekly_progress
        assert [p.day for p in progress] == [TODAY - timedelta(days=n) for n in range(6, -1, -1)]
        assert (progress[-1].created, progress[-1].completed) == (2, 1)
        assert progress[0].created == 1
        assert sum(p.created for p in progress) == 3

    def test_json_dump(self, task_factory):
        stats = compute_dashboard([task_factory("A")], today=TODAY)
        data = stats.model_dump(mode="json")
        assert data["by_status"]["todo"] == 1
        assert data["weekly_progress"][-1]["day"] == "2025-01-10"
