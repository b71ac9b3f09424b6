"""全局 pytest 配置 -- 临时 SQLite 数据库 + 测试用 FastAPI app + 任务构造工具"""

from collections.abc import AsyncGenerator
from datetime import date
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio
from taskboard.core.models import Task, TaskPriority, TaskStatus


@pytest_asyncio.fixture
async def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "test.db"


@pytest_asyncio.fixture
async def db_conn(tmp_db_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """提供已初始化的临时 SQLite 数据库连接"""
    from taskboard.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_db_path))
    await init_db(conn)
    yield conn
    await conn.close()


def make_task(
    task_id: str,
    status: TaskStatus = TaskStatus.TODO,
    order: int = 0,
    *,
    title: str | None = None,
    description: str = "description",
    priority: TaskPriority = TaskPriority.MEDIUM,
    due_date: date = date(2025, 1, 10),
    created_at: date = date(2024, 12, 20),
) -> Task:
    """构造测试任务"""
    return Task(
        id=task_id,
        title=title or f"Task {task_id}",
        description=description,
        status=status,
        priority=priority,
        due_date=due_date,
        created_at=created_at,
        order=order,
    )


@pytest.fixture
def task_factory():
    """返回任务构造函数"""
    return make_task


@pytest_asyncio.fixture
async def test_app(tmp_path: Path, monkeypatch):
    """测试用 gateway app（手动初始化 StoreGroup，绕过 lifespan）"""
    db_path = str(tmp_path / "sqlite" / "test.db")
    monkeypatch.setenv("TASKBOARD_DB_PATH", db_path)
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from taskboard.core.store import create_store_group
    from taskboard.gateway.main import create_app

    app = create_app()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group
    app.state.db_path = db_path

    yield app

    await store_group.conn.close()
