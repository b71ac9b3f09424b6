"""gateway 测试配置 -- httpx AsyncClient + 任务创建辅助函数"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def create_task(client: AsyncClient):
    """返回创建任务的辅助函数"""

    async def _create(title: str = "Task", status: str = "todo", **overrides) -> dict:
        payload = {
            "title": title,
            "description": f"{title} description",
            "status": status,
            "priority": "medium",
            "dueDate": "2025-01-15",
            **overrides,
        }
        resp = await client.post("/api/tasks", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
