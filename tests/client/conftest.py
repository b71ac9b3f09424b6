"""client 测试配置 -- 通过 ASGITransport 直连测试 gateway 的 TaskboardClient"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport
from taskboard.client import TaskboardClient


@pytest_asyncio.fixture
async def api(test_app) -> AsyncGenerator[TaskboardClient, None]:
    async with TaskboardClient(
        base_url="http://test",
        transport=ASGITransport(app=test_app),
    ) as client:
        yield client
