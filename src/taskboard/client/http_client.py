"""TaskboardClient -- 网关 HTTP 客户端

实现与 SqliteTaskStore 相同的 TaskStore 接口，BoardSession 可以直接使用。
404 映射为 None / False；400 映射为对应的领域异常；其余非 2xx 抛出 httpx.HTTPStatusError。
"""

from collections.abc import Iterable, Mapping, Sequence

import httpx
import structlog
from taskboard.core.exceptions import (
    InvalidArrangementError,
    MissingRequiredFieldsError,
    TaskNotFoundError,
)
from taskboard.core.models import SortKey, Task, TaskCreate, TaskStatus, TaskUpdate
from taskboard.core.stats import DashboardStats

from .config import ClientConfig

log = structlog.get_logger()

# 健康检查超时（秒）
HEALTH_CHECK_TIMEOUT_S = 5


def _error_body(resp: httpx.Response) -> dict:
    try:
        return resp.json().get("error", {})
    except (ValueError, AttributeError):
        return {}


def _tasks_from(resp: httpx.Response) -> list[Task]:
    return [Task.model_validate(item) for item in resp.json()]


class TaskboardClient:
    """Taskboard 网关客户端"""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout_s: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: 网关基础 URL
            timeout_s: 请求超时（秒）
            transport: 自定义 transport（测试时注入 MockTransport / ASGITransport）
        """
        self._base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout_s,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ClientConfig) -> "TaskboardClient":
        """根据 ClientConfig 创建客户端"""
        return cls(base_url=config.base_url, timeout_s=config.timeout_s)

    async def __aenter__(self) -> "TaskboardClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """关闭底层连接池"""
        await self._http.aclose()

    async def list_tasks(
        self,
        status: str | None = None,
        sort_by: SortKey | str | None = None,
        query: str | None = None,
    ) -> list[Task]:
        """查询任务列表"""
        params = {}
        if status:
            params["status"] = str(status)
        if sort_by:
            params["sort_by"] = str(sort_by)
        if query:
            params["q"] = query
        resp = await self._http.get("/api/tasks", params=params)
        resp.raise_for_status()
        return _tasks_from(resp)

    async def get_task(self, task_id: str) -> Task | None:
        """查询单个任务，不存在返回 None"""
        resp = await self._http.get(f"/api/tasks/{task_id}")
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return Task.model_validate(resp.json())

    async def create_task(self, data: TaskCreate) -> Task:
        """创建任务

        Raises:
            MissingRequiredFieldsError: 网关返回 400
        """
        resp = await self._http.post(
            "/api/tasks",
            json=data.model_dump(mode="json", by_alias=True),
        )
        if resp.status_code == 400:
            raise MissingRequiredFieldsError(_error_body(resp).get("fields", []))
        resp.raise_for_status()
        return Task.model_validate(resp.json())

    async def update_task(self, task_id: str, changes: TaskUpdate) -> Task | None:
        """部分更新任务，不存在返回 None"""
        resp = await self._http.put(
            f"/api/tasks/{task_id}",
            json=changes.model_dump(mode="json", by_alias=True, exclude_none=True),
        )
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return Task.model_validate(resp.json())

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，不存在返回 False"""
        resp = await self._http.delete(f"/api/tasks/{task_id}")
        if resp.status_code == 404:
            return False
        resp.raise_for_status()
        return True

    async def bulk_reorder(self, tasks: Iterable[Task]) -> None:
        """批量写入 order / status

        Raises:
            TaskNotFoundError: 批次中有任务不存在
        """
        resp = await self._http.put(
            "/api/tasks/reorder",
            json={"tasks": [task.model_dump(mode="json", by_alias=True) for task in tasks]},
        )
        if resp.status_code == 404:
            raise TaskNotFoundError(_error_body(resp).get("task_id", ""))
        resp.raise_for_status()
        log.debug("bulk_reorder_sent", base_url=self._base_url)

    async def apply_arrangement(
        self, arrangement: Mapping[str, Sequence[str]]
    ) -> list[Task]:
        """由网关协调并落盘新排列

        Raises:
            InvalidArrangementError: 排列与服务器上的任务集合不一致
        """
        resp = await self._http.put(
            "/api/tasks/reorder",
            json={"arrangement": {str(k): list(v) for k, v in arrangement.items()}},
        )
        if resp.status_code == 400:
            error = _error_body(resp)
            raise InvalidArrangementError(
                error.get("message", "Invalid arrangement"),
                missing_ids=error.get("missing_ids"),
                unknown_ids=error.get("unknown_ids"),
                duplicate_ids=error.get("duplicate_ids"),
            )
        resp.raise_for_status()
        return _tasks_from(resp)

    async def move_task(
        self, task_id: str, to_status: TaskStatus | str, index: int | None = None
    ) -> list[Task]:
        """把任务拖到目标列的指定位置

        Raises:
            TaskNotFoundError: 任务不存在
        """
        body: dict = {"status": str(to_status)}
        if index is not None:
            body["index"] = index
        resp = await self._http.post(f"/api/tasks/{task_id}/move", json=body)
        if resp.status_code == 404:
            raise TaskNotFoundError(task_id)
        resp.raise_for_status()
        return _tasks_from(resp)

    async def stats(self) -> DashboardStats:
        """看板统计"""
        resp = await self._http.get("/api/stats")
        resp.raise_for_status()
        return DashboardStats.model_validate(resp.json())

    async def health_check(self) -> bool:
        """检查网关可达性

        Returns:
            True 如果 /health 返回 200，连接失败或超时返回 False
        """
        try:
            resp = await self._http.get("/health", timeout=HEALTH_CHECK_TIMEOUT_S)
            return resp.status_code == 200
        except httpx.HTTPError as e:
            log.debug("health_check_failed", base_url=self._base_url, error=str(e))
            return False
