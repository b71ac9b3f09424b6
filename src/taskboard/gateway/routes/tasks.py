"""任务路由

GET    /api/tasks                  任务列表（status 筛选 / q 搜索 / sort_by 排序）
POST   /api/tasks                  创建任务
PUT    /api/tasks/reorder          批量重排（tasks 原样写入，或 arrangement 服务端协调）
GET    /api/tasks/{task_id}        任务详情
PUT    /api/tasks/{task_id}        部分更新
DELETE /api/tasks/{task_id}        删除
POST   /api/tasks/{task_id}/move   单任务拖拽到指定列 / 位置
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from pydantic import BaseModel, Field, ValidationError
from starlette.responses import JSONResponse
from taskboard.core.exceptions import (
    InvalidArrangementError,
    MissingRequiredFieldsError,
    TaskNotFoundError,
)
from taskboard.core.models import SortKey, Task, TaskStatus, TaskUpdate

from ..deps import get_store_group
from ..services.task_service import TaskService

router = APIRouter()


class ReorderRequest(BaseModel):
    """批量重排请求体，tasks 与 arrangement 二选一"""

    tasks: list[Task] | None = Field(default=None, description="带最终 order/status 的任务")
    arrangement: dict[str, list[str]] | None = Field(
        default=None, description="status -> 有序 task_id 列表"
    )


class MoveRequest(BaseModel):
    """单任务移动请求体"""

    status: TaskStatus = Field(description="目标列")
    index: int | None = Field(default=None, ge=0, description="目标位置，缺省追加到末尾")


class DeleteResponse(BaseModel):
    """删除成功响应"""

    success: bool


def _error(status_code: int, code: str, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message, **extra}},
    )


def _not_found(task_id: str) -> JSONResponse:
    return _error(
        404, "TASK_NOT_FOUND", f"Task with id {task_id} does not exist", task_id=task_id
    )


@router.get("/api/tasks", response_model=list[Task])
async def list_tasks(
    status: TaskStatus | None = Query(default=None, description="按状态筛选"),
    sort_by: SortKey | None = Query(default=None, description="排序方式"),
    q: str | None = Query(default=None, description="标题/描述关键字"),
    store_group=Depends(get_store_group),
):
    """查询任务列表；未指定 sort_by 时按看板列和列内 order 返回"""
    service = TaskService(store_group)
    return await service.list_tasks(status=status, sort_by=sort_by, query=q)


@router.post("/api/tasks", status_code=201, response_model=Task)
async def create_task(
    payload: dict[str, Any] = Body(...),
    store_group=Depends(get_store_group),
):
    """创建任务

    - 成功返回 201 + 新任务
    - 必填字段缺失或为空返回 400，不写入任何记录
    - 字段取值非法返回 422
    """
    service = TaskService(store_group)
    try:
        task = await service.create_task(payload)
    except MissingRequiredFieldsError as e:
        return _error(400, e.code, str(e), fields=e.fields)
    except ValidationError as e:
        return _error(
            422,
            "INVALID_TASK_FIELDS",
            "Task fields are invalid",
            details=e.errors(include_url=False, include_context=False),
        )
    return task


@router.put("/api/tasks/reorder", response_model=list[Task])
async def reorder_tasks(
    body: ReorderRequest,
    store_group=Depends(get_store_group),
):
    """批量重排

    - tasks: 按给定 order/status 原样写入（单事务）
    - arrangement: 服务端协调后写入
    两种方式都返回最新的全量任务列表。
    """
    if (body.tasks is None) == (body.arrangement is None):
        return _error(
            400,
            "INVALID_REORDER_PAYLOAD",
            "Provide exactly one of 'tasks' or 'arrangement'",
        )

    service = TaskService(store_group)
    try:
        if body.tasks is not None:
            return await service.reorder_tasks(body.tasks)
        return await service.apply_arrangement(body.arrangement)
    except InvalidArrangementError as e:
        return _error(
            400,
            e.code,
            str(e),
            missing_ids=e.missing_ids,
            unknown_ids=e.unknown_ids,
            duplicate_ids=e.duplicate_ids,
        )
    except TaskNotFoundError as e:
        return _not_found(e.task_id)


@router.get("/api/tasks/{task_id}", response_model=Task)
async def get_task(
    task_id: str,
    store_group=Depends(get_store_group),
):
    """查询单个任务"""
    service = TaskService(store_group)
    task = await service.get_task(task_id)
    if task is None:
        return _not_found(task_id)
    return task


@router.put("/api/tasks/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    changes: TaskUpdate,
    store_group=Depends(get_store_group),
):
    """部分更新任务；只改 status 时任务追加到新列末尾"""
    service = TaskService(store_group)
    task = await service.update_task(task_id, changes)
    if task is None:
        return _not_found(task_id)
    return task


@router.delete("/api/tasks/{task_id}", response_model=DeleteResponse)
async def delete_task(
    task_id: str,
    store_group=Depends(get_store_group),
):
    """删除任务，不存在返回 404"""
    service = TaskService(store_group)
    if not await service.delete_task(task_id):
        return _not_found(task_id)
    return DeleteResponse(success=True)


@router.post("/api/tasks/{task_id}/move", response_model=list[Task])
async def move_task(
    task_id: str,
    body: MoveRequest,
    store_group=Depends(get_store_group),
):
    """把任务拖到目标列的指定位置，返回协调后的全量任务列表"""
    service = TaskService(store_group)
    try:
        return await service.move_task(task_id, body.status, body.index)
    except TaskNotFoundError:
        return _not_found(task_id)
