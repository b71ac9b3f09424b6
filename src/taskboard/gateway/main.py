"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + 可选演示数据 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from starlette.responses import JSONResponse
from taskboard.core.config import get_db_path, should_seed_demo
from taskboard.core.store import create_store_group, seed_demo_tasks

from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, stats, tasks

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB，关闭时清理连接"""
    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group
    app.state.db_path = db_path

    if should_seed_demo():
        seeded = await seed_demo_tasks(store_group.task_store)
        log.info("demo_seed_checked", seeded=seeded)

    log.info("store_initialized", db_path=db_path)

    yield

    # 关闭：清理数据库连接
    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """未预期的异常统一返回 OPERATION_FAILED，并完整记录到日志"""
    log.error(
        "unhandled_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "OPERATION_FAILED",
                "message": "Operation failed, see server logs",
            }
        },
    )


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Taskboard Gateway",
        version="0.1.0",
        description="Taskboard 任务看板 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging，Logging 位于最外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # 初始化日志
    setup_logging()
    setup_logfire(app)

    # 注册路由
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(stats.router, tags=["stats"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
