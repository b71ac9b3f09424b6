"""structlog 配置模块

TASKBOARD_LOG_FORMAT=dev（默认）输出彩色可读日志，json 输出一行一条的结构化日志。
标准库 logging（uvicorn / aiosqlite）统一经 ProcessorFormatter 渲染。
Logfire APM 由 LOGFIRE_SEND_TO_LOGFIRE 控制，默认关闭。
"""

import logging
import os

import structlog
from fastapi import FastAPI

# 请求日志由 LoggingMiddleware 输出，uvicorn 自带的 access log 只保留告警
_QUIET_LOGGERS = ("uvicorn.access",)


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    """按 TASKBOARD_LOG_FORMAT / TASKBOARD_LOG_LEVEL 初始化 structlog 与 logging"""
    json_output = os.environ.get("TASKBOARD_LOG_FORMAT", "dev").lower() == "json"
    level = _resolve_level(os.environ.get("TASKBOARD_LOG_LEVEL", "INFO"))

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        # JSON 中的异常需要提前渲染成字符串
        shared_processors.append(structlog.processors.format_exc_info)

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def setup_logfire(app: FastAPI) -> None:
    """LOGFIRE_SEND_TO_LOGFIRE=true 时启用 Logfire 并接入 FastAPI

    需要安装 logfire extra 并配置 LOGFIRE_TOKEN；初始化失败只记录告警，不影响启动。
    """
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return
    try:
        import logfire

        logfire.configure()
        logfire.instrument_fastapi(app)
    except Exception as e:
        structlog.get_logger().warning(
            "logfire_init_failed",
            error_type=type(e).__name__,
            error=str(e),
        )
