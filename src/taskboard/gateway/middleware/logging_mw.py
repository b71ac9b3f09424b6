"""LoggingMiddleware -- 请求级日志

每个 HTTP 请求绑定一个 request_id 到 structlog contextvars：
上游（反向代理 / TaskboardClient 调用方）传入合法的 X-Request-ID 时沿用，否则生成 ULID。
请求结束时记录状态码与耗时，并在响应头中回写 request_id。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

# 上游传入的 request_id 最大长度，超出则重新生成
_MAX_REQUEST_ID_LENGTH = 64


def resolve_request_id(incoming: str | None) -> str:
    """沿用上游 request_id，缺失或不合法时生成新的 ULID"""
    if incoming and len(incoming) <= _MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return str(ULID())


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        log = structlog.get_logger()
        started = time.perf_counter()
        await log.adebug("request_started", query=request.url.query or None)

        response = await call_next(request)

        await log.ainfo(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
