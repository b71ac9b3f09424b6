"""ClientConfig -- 网关客户端配置加载

从环境变量加载配置。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()


class ClientConfig(BaseModel):
    """网关客户端配置 -- 从环境变量加载

    环境变量:
        TASKBOARD_API_URL: 网关地址（默认 http://localhost:8000）
        TASKBOARD_API_TIMEOUT_S: 请求超时（秒，默认 10）
    """

    base_url: str = Field(
        default="http://localhost:8000",
        description="Taskboard 网关基础 URL",
    )
    timeout_s: int = Field(
        default=10,
        ge=1,
        description="HTTP 请求超时（秒）",
    )


def load_client_config() -> ClientConfig:
    """从环境变量加载客户端配置

    环境变量映射:
        TASKBOARD_API_URL -> base_url (默认 "http://localhost:8000")
        TASKBOARD_API_TIMEOUT_S -> timeout_s (默认 10)

    Returns:
        ClientConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("TASKBOARD_API_URL"):
        kwargs["base_url"] = val

    if val := os.environ.get("TASKBOARD_API_TIMEOUT_S"):
        try:
            kwargs["timeout_s"] = int(val)
        except ValueError:
            log.warning(
                "invalid_timeout_config",
                env_var="TASKBOARD_API_TIMEOUT_S",
                value=val,
                fallback=10,
            )
            # 使用默认值，不阻塞启动

    return ClientConfig(**kwargs)
