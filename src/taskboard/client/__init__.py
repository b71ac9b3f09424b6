"""Taskboard Client -- 网关 HTTP 客户端与看板会话

公开接口导出。
"""

from .board import BoardSession
from .config import ClientConfig, load_client_config
from .http_client import TaskboardClient

__all__ = [
    "BoardSession",
    "ClientConfig",
    "TaskboardClient",
    "load_client_config",
]
