"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、演示数据开关、看板统计窗口等可配置常量。
"""

import os
from pathlib import Path

import structlog

log = structlog.get_logger()


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKBOARD_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKBOARD_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskboard.db"),
    )


def should_seed_demo() -> bool:
    """空库启动时是否写入演示任务"""
    return os.environ.get("TASKBOARD_SEED_DEMO", "false").lower() == "true"


def _get_int_env(name: str, default: int) -> int:
    """读取正整数环境变量，非法值记录告警后回退到默认值"""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = None
    if value is None or value < 1:
        log.warning("invalid_int_config", env_var=name, value=raw, fallback=default)
        return default
    return value


# 看板 "即将到期" 窗口（天）
UPCOMING_WINDOW_DAYS: int = _get_int_env("TASKBOARD_UPCOMING_DAYS", 7)

# 看板周进度统计的天数
WEEKLY_PROGRESS_DAYS: int = 7
