"""事务封装

写操作在同一 SQLite 事务内提交：全部成功才 commit，
任何异常都先回滚再原样抛出，不做部分写入恢复。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite


@asynccontextmanager
async def atomic(conn: aiosqlite.Connection) -> AsyncIterator[aiosqlite.Connection]:
    """在上下文结束时提交事务，异常时回滚

    Args:
        conn: 数据库连接（需在同一连接上操作以保证事务性）

    Raises:
        Exception: 上下文内抛出的原始异常（已回滚）
    """
    try:
        yield conn
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise
