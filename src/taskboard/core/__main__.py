"""CLI 入口模块 -- python -m taskboard.core <command>

支持的命令：
  init-db           创建数据库和表结构
  seed-demo         空库时写入演示任务
  normalize-orders  把每个分组的 order 压实为 0..n-1
"""

import asyncio
import sys

from .config import get_db_path

_USAGE = """用法: python -m taskboard.core <command>
命令:
  init-db           创建数据库和表结构
  seed-demo         空库时写入演示任务
  normalize-orders  把每个分组的 order 压实为 0..n-1"""


def main(argv: list[str] | None = None) -> int:
    """CLI 主入口"""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(_USAGE)
        return 1

    commands = {
        "init-db": init_db_command,
        "seed-demo": seed_demo_command,
        "normalize-orders": normalize_orders_command,
    }
    command = commands.get(args[0])
    if command is None:
        print(f"未知命令: {args[0]}")
        print(f"可用命令: {', '.join(commands)}")
        return 1

    asyncio.run(command())
    return 0


async def init_db_command() -> None:
    """创建数据库（create_store_group 内部执行 init_db）"""
    from .store import create_store_group

    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    await store_group.conn.close()
    print(f"数据库已初始化: {db_path}")


async def seed_demo_command() -> None:
    """写入演示任务"""
    from .store import create_store_group, seed_demo_tasks

    store_group = await create_store_group(get_db_path())
    try:
        count = await seed_demo_tasks(store_group.task_store)
    finally:
        await store_group.conn.close()

    if count:
        print(f"已写入 {count} 个演示任务")
    else:
        print("数据库非空，跳过演示数据")


async def normalize_orders_command() -> None:
    """读取全部任务，压实每个分组的 order 后批量写回"""
    from .reorder import normalize_orders
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())
    try:
        tasks = await store_group.task_store.list_tasks()
        result = normalize_orders(tasks)
        changed_ids = set(result.changed_ids)
        changed = [task for task in result.tasks if task.id in changed_ids]
        if changed:
            await store_group.task_store.bulk_reorder(changed)
    finally:
        await store_group.conn.close()

    print(f"处理 {len(tasks)} 个任务，更新 {len(changed)} 个")


if __name__ == "__main__":
    sys.exit(main())
