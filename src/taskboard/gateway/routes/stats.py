"""看板统计路由

GET /api/stats: 状态/优先级计数、完成率、即将到期、已逾期、近 7 天进度。
"""

from fastapi import APIRouter, Depends
from taskboard.core.stats import DashboardStats

from ..deps import get_store_group
from ..services.task_service import TaskService

router = APIRouter()


@router.get("/api/stats", response_model=DashboardStats)
async def dashboard_stats(store_group=Depends(get_store_group)):
    """看板统计（以服务器当前 UTC 日期为参考日）"""
    service = TaskService(store_group)
    return await service.dashboard()
