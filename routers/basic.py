"""
基础API路由
包含根路径、健康检查等基础功能
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter
from sqlalchemy import text

# 项目内部导包
from config import settings
from storage.database import engine

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    tags=["基础功能"]
)


@router.get("/", summary="服务欢迎信息")
async def root():
    """
    根路径接口

    Returns:
        服务欢迎信息和版本
    """
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@router.get("/health", summary="健康检查")
async def health_check():
    """
    健康检查接口

    用于监控服务运行状态，常用于负载均衡器和监控系统；数据库不可达时状态为degraded

    Returns:
        服务健康状态信息
    """
    database_status = "ok"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"数据库健康检查失败: {str(e)}")
        database_status = "unavailable"

    return {
        "status": "healthy" if database_status == "ok" else "degraded",
        "service": settings.APP_NAME,
        "checks": {
            "api": "ok",
            "database": database_status
        }
    }
