"""
导出路由
"""
# 标准库导包
import logging
from typing import Optional

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from storage.database import get_session
from routers.services.export_service import ExportService
from utils import verify_api_token, AppException, InfrastructureError

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/api/export",
    tags=["翻译导出"],
    dependencies=[Depends(verify_api_token)]
)


@router.get("", summary="导出翻译")
async def export_translations(
    locale: Optional[str] = Query(None, max_length=10, description="语言代码，提供时只导出该语言的扁平映射"),
    session: AsyncSession = Depends(get_session)
):
    """
    导出翻译供前端直接使用

    - 不带locale: {"data": {locale: {key: value}}}
    - 带locale: {"data": {key: value}}

    直接返回JSONResponse，跳过响应模型校验，保证10万级数据的响应时间
    """
    try:
        service = ExportService(session)

        if locale:
            data = await service.export_by_locale(locale)
        else:
            data = await service.export()

        return JSONResponse(content={"data": data})

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"导出翻译失败: {str(e)}")
        raise InfrastructureError() from e
