"""
翻译路由
提供翻译条目的增删改查、搜索与标签同步API接口
"""
# 标准库导包
import logging
from typing import List, Optional

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from config import settings
from models import (
    SearchFilters,
    CreateTranslationRequest,
    UpdateTranslationRequest,
    SyncTagsRequest,
    TranslationResponse,
    TranslationDetailResponse,
    TranslationListResponse,
    TagResponse
)
from storage.database import get_session
from storage.repositories.base import Page
from routers.services.translation_service import TranslationService
from utils import verify_api_token, AppException, InfrastructureError

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/api/translations",
    tags=["翻译管理"],
    dependencies=[Depends(verify_api_token)]
)


def _translation_to_response(translation) -> TranslationResponse:
    """
    将Translation模型转换为TranslationResponse

    Args:
        translation: 已加载标签的Translation模型实例

    Returns:
        TranslationResponse对象
    """
    return TranslationResponse(
        id=translation.id,
        key=translation.key,
        locale=translation.locale,
        value=translation.value,
        tags=[TagResponse(id=tag.id, name=tag.name) for tag in translation.tags],
        created_at=translation.created_at,
        updated_at=translation.updated_at
    )


def _page_to_response(page: Page) -> TranslationListResponse:
    """将分页结果转换为列表响应"""
    return TranslationListResponse(
        success=True,
        message="获取成功",
        data=[_translation_to_response(item) for item in page.items],
        total=page.total,
        page=page.page,
        per_page=page.per_page,
        last_page=page.last_page
    )


@router.get("", response_model=TranslationListResponse, summary="获取翻译列表")
async def list_translations(
    page: int = Query(1, ge=1, description="页码"),
    per_page: int = Query(settings.DEFAULT_PER_PAGE, ge=1, le=settings.MAX_PER_PAGE, description="每页数量"),
    session: AsyncSession = Depends(get_session)
):
    """
    分页获取全部翻译（含标签）
    """
    try:
        service = TranslationService(session)
        result = await service.paginate(page=page, per_page=per_page)
        return _page_to_response(result)

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"获取翻译列表失败: {str(e)}")
        raise InfrastructureError() from e


@router.get("/search", response_model=TranslationListResponse, summary="搜索翻译")
async def search_translations(
    key: Optional[str] = Query(None, max_length=255, description="翻译键子串"),
    locale: Optional[str] = Query(None, max_length=10, description="语言代码"),
    content: Optional[str] = Query(None, max_length=500, description="翻译内容子串"),
    tags: Optional[List[int]] = Query(None, description="标签ID，可重复传入，命中任意一个即匹配"),
    bracket_tags: Optional[List[int]] = Query(None, alias="tags[]", description="标签ID（tags[]=1&tags[]=2 写法），与tags合并"),
    page: int = Query(1, ge=1, description="页码"),
    per_page: int = Query(settings.DEFAULT_PER_PAGE, ge=1, le=settings.MAX_PER_PAGE, description="每页数量"),
    session: AsyncSession = Depends(get_session)
):
    """
    按键、语言、内容、标签组合搜索翻译

    所有条件可选，组合时为AND关系；标签条件内部为OR关系
    """
    try:
        tag_ids = (tags or []) + (bracket_tags or [])
        filters = SearchFilters(key=key, locale=locale, content=content, tags=tag_ids)

        service = TranslationService(session)
        result = await service.search(filters, page=page, per_page=per_page)
        return _page_to_response(result)

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"搜索翻译失败: {str(e)}")
        raise InfrastructureError() from e


@router.post(
    "",
    response_model=TranslationDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="创建翻译"
)
async def create_translation(
    request: CreateTranslationRequest,
    session: AsyncSession = Depends(get_session)
):
    """
    创建翻译条目，key+locale 重复时返回422
    """
    try:
        service = TranslationService(session)
        translation = await service.create_translation(
            key=request.key,
            locale=request.locale,
            value=request.value,
            tag_ids=request.tags
        )

        return TranslationDetailResponse(
            success=True,
            message="创建成功",
            data=_translation_to_response(translation)
        )

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"创建翻译失败: {str(e)}")
        raise InfrastructureError() from e


@router.get("/{translation_id}", response_model=TranslationDetailResponse, summary="获取翻译详情")
async def get_translation(
    translation_id: int,
    session: AsyncSession = Depends(get_session)
):
    try:
        service = TranslationService(session)
        translation = await service.get_translation(translation_id)

        return TranslationDetailResponse(
            success=True,
            message="获取成功",
            data=_translation_to_response(translation)
        )

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"获取翻译详情失败: {str(e)}")
        raise InfrastructureError() from e


@router.api_route(
    "/{translation_id}",
    methods=["PUT", "PATCH"],
    response_model=TranslationDetailResponse,
    summary="更新翻译"
)
async def update_translation(
    translation_id: int,
    request: UpdateTranslationRequest,
    session: AsyncSession = Depends(get_session)
):
    """
    更新翻译字段；请求中带有tags时整体替换标签（空列表表示清空）
    """
    try:
        service = TranslationService(session)
        translation = await service.update_translation(
            translation_id,
            fields=request.model_dump(include={"key", "locale", "value"}, exclude_none=True),
            tag_ids=request.tags
        )

        return TranslationDetailResponse(
            success=True,
            message="更新成功",
            data=_translation_to_response(translation)
        )

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"更新翻译失败: translation_id={translation_id}, error={str(e)}")
        raise InfrastructureError() from e


@router.delete("/{translation_id}", status_code=status.HTTP_204_NO_CONTENT, summary="删除翻译")
async def delete_translation(
    translation_id: int,
    session: AsyncSession = Depends(get_session)
):
    try:
        service = TranslationService(session)
        await service.delete_translation(translation_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"删除翻译失败: translation_id={translation_id}, error={str(e)}")
        raise InfrastructureError() from e


@router.put("/{translation_id}/tags", response_model=TranslationDetailResponse, summary="同步翻译标签")
async def sync_translation_tags(
    translation_id: int,
    request: SyncTagsRequest,
    session: AsyncSession = Depends(get_session)
):
    """
    用给定的完整标签列表替换翻译的标签，重复调用结果不变
    """
    try:
        service = TranslationService(session)
        await service.sync_tags(translation_id, request.tags)
        translation = await service.get_translation(translation_id)

        return TranslationDetailResponse(
            success=True,
            message="同步成功",
            data=_translation_to_response(translation)
        )

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"同步翻译标签失败: translation_id={translation_id}, error={str(e)}")
        raise InfrastructureError() from e
