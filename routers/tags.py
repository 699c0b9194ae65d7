"""
标签路由
提供标签的增删改查API接口
"""
# 标准库导包
import logging

# 第三方库导包
from fastapi import APIRouter, HTTPException, Depends, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

# 项目内部导包
from models import (
    CreateTagRequest,
    UpdateTagRequest,
    TagResponse,
    TagDetailResponse,
    TagListResponse
)
from storage.database import get_session
from routers.services.tag_service import TagService
from utils import verify_api_token, AppException, InfrastructureError

# 配置日志
logger = logging.getLogger(__name__)

# 创建路由器
router = APIRouter(
    prefix="/api/tags",
    tags=["标签管理"],
    dependencies=[Depends(verify_api_token)]
)


@router.get("", response_model=TagListResponse, summary="获取标签列表")
async def list_tags(session: AsyncSession = Depends(get_session)):
    try:
        service = TagService(session)
        tags = await service.list_tags()

        tag_responses = [TagResponse(id=tag.id, name=tag.name) for tag in tags]

        return TagListResponse(
            success=True,
            message="获取成功",
            data=tag_responses,
            total=len(tag_responses)
        )

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"获取标签列表失败: {str(e)}")
        raise InfrastructureError() from e


@router.post("", response_model=TagDetailResponse, status_code=status.HTTP_201_CREATED, summary="创建标签")
async def create_tag(
    request: CreateTagRequest,
    session: AsyncSession = Depends(get_session)
):
    """
    创建标签，名称重复时返回422
    """
    try:
        service = TagService(session)
        tag = await service.create_tag(request.name)

        return TagDetailResponse(
            success=True,
            message="创建成功",
            data=TagResponse(id=tag.id, name=tag.name)
        )

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"创建标签失败: {str(e)}")
        raise InfrastructureError() from e


@router.get("/{tag_id}", response_model=TagDetailResponse, summary="获取标签详情")
async def get_tag(
    tag_id: int,
    session: AsyncSession = Depends(get_session)
):
    try:
        service = TagService(session)
        tag = await service.get_tag(tag_id)

        return TagDetailResponse(
            success=True,
            message="获取成功",
            data=TagResponse(id=tag.id, name=tag.name)
        )

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"获取标签详情失败: {str(e)}")
        raise InfrastructureError() from e


@router.api_route(
    "/{tag_id}",
    methods=["PUT", "PATCH"],
    response_model=TagDetailResponse,
    summary="更新标签"
)
async def update_tag(
    tag_id: int,
    request: UpdateTagRequest,
    session: AsyncSession = Depends(get_session)
):
    try:
        service = TagService(session)
        tag = await service.update_tag(tag_id, request.name)

        return TagDetailResponse(
            success=True,
            message="更新成功",
            data=TagResponse(id=tag.id, name=tag.name)
        )

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"更新标签失败: tag_id={tag_id}, error={str(e)}")
        raise InfrastructureError() from e


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT, summary="删除标签")
async def delete_tag(
    tag_id: int,
    session: AsyncSession = Depends(get_session)
):
    """
    删除标签，同时移除其与翻译的全部关联
    """
    try:
        service = TagService(session)
        await service.delete_tag(tag_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    except (AppException, HTTPException):
        raise
    except SQLAlchemyError as e:
        logger.error(f"删除标签失败: tag_id={tag_id}, error={str(e)}")
        raise InfrastructureError() from e
