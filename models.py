"""
数据模型定义
"""
# 标准库导包
from typing import Optional, List
from datetime import datetime

# 第三方库导包
from pydantic import BaseModel, Field


# ========== 搜索相关模型 ==========

class SearchFilters(BaseModel):
    """翻译搜索过滤条件，全部可选，组合时为AND关系"""
    key: Optional[str] = Field(None, max_length=255, description="翻译键子串")
    locale: Optional[str] = Field(None, max_length=10, description="语言代码，精确匹配")
    content: Optional[str] = Field(None, max_length=500, description="翻译内容子串")
    tags: List[int] = Field(default_factory=list, description="标签ID列表，命中任意一个即匹配")


# ========== 标签模块相关模型 ==========

class CreateTagRequest(BaseModel):
    """创建标签请求模型"""
    name: str = Field(..., min_length=1, max_length=255, description="标签名称")


class UpdateTagRequest(BaseModel):
    """更新标签请求模型"""
    name: str = Field(..., min_length=1, max_length=255, description="标签名称")


class TagResponse(BaseModel):
    """标签响应模型"""
    id: int
    name: str


class TagDetailResponse(BaseModel):
    """标签详情响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: TagResponse


class TagListResponse(BaseModel):
    """标签列表响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: List[TagResponse]
    total: int


# ========== 翻译模块相关模型 ==========

class CreateTranslationRequest(BaseModel):
    """创建翻译请求模型"""
    key: str = Field(..., min_length=1, max_length=255, description="翻译键")
    locale: str = Field(..., min_length=1, max_length=10, description="语言代码")
    value: str = Field(..., description="翻译内容")
    tags: List[int] = Field(default_factory=list, description="标签ID列表")


class UpdateTranslationRequest(BaseModel):
    """更新翻译请求模型，未提供的字段保持不变；tags提供时（包括空列表）整体替换标签"""
    key: Optional[str] = Field(None, min_length=1, max_length=255, description="翻译键")
    locale: Optional[str] = Field(None, min_length=1, max_length=10, description="语言代码")
    value: Optional[str] = Field(None, description="翻译内容")
    tags: Optional[List[int]] = Field(None, description="标签ID列表")


class SyncTagsRequest(BaseModel):
    """同步翻译标签请求模型"""
    tags: List[int] = Field(default_factory=list, description="完整的标签ID列表")


class TranslationResponse(BaseModel):
    """翻译响应模型"""
    id: int
    key: str
    locale: str
    value: str
    tags: List[TagResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class TranslationDetailResponse(BaseModel):
    """翻译详情响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: TranslationResponse


class TranslationListResponse(BaseModel):
    """翻译分页列表响应模型"""
    success: bool = True
    message: str = "获取成功"
    data: List[TranslationResponse]
    total: int
    page: int
    per_page: int
    last_page: int
