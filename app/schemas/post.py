from pydantic import BaseModel, Field, StringConstraints
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Annotated, Optional, List
from app.schemas.page import PageResponse

# hash_tags.tag_name 列长度
TagName = Annotated[str, StringConstraints(max_length=50)]

class PostBase(BaseModel):
    """文章基础模型"""
    title: str = Field(..., min_length=1, max_length=300)
    content: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

class PostCreate(PostBase):
    """创建文章请求模型"""
    writer: str = Field(..., min_length=1, max_length=20)
    hash_tags: List[TagName] = Field(default_factory=list, description="标签列表")

class PostModify(PostBase):
    """修改文章请求模型，作者不可修改"""
    post_id: int = Field(..., ge=1)

class PostDetailResponse(BaseModel):
    """文章详情响应模型"""
    id: int
    writer: str
    title: str
    content: Optional[str] = None
    hash_tags: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class PostListResponse(BaseModel):
    """文章列表响应模型"""
    count: int = Field(..., description="文章总数")
    page_info: PageResponse
    posts: List[PostDetailResponse]

    class Config:
        alias_generator = to_camel
        populate_by_name = True
