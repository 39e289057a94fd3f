from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.core.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PAGE_LINK_COUNT


class PageRequest(BaseModel):
    """分页请求模型

    Out-of-range values are normalized instead of rejected: a page below 1
    becomes page 1, a non-positive size falls back to the default and a size
    above the maximum is capped.
    """
    page: int = Field(default=1, description="页码，从1开始")
    size: int = Field(default=DEFAULT_PAGE_SIZE, description="每页条数")

    @classmethod
    def of(cls, page: int | None = None, size: int | None = None) -> "PageRequest":
        page = 1 if page is None or page < 1 else page
        if size is None or size < 1:
            size = DEFAULT_PAGE_SIZE
        return cls(page=page, size=min(size, MAX_PAGE_SIZE))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


class PageResponse(BaseModel):
    """页码导航信息"""
    current_page: int
    start_page: int
    end_page: int
    final_page: int = Field(..., description="总页数")
    prev: bool
    next: bool
    total_count: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @classmethod
    def build(cls, page_request: PageRequest, total_count: int, link_count: int = PAGE_LINK_COUNT) -> "PageResponse":
        current = page_request.page
        # integer ceiling division, exact for arbitrarily large page numbers
        final_page = -(-total_count // page_request.size)

        end_page = -(-current // link_count) * link_count
        start_page = end_page - link_count + 1
        end_page = min(end_page, final_page)

        return cls(
            current_page=current,
            start_page=start_page,
            end_page=end_page,
            final_page=final_page,
            prev=start_page > 1,
            next=end_page < final_page,
            total_count=total_count,
        )
