import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from app.core.config import DEFAULT_PAGE_SIZE
from app.db.database import get_session
from app.schemas.page import PageRequest
from app.schemas.post import PostCreate, PostModify, PostDetailResponse, PostListResponse
from app.services.post import PostService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_post_service(session: Session = Depends(get_session)) -> PostService:
    return PostService(session)


@router.get("", response_model=PostListResponse, summary="List posts page by page")
def list_posts(
    page: int = 1,
    size: int = DEFAULT_PAGE_SIZE,
    service: PostService = Depends(get_post_service)
):
    """List posts, newest first"""
    logger.info("/api/v1/posts?page=%s&size=%s", page, size)
    return service.get_posts(PageRequest.of(page, size))

@router.get("/{post_id}", response_model=PostDetailResponse, summary="Get a specific post")
def get_post(
    post_id: int,
    service: PostService = Depends(get_post_service)
):
    """Get a specific post"""
    logger.info("/api/v1/posts/%s GET", post_id)
    return service.get_detail(post_id)

@router.post("", response_model=PostDetailResponse, summary="Create a new post with hash tags")
def create_post(
    post: PostCreate,
    service: PostService = Depends(get_post_service)
):
    """Create a new post"""
    logger.info("/api/v1/posts POST - payload: %s", post)
    return service.insert(post)

@router.api_route("", methods=["PUT", "PATCH"], response_model=PostDetailResponse, summary="Update title and content of a post")
def update_post(
    post_modify: PostModify,
    request: Request,
    service: PostService = Depends(get_post_service)
):
    """Update a post"""
    logger.info("/api/v1/posts %s - payload: %s", request.method, post_modify)
    return service.modify(post_modify)

@router.delete("/{post_id}", summary="Delete a post and all its hash tags")
def delete_post(
    post_id: int,
    service: PostService = Depends(get_post_service)
):
    """Delete a post and all its hash tags"""
    logger.info("/api/v1/posts/%s DELETE", post_id)
    service.delete(post_id)
    return {"message": "Post deleted"}
