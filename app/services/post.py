"""
Post service.

Owns the business rules of the post resource: page-window computation,
response assembly, tag normalization and existence checks. Every write runs
inside ``transaction()`` so a post and its tags are stored or removed
together, and datastore faults are translated into the errors defined in
``app.core.exceptions``.
"""
import logging
import re
from typing import Iterable, List, Optional

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    ConflictError,
    FieldError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from app.db.database import transaction
from app.models.hash_tag import HashTag
from app.models.post import Post, new_post
from app.repositories.post import HashTagRepository, PostRepository
from app.schemas.page import PageRequest, PageResponse
from app.schemas.post import (
    PostCreate,
    PostDetailResponse,
    PostListResponse,
    PostModify,
)

logger = logging.getLogger(__name__)


def normalize_tags(tag_names: Optional[Iterable[str]]) -> List[str]:
    """Strip tags, drop blanks and collapse duplicates, keeping first-seen order"""
    if not tag_names:
        return []
    cleaned = (name.strip() for name in tag_names if name is not None)
    return list(dict.fromkeys(name for name in cleaned if name))


# "posts.title" (SQLite, MySQL) or 'column "title"' (PostgreSQL)
_COLUMN_PATTERNS = (
    re.compile(r"\b(?:posts|hash_tags)\.(\w+)"),
    re.compile(r'column "(\w+)"'),
)
_COLUMN_FIELDS = {"tag_name": "hashTags"}


def constraint_errors(error: SQLAlchemyError) -> List[FieldError]:
    """Name the offending field of a datastore rejection, or "post" when unknown"""
    message = str(getattr(error, "orig", None) or error)
    field = "post"
    for pattern in _COLUMN_PATTERNS:
        match = pattern.search(message)
        if match:
            field = _COLUMN_FIELDS.get(match.group(1), match.group(1))
            break
    return [FieldError(field=field, message="rejected by a datastore constraint", type="constraint")]


def to_detail(post: Post, tags: Iterable[HashTag]) -> PostDetailResponse:
    return PostDetailResponse(
        id=post.id,
        writer=post.writer,
        title=post.title,
        content=post.content,
        hash_tags=[tag.tag_name for tag in tags],
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


class PostService:
    def __init__(self, session: Session):
        self.session = session
        self.posts = PostRepository(session)
        self.hash_tags = HashTagRepository(session)

    def get_posts(self, page_request: PageRequest) -> PostListResponse:
        """List one page of posts, newest first, with page navigation info"""
        page_request = PageRequest.of(page_request.page, page_request.size)
        page = self.posts.find_page(page_request)
        tags_by_post = self.hash_tags.find_by_post_ids(post.id for post in page.items)

        return PostListResponse(
            count=page.total,
            page_info=PageResponse.build(page_request, page.total),
            posts=[to_detail(post, tags_by_post.get(post.id, [])) for post in page.items],
        )

    def get_detail(self, post_id: int) -> PostDetailResponse:
        post = self._get_post_or_raise(post_id)
        return to_detail(post, self.hash_tags.find_by_post_id(post.id))

    def insert(self, post_create: PostCreate) -> PostDetailResponse:
        """Store a post and its tags as one unit"""
        self._check_required(title=post_create.title, writer=post_create.writer)
        tag_names = normalize_tags(post_create.hash_tags)

        try:
            with transaction(self.session):
                post = self.posts.add(new_post(
                    title=post_create.title,
                    writer=post_create.writer,
                    content=post_create.content,
                ))
                tags = self.hash_tags.add_all(post.id, tag_names)
        except (IntegrityError, DataError) as e:
            logger.warning("post insert rejected by datastore: %s", e.orig)
            raise ValidationError("Post violates a datastore constraint", constraint_errors(e)) from e
        except SQLAlchemyError as e:
            raise InternalError("Failed to create post") from e

        self.session.refresh(post)
        logger.info("post %s created with %d tag(s)", post.id, len(tags))
        return to_detail(post, tags)

    def modify(self, post_modify: PostModify) -> PostDetailResponse:
        """Update title and content; writer and tags stay as they are"""
        post = self._get_post_or_raise(post_modify.post_id)
        self._check_required(title=post_modify.title)

        try:
            with transaction(self.session):
                post.title = post_modify.title
                post.content = post_modify.content
        except (IntegrityError, DataError) as e:
            logger.warning("post %s update rejected by datastore: %s", post_modify.post_id, e.orig)
            raise ValidationError("Post violates a datastore constraint", constraint_errors(e)) from e
        except SQLAlchemyError as e:
            raise InternalError(f"Failed to modify post {post_modify.post_id}") from e

        self.session.refresh(post)
        return to_detail(post, self.hash_tags.find_by_post_id(post.id))

    def delete(self, post_id: int) -> None:
        """Delete a post together with its tags"""
        post = self._get_post_or_raise(post_id)

        try:
            with transaction(self.session):
                self.posts.delete(post)
        except IntegrityError as e:
            logger.warning("post %s delete blocked: %s", post_id, e.orig)
            raise ConflictError(f"Post {post_id} is still referenced and cannot be deleted") from e
        except SQLAlchemyError as e:
            raise InternalError(f"Failed to delete post {post_id}") from e

        logger.info("post %s deleted", post_id)

    def _get_post_or_raise(self, post_id: int) -> Post:
        post = self.posts.find_by_id(post_id)
        if post is None:
            raise NotFoundError("post", post_id)
        return post

    @staticmethod
    def _check_required(**fields: Optional[str]) -> None:
        errors = [
            FieldError(field=name, message="must not be blank", type="missing")
            for name, value in fields.items()
            if value is None or not value.strip()
        ]
        if errors:
            raise ValidationError("Invalid post", errors)
