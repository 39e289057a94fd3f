from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.hash_tag import HashTag
from app.models.post import Post
from app.repositories.base import Page
from app.schemas.page import PageRequest


class PostRepository:
    """CRUD and paged queries over posts"""

    def __init__(self, session: Session):
        self.session = session

    def add(self, post: Post) -> Post:
        self.session.add(post)
        self.session.flush()  # assigns post.id
        return post

    def find_by_id(self, post_id: int) -> Optional[Post]:
        return self.session.get(Post, post_id)

    def count(self) -> int:
        return self.session.scalar(select(func.count()).select_from(Post))

    def find_page(self, page_request: PageRequest) -> Page[Post]:
        """Most recent first; equal timestamps fall back to the higher id.

        Pages past the end are answered from the count alone, so an offset
        the datastore cannot represent never reaches it.
        """
        total = self.count()
        items = []
        if page_request.offset < total:
            stmt = (
                select(Post)
                .order_by(Post.created_at.desc(), Post.id.desc())
                .offset(page_request.offset)
                .limit(page_request.size)
            )
            items = list(self.session.scalars(stmt))
        return Page(items=items, total=total, page=page_request.page, size=page_request.size)

    def delete(self, post: Post) -> None:
        """Remove the post's tags first, then the post itself"""
        self.session.query(HashTag).filter(HashTag.post_id == post.id).delete(synchronize_session=False)
        self.session.delete(post)
        self.session.flush()


class HashTagRepository:
    """Tags are only ever looked up through their owning post"""

    def __init__(self, session: Session):
        self.session = session

    def add_all(self, post_id: int, tag_names: Iterable[str]) -> List[HashTag]:
        tags = [HashTag(tag_name=name, post_id=post_id) for name in tag_names]
        self.session.add_all(tags)
        self.session.flush()
        return tags

    def find_by_post_id(self, post_id: int) -> List[HashTag]:
        stmt = select(HashTag).where(HashTag.post_id == post_id).order_by(HashTag.id)
        return list(self.session.scalars(stmt))

    def find_by_post_ids(self, post_ids: Iterable[int]) -> Dict[int, List[HashTag]]:
        post_ids = list(post_ids)
        grouped: Dict[int, List[HashTag]] = defaultdict(list)
        if not post_ids:
            return grouped
        stmt = select(HashTag).where(HashTag.post_id.in_(post_ids)).order_by(HashTag.id)
        for tag in self.session.scalars(stmt):
            grouped[tag.post_id].append(tag)
        return grouped

    def count(self) -> int:
        return self.session.scalar(select(func.count()).select_from(HashTag))
