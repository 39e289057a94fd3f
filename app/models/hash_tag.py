from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from app.db.database import Base

class HashTag(Base):
    """Hash tag model, owned by exactly one post"""
    __tablename__ = "hash_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tag_name: Mapped[str] = mapped_column(String(50), nullable=False)
    post_id: Mapped[int] = mapped_column(Integer, ForeignKey("posts.id"), nullable=False, index=True)

    def __repr__(self):
        return f"<HashTag id={self.id} tag_name={self.tag_name!r} post_id={self.post_id}>"
