from datetime import datetime, UTC
from sqlalchemy import Column, DateTime, Integer, String, Text
from app.db.database import Base

class Post(Base):
    """Post model"""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    writer = Column(String(20), nullable=False)
    title = Column(String(300), nullable=False)
    content = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    def __repr__(self):
        return f"<Post id={self.id} title={self.title!r} writer={self.writer!r}>"


def new_post(title: str, writer: str, content: str | None = None) -> Post:
    """Build an unsaved Post; id and timestamps are filled in by the datastore"""
    return Post(title=title, writer=writer, content=content)
