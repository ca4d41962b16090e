"""
Post table declaration
"""
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.sql import func

from blog_api.core.database import Base


class Post(Base):
    """Post model - represents the 'posts' table; author_id never changes after insert"""
    __tablename__ = "posts"
    __table_args__ = (
        UniqueConstraint("slug", name="posts_slug_key"),
        Index("idx_posts_author_id", "author_id"),
        Index("idx_posts_status", "status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    slug = Column(String(255), nullable=False)
    status = Column(String(20), nullable=False, server_default="draft")
    featured_image = Column(String(255))
    tags = Column(ARRAY(Text), nullable=False, server_default="{}")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<Post(id={self.id}, slug='{self.slug}', status='{self.status}')>"
