from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text

from blog_api.db.postgres.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BlogPost(Base):
    __tablename__ = "blog_posts"
    __table_args__ = (
        # listing scans: filter on flags, newest first
        Index("ix_blog_posts_listing", "published", "featured", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(String(500), nullable=False, default="")
    author = Column(String(100), nullable=False)
    published = Column(Boolean, nullable=False, default=False, index=True)
    featured = Column(Boolean, nullable=False, default=False, index=True)
    tags = Column(String(500), nullable=False, default="")  # comma-separated
    meta_title = Column(String(60), nullable=False, default="")
    meta_description = Column("meta_desc", String(160), nullable=False, default="")
    reading_time = Column(Integer, nullable=False, default=0)
    view_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
    published_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<BlogPost id={self.id} slug={self.slug!r}>"
