import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from blog_api.errors import StorageError
from blog_api.models.blog_post import BlogPost
from blog_api.schemas.blog import BlogFilter

logger = logging.getLogger(__name__)

SEARCHABLE_COLUMNS = (BlogPost.title, BlogPost.content, BlogPost.excerpt, BlogPost.tags)


def build_conditions(flt: BlogFilter) -> list:
    conditions = [BlogPost.published.is_(flt.published)]
    if flt.featured is not None:
        conditions.append(BlogPost.featured.is_(flt.featured))
    if flt.search:
        term = flt.search.lower()
        conditions.append(
            or_(
                *(
                    func.lower(column).contains(term, autoescape=True)
                    for column in SEARCHABLE_COLUMNS
                )
            )
        )
    return conditions


class SqlBlogPostsRepo:
    """SQLAlchemy persistence for blog posts."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _storage(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise StorageError(f"Failed to {action}") from e

    def count(self, flt: BlogFilter) -> int:
        stmt = select(func.count(BlogPost.id)).where(*build_conditions(flt))
        with self._storage("count blogs"):
            return self.db.execute(stmt).scalar_one()

    def find_page(self, flt: BlogFilter, offset: int, limit: int) -> List[BlogPost]:
        stmt = (
            select(BlogPost)
            .where(*build_conditions(flt))
            .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
            .offset(offset)
            .limit(limit)
        )
        with self._storage("fetch blogs"):
            return list(self.db.execute(stmt).scalars().all())

    def find_by_id(self, post_id: int) -> Optional[BlogPost]:
        with self._storage("fetch blog post"):
            return self.db.get(BlogPost, post_id)

    def find_published_by_slug(self, slug: str) -> Optional[BlogPost]:
        stmt = select(BlogPost).where(
            BlogPost.slug == slug, BlogPost.published.is_(True)
        )
        with self._storage("fetch blog post"):
            return self.db.execute(stmt).scalars().first()

    def slug_exists(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        stmt = select(BlogPost.id).where(BlogPost.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(BlogPost.id != exclude_id)
        with self._storage("check slug"):
            return self.db.execute(stmt.limit(1)).first() is not None

    def create(self, post: BlogPost) -> BlogPost:
        with self._storage("create blog post"):
            self.db.add(post)
            self.db.commit()
            self.db.refresh(post)
        return post

    def update_fields(self, post: BlogPost, updates: dict) -> BlogPost:
        with self._storage("update blog post"):
            for key, value in updates.items():
                setattr(post, key, value)
            self.db.commit()
            self.db.refresh(post)
        return post

    def delete(self, post: BlogPost) -> None:
        with self._storage("delete blog post"):
            self.db.delete(post)
            self.db.commit()

    def increment_view_count(self, post_id: int) -> None:
        stmt = (
            update(BlogPost)
            .where(BlogPost.id == post_id)
            .values(
                view_count=BlogPost.view_count + 1,
                # keep updated_at for content edits only
                updated_at=BlogPost.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        with self._storage("increment view count"):
            self.db.execute(stmt)
            self.db.commit()
