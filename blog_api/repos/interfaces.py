from __future__ import annotations

from typing import Optional, Protocol

from blog_api.models.blog_post import BlogPost
from blog_api.schemas.blog import BlogFilter


class BlogPostsRepoInterface(Protocol):
    """Storage capability the blogs service depends on.

    Every method is a single atomic storage call. Failures surface as
    ``blog_api.errors.StorageError``.
    """

    def count(self, flt: BlogFilter) -> int:  # pragma: no cover - Protocol
        ...

    def find_page(
        self, flt: BlogFilter, offset: int, limit: int
    ) -> list[BlogPost]:  # pragma: no cover - Protocol
        """Matching posts, newest first."""
        ...

    def find_by_id(self, post_id: int) -> Optional[BlogPost]:  # pragma: no cover - Protocol
        ...

    def find_published_by_slug(
        self, slug: str
    ) -> Optional[BlogPost]:  # pragma: no cover - Protocol
        ...

    def slug_exists(
        self, slug: str, exclude_id: Optional[int] = None
    ) -> bool:  # pragma: no cover - Protocol
        ...

    def create(self, post: BlogPost) -> BlogPost:  # pragma: no cover - Protocol
        ...

    def update_fields(
        self, post: BlogPost, updates: dict
    ) -> BlogPost:  # pragma: no cover - Protocol
        ...

    def delete(self, post: BlogPost) -> None:  # pragma: no cover - Protocol
        ...

    def increment_view_count(self, post_id: int) -> None:  # pragma: no cover - Protocol
        ...
