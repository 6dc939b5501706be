import logging
import math
import secrets
from datetime import datetime
from typing import Callable, Optional

from blog_api.errors import BlogNotFoundError, StorageError
from blog_api.models.blog_post import BlogPost, utcnow
from blog_api.repos.interfaces import BlogPostsRepoInterface
from blog_api.schemas.blog import (
    BlogCreate,
    BlogDetail,
    BlogListResponse,
    BlogSummary,
    BlogUpdate,
    ListBlogsParams,
)
from blog_api.utils import (
    DEFAULT_EXCERPT_LENGTH,
    calculate_reading_time,
    generate_excerpt,
    generate_slug,
)

logger = logging.getLogger(__name__)


class BlogsService:
    """Listing, lookup and write operations for blog posts.

    Depends only on the storage capability; derived fields (slug, excerpt,
    reading time, publish timestamp) are computed here before anything is
    persisted.
    """

    def __init__(
        self,
        repo: BlogPostsRepoInterface,
        excerpt_max_length: int = DEFAULT_EXCERPT_LENGTH,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repo = repo
        self.excerpt_max_length = excerpt_max_length
        self.clock = clock

    def list_blogs(self, params: ListBlogsParams) -> BlogListResponse:
        # count and fetch are separate calls and may observe different snapshots;
        # the metadata always follows the counted total
        total = self.repo.count(params.filters)
        total_pages = math.ceil(total / params.limit) if total else 0
        posts = self.repo.find_page(params.filters, params.offset, params.limit)

        logger.debug(
            f"Listing blogs page={params.page} limit={params.limit} "
            f"filters={params.filters} total={total}"
        )
        return BlogListResponse(
            items=[BlogSummary.from_model(post) for post in posts[: params.limit]],
            total=total,
            page=params.page,
            limit=params.limit,
            total_pages=total_pages,
            has_next=params.page < total_pages,
            has_prev=params.page > 1,
        )

    def get_blog_by_slug(self, slug: str) -> BlogDetail:
        post = self.repo.find_published_by_slug(slug)
        if post is None:
            raise BlogNotFoundError(slug)

        detail = BlogDetail.from_model(post)
        self._record_view(post.id)
        return detail

    def create_blog(self, payload: BlogCreate) -> BlogDetail:
        now = self.clock()
        post = build_post(
            payload,
            slug=self._unique_slug(generate_slug(payload.title)),
            excerpt_max_length=self.excerpt_max_length,
            now=now,
        )
        created = self.repo.create(post)
        logger.info(f"Created blog post {created.id} ({created.slug})")
        return BlogDetail.from_model(created)

    def update_blog(self, post_id: int, payload: BlogUpdate) -> BlogDetail:
        post = self.repo.find_by_id(post_id)
        if post is None:
            raise BlogNotFoundError(post_id)

        changes = payload.changes()
        if not changes:
            return BlogDetail.from_model(post)

        updates = derive_updates(post, changes, now=self.clock())
        if "title" in changes:
            base = generate_slug(changes["title"])
            if base != generate_slug(post.title):
                updates["slug"] = self._unique_slug(base, exclude_id=post.id)

        updated = self.repo.update_fields(post, updates)
        logger.info(f"Updated blog post {post_id}: {sorted(updates)}")
        return BlogDetail.from_model(updated)

    def delete_blog(self, post_id: int) -> None:
        post = self.repo.find_by_id(post_id)
        if post is None:
            raise BlogNotFoundError(post_id)
        self.repo.delete(post)
        logger.info(f"Deleted blog post {post_id}")

    def _record_view(self, post_id: int) -> None:
        try:
            self.repo.increment_view_count(post_id)
        except StorageError as e:
            logger.warning(f"Failed to increment view count for blog {post_id}: {e}")

    def _unique_slug(self, base: str, exclude_id: Optional[int] = None) -> str:
        if not self.repo.slug_exists(base, exclude_id=exclude_id):
            return base

        candidate = f"{base}-{int(self.clock().timestamp())}"
        if not self.repo.slug_exists(candidate, exclude_id=exclude_id):
            return candidate
        return f"{base}-{secrets.token_hex(4)}"


def build_post(
    payload: BlogCreate, *, slug: str, excerpt_max_length: int, now: datetime
) -> BlogPost:
    excerpt = payload.excerpt or generate_excerpt(payload.content, excerpt_max_length)
    return BlogPost(
        title=payload.title,
        slug=slug,
        content=payload.content,
        excerpt=excerpt,
        author=payload.author,
        published=payload.published,
        featured=payload.featured,
        tags=payload.tags,
        meta_title=payload.meta_title,
        meta_description=payload.meta_description,
        reading_time=calculate_reading_time(payload.content),
        view_count=0,
        created_at=now,
        updated_at=now,
        published_at=now if payload.published else None,
    )


def derive_updates(post: BlogPost, changes: dict, *, now: datetime) -> dict:
    """Column updates for a sparse change set, slug excluded."""
    updates = dict(changes)
    if "content" in changes:
        updates["reading_time"] = calculate_reading_time(changes["content"])
    if "published" in changes:
        updates["published_at"] = publish_timestamp(
            changes["published"], post.published_at, now
        )
    updates["updated_at"] = now
    return updates


def publish_timestamp(
    published: bool, current: Optional[datetime], now: datetime
) -> Optional[datetime]:
    if not published:
        return None
    return current or now
