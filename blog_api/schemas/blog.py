from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from blog_api.utils import join_tags, parse_bool, parse_int, sanitize_string, split_tags

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

_TEXT_FIELDS = ("title", "content", "excerpt", "author", "meta_title", "meta_description")


def _clean_tags(value):
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return join_tags(sanitize_string(str(tag)) for tag in value)
    if isinstance(value, str):
        return sanitize_string(value)
    return value


class BlogCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=10)
    excerpt: str = Field("", max_length=500)
    author: str = Field(..., min_length=1, max_length=100)
    published: bool = False
    featured: bool = False
    tags: str = Field("", max_length=500)
    meta_title: str = Field("", max_length=60)
    meta_description: str = Field("", max_length=160)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _sanitize_text(cls, value):
        if value is None:
            return ""
        if not isinstance(value, str):
            return value
        return sanitize_string(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _sanitize_tags(cls, value: Union[str, List[str], None]):
        return _clean_tags(value) or ""


class BlogUpdate(BaseModel):
    """Sparse update: only keys present in the request body are applied."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=10)
    excerpt: Optional[str] = Field(None, max_length=500)
    author: Optional[str] = Field(None, min_length=1, max_length=100)
    published: Optional[bool] = None
    featured: Optional[bool] = None
    tags: Optional[str] = Field(None, max_length=500)
    meta_title: Optional[str] = Field(None, max_length=60)
    meta_description: Optional[str] = Field(None, max_length=160)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _sanitize_text(cls, value):
        if value is None or not isinstance(value, str):
            return value
        return sanitize_string(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _sanitize_tags(cls, value: Union[str, List[str], None]):
        return _clean_tags(value)

    def changes(self) -> dict:
        # explicit nulls are treated like absent keys; empty strings are kept
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class BlogSummary(BaseModel):
    id: int
    title: str
    slug: str
    excerpt: str = ""
    author: str
    published: bool
    featured: bool
    tags: List[str] = Field(default_factory=list)
    reading_time: int = 0
    view_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    published_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, post) -> "BlogSummary":
        return cls(**_base_fields(post))


class BlogDetail(BlogSummary):
    content: str
    meta_title: str = ""
    meta_description: str = ""

    @classmethod
    def from_model(cls, post) -> "BlogDetail":
        return cls(
            **_base_fields(post),
            content=post.content,
            meta_title=post.meta_title or "",
            meta_description=post.meta_description or "",
        )


def _base_fields(post) -> dict:
    return {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "excerpt": post.excerpt or "",
        "author": post.author,
        "published": bool(post.published),
        "featured": bool(post.featured),
        "tags": split_tags(post.tags),
        "reading_time": post.reading_time or 0,
        "view_count": post.view_count or 0,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
        "published_at": post.published_at,
    }


class BlogListResponse(BaseModel):
    items: List[BlogSummary]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


@dataclass(frozen=True)
class BlogFilter:
    """Predicate shared by the count and the fetch of one listing."""

    published: bool = True
    featured: Optional[bool] = None
    search: Optional[str] = None


@dataclass(frozen=True)
class ListBlogsParams:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    filters: BlogFilter = BlogFilter()

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        page=None,
        limit=None,
        search: Optional[str] = None,
        featured=None,
        published=None,
    ) -> "ListBlogsParams":
        parsed_page = parse_int(page)
        if parsed_page is None or parsed_page < 1:
            parsed_page = DEFAULT_PAGE

        parsed_limit = parse_int(limit)
        if parsed_limit is None or parsed_limit < 1 or parsed_limit > MAX_LIMIT:
            parsed_limit = DEFAULT_LIMIT

        parsed_published = parse_bool(published)
        term = (search or "").strip()

        return cls(
            page=parsed_page,
            limit=parsed_limit,
            filters=BlogFilter(
                published=True if parsed_published is None else parsed_published,
                featured=parse_bool(featured),
                search=term.lower() or None,
            ),
        )
