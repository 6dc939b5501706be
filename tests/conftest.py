import os

# must be set before blog_api.settings is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DATABASE", "False")

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from blog_api.db.postgres.base import Base  # noqa: E402
from blog_api.errors import BlogNotFoundError, StorageError  # noqa: E402
from blog_api.models.blog_post import BlogPost  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_post(**overrides) -> BlogPost:
    """Detached BlogPost with every column filled in."""
    index = overrides.pop("index", 0)
    fields = {
        "title": f"Post {index}",
        "slug": f"post-{index}",
        "content": f"Body of post number {index} with enough words.",
        "excerpt": f"Excerpt {index}",
        "author": "Ada",
        "published": True,
        "featured": False,
        "tags": "",
        "meta_title": "",
        "meta_description": "",
        "reading_time": 1,
        "view_count": 0,
        "created_at": BASE_TIME + timedelta(minutes=index),
        "updated_at": BASE_TIME + timedelta(minutes=index),
        "published_at": None,
    }
    fields.update(overrides)
    return BlogPost(**fields)


class FakeBlogsRepo:
    """
    In-memory stand-in for SqlBlogPostsRepo used in service tests.
    """

    def __init__(self, posts=None):
        self.posts = {}
        self.next_id = 1
        self.fail_count = False
        self.fail_fetch = False
        self.fail_increment = False
        self.increments = []
        for post in posts or []:
            self.create(post)

    @staticmethod
    def _matches(post, flt) -> bool:
        if bool(post.published) != flt.published:
            return False
        if flt.featured is not None and bool(post.featured) != flt.featured:
            return False
        if flt.search:
            haystacks = (post.title, post.content, post.excerpt, post.tags)
            return any(flt.search.lower() in (h or "").lower() for h in haystacks)
        return True

    def count(self, flt):
        if self.fail_count:
            raise StorageError("Failed to count blogs")
        return sum(1 for p in self.posts.values() if self._matches(p, flt))

    def find_page(self, flt, offset, limit):
        if self.fail_fetch:
            raise StorageError("Failed to fetch blogs")
        matching = [p for p in self.posts.values() if self._matches(p, flt)]
        matching.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        return matching[offset : offset + limit]

    def find_by_id(self, post_id):
        return self.posts.get(post_id)

    def find_published_by_slug(self, slug):
        for post in self.posts.values():
            if post.slug == slug and post.published:
                return post
        return None

    def slug_exists(self, slug, exclude_id=None):
        return any(
            p.slug == slug and p.id != exclude_id for p in self.posts.values()
        )

    def create(self, post):
        post.id = self.next_id
        self.next_id += 1
        self.posts[post.id] = post
        return post

    def update_fields(self, post, updates):
        for key, value in updates.items():
            setattr(post, key, value)
        return post

    def delete(self, post):
        self.posts.pop(post.id, None)

    def increment_view_count(self, post_id):
        if self.fail_increment:
            raise StorageError("Failed to increment view count")
        self.increments.append(post_id)
        self.posts[post_id].view_count = (self.posts[post_id].view_count or 0) + 1


class FakeBlogsService:
    """
    Minimal blogs service stand-in for router tests.
    """

    def __init__(self, list_return=None, detail_return=None):
        self._list_return = list_return
        self._detail_return = detail_return
        self.calls = []

    def list_blogs(self, params):
        self.calls.append(("list", params))
        return self._list_return

    def get_blog_by_slug(self, slug):
        self.calls.append(("get", slug))
        if self._detail_return is None:
            raise BlogNotFoundError(slug)
        return self._detail_return

    def create_blog(self, payload):
        self.calls.append(("create", payload))
        return self._detail_return

    def update_blog(self, post_id, payload):
        self.calls.append(("update", post_id, payload))
        if self._detail_return is None:
            raise BlogNotFoundError(post_id)
        return self._detail_return

    def delete_blog(self, post_id):
        self.calls.append(("delete", post_id))
        if self._detail_return is None:
            raise BlogNotFoundError(post_id)


class FixedClock:
    def __init__(self, now=BASE_TIME):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    with session_factory() as session:
        yield session
