class BlogServiceError(Exception):
    """Base class for errors raised by the blog service layer."""


class BlogNotFoundError(BlogServiceError):
    """Unknown id or slug, or a slug that belongs to an unpublished post."""

    def __init__(self, key=None):
        self.key = key
        super().__init__(f"Blog post not found: {key}" if key is not None else "Blog post not found")


class StorageError(BlogServiceError):
    """A count, fetch or write against the database failed; no partial result is returned."""
