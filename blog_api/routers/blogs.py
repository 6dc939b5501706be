import logging
import urllib.parse
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from blog_api import dependencies as deps
from blog_api.errors import BlogNotFoundError
from blog_api.schemas.blog import (
    BlogCreate,
    BlogDetail,
    BlogListResponse,
    BlogUpdate,
    ListBlogsParams,
)
from blog_api.security import require_write_key
from blog_api.services.blogs_service import BlogsService
from blog_api.utils import parse_int

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blogs", tags=["blogs"])

NOT_FOUND_DETAIL = "Blog post not found"


@router.get("", response_model=BlogListResponse)
def list_blogs(
    response: Response,
    page: Optional[str] = Query(None, description="Page number, 1-based"),
    limit: Optional[str] = Query(None, description="Items per page (1-100)"),
    search: Optional[str] = Query(None, description="Title/content/excerpt/tags search"),
    featured: Optional[str] = Query(None, description="Filter by featured flag"),
    published: Optional[str] = Query(None, description="Filter by published flag"),
    service: BlogsService = Depends(deps.get_blogs_service),
):
    """Paginated, searchable list of blog summaries."""
    params = ListBlogsParams.from_query(
        page=page, limit=limit, search=search, featured=featured, published=published
    )
    try:
        result = service.list_blogs(params)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing blogs: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch blogs")

    response.headers["X-Total-Count"] = str(result.total)
    response.headers["X-Page"] = str(result.page)
    response.headers["X-Per-Page"] = str(result.limit)
    return result


@router.get("/{slug}", response_model=BlogDetail)
def get_blog(
    slug: str,
    response: Response,
    service: BlogsService = Depends(deps.get_blogs_service),
):
    """Get a single published post by slug."""
    try:
        blog = service.get_blog_by_slug(slug)
    except BlogNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving blog {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch blog post")

    response.headers["X-Meta-Title"] = _header_value(blog.meta_title)
    response.headers["X-Meta-Description"] = _header_value(blog.meta_description)
    response.headers["X-Reading-Time"] = str(blog.reading_time)
    return blog


@router.post(
    "",
    response_model=BlogDetail,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_write_key)],
)
def create_blog(
    payload: BlogCreate,
    service: BlogsService = Depends(deps.get_blogs_service),
):
    try:
        return service.create_blog(payload)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error creating blog: {e}")
        raise HTTPException(status_code=500, detail="Failed to create blog post")


@router.put(
    "/{post_id}",
    response_model=BlogDetail,
    dependencies=[Depends(require_write_key)],
)
def update_blog(
    post_id: str,
    payload: BlogUpdate,
    service: BlogsService = Depends(deps.get_blogs_service),
):
    blog_id = _parse_blog_id(post_id)
    try:
        return service.update_blog(blog_id, payload)
    except BlogNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error updating blog {blog_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update blog post")


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_write_key)],
)
def delete_blog(
    post_id: str,
    service: BlogsService = Depends(deps.get_blogs_service),
):
    blog_id = _parse_blog_id(post_id)
    try:
        service.delete_blog(blog_id)
    except BlogNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error deleting blog {blog_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete blog post")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _parse_blog_id(raw: str) -> int:
    blog_id = parse_int(raw)
    if blog_id is None or blog_id < 1:
        raise HTTPException(status_code=400, detail="Invalid blog ID")
    return blog_id


def _header_value(value: str) -> str:
    value = " ".join(value.split())
    try:
        value.encode("latin-1")
        return value
    except UnicodeEncodeError:
        return urllib.parse.quote(value, safe=" ,.:;!?'-")
