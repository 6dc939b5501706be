from fastapi import Depends

from blog_api.db.postgres.base import get_db
from blog_api.repos.blog_posts_repo import SqlBlogPostsRepo
from blog_api.services.blogs_service import BlogsService
from blog_api.settings import settings


def get_blog_posts_repo(db=Depends(get_db)):
    return SqlBlogPostsRepo(db)


def get_blogs_service(repo=Depends(get_blog_posts_repo)):
    return BlogsService(repo=repo, excerpt_max_length=settings.EXCERPT_MAX_LENGTH)
