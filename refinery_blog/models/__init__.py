"""
Models for refinery-blog.

All models are importable from refinery_blog.models:

    from refinery_blog.models import BlogPost, BlogCategory, BlogComment, RefinerySetting
"""
from .settings import RefinerySetting
from .posts import BlogCategory, Tag, Categorization, BlogPost
from .comments import BlogComment

__all__ = [
    # Settings
    "RefinerySetting",
    # Posts
    "BlogCategory",
    "Tag",
    "Categorization",
    "BlogPost",
    # Comments
    "BlogComment",
]
