"""
Configuration settings for refinery-blog.

Override these in your Django settings.py:

    REFINERY_BLOG = {
        'POSTS_PER_PAGE': 10,
        'COMMENTS_ALLOWED': True,
        'COMMENT_MODERATION': True,
        ...
    }

COMMENTS_ALLOWED and COMMENT_MODERATION are only the initial values; once a
RefinerySetting row exists for them the stored value wins.
"""
from django.conf import settings

DEFAULTS = {
    # Posts
    "POSTS_PER_PAGE": 10,
    "SLUG_MAX_LENGTH": 100,
    "TAG_DELIMITER": ",",

    # RefinerySetting scoping used by the blog
    "SETTINGS_SCOPE": "blog",
    "SETTINGS_CACHE_TIMEOUT": 300,

    # Comments
    "COMMENTS_ALLOWED": True,
    "COMMENT_MODERATION": True,
    "COMMENT_MAX_LENGTH": 5000,
}


class BlogSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from refinery_blog.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid refinery_blog setting: {name}")

        user_settings = getattr(settings, "REFINERY_BLOG", {})
        return user_settings.get(name, DEFAULTS[name])


blog_settings = BlogSettings()
