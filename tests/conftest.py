"""
Shared fixtures for the refinery-blog test suite.
"""
import itertools

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache

from refinery_blog.models import BlogCategory, BlogComment, BlogPost

User = get_user_model()


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached outside the database, so reset them per test."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username="testuser",
        email="test@example.com",
        password="testpass123",
    )


@pytest.fixture
def make_post(db):
    """Build and save posts with unique titles and default tags."""
    counter = itertools.count(1)

    def _make_post(**kwargs):
        number = next(counter)
        kwargs.setdefault("title", f"Blog post {number}")
        kwargs.setdefault("body", "Lorem ipsum dolor sit amet.")
        tag_list = kwargs.pop("tag_list", "chicago, shopping, fun times")
        post = BlogPost(**kwargs)
        post.tag_list = tag_list
        post.save()
        return post

    return _make_post


@pytest.fixture
def make_category(db):
    counter = itertools.count(1)

    def _make_category(**kwargs):
        kwargs.setdefault("title", f"Category {next(counter)}")
        return BlogCategory.objects.create(**kwargs)

    return _make_category


@pytest.fixture
def make_comment(db):
    def _make_comment(blog_post, **kwargs):
        kwargs.setdefault("name", "Joe Commenter")
        kwargs.setdefault("email", "joe@example.com")
        kwargs.setdefault("body", "Which one is the best for picking up new shoes?")
        return BlogComment.objects.create(blog_post=blog_post, **kwargs)

    return _make_comment


@pytest.fixture
def blog_post(make_post):
    return make_post()
