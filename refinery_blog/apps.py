"""Django app configuration for refinery_blog."""
from django.apps import AppConfig


class RefineryBlogConfig(AppConfig):
    """Configuration for the blog app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "refinery_blog"
    verbose_name = "Blog"

    def ready(self):
        """Connect signal receivers."""
        from . import signals  # noqa: F401
