"""
Signal receivers for refinery-blog.
"""
import logging

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save, pre_delete
from django.dispatch import receiver

from .models import BlogPost, RefinerySetting

logger = logging.getLogger(__name__)


@receiver(pre_delete, sender=BlogPost)
def log_post_destroy(sender, instance, **kwargs):
    """Log a post removal together with the comments that go with it."""
    logger.info(
        "Destroying blog post %s (%r) and %d comment(s)",
        instance.pk,
        instance.title,
        instance.comments.count(),
    )


@receiver(post_save, sender=RefinerySetting)
@receiver(post_delete, sender=RefinerySetting)
def expire_setting_cache(sender, instance, **kwargs):
    """
    Drop the cached value of a setting once its row changes.

    Connected to post_delete, so queryset deletes (including the admin's
    bulk delete action) expire every removed setting too.
    """
    cache.delete(RefinerySetting.cache_key(instance.name, instance.scoping))
