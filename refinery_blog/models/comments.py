"""
BlogComment model for refinery-blog.
"""
import logging

from django.db import models

from ..conf import blog_settings
from .base import ValidatedModel
from .settings import RefinerySetting

logger = logging.getLogger(__name__)


class BlogCommentQuerySet(models.QuerySet):
    def approved(self):
        return self.filter(state=BlogComment.APPROVED)

    def rejected(self):
        return self.filter(state=BlogComment.REJECTED)

    def unmoderated(self):
        return self.filter(state="")


class BlogComment(ValidatedModel):
    """
    Comment left by a visitor on a blog post.

    New comments are approved straight away unless comment moderation is
    enabled, in which case they wait unmoderated until approved or rejected.
    """

    presence_fields = ("name", "body")

    APPROVED = "approved"
    REJECTED = "rejected"
    STATE_CHOICES = [
        (APPROVED, "Approved"),
        (REJECTED, "Rejected"),
    ]

    blog_post = models.ForeignKey(
        "refinery_blog.BlogPost",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    name = models.CharField(max_length=255)
    email = models.EmailField()
    body = models.TextField(max_length=blog_settings.COMMENT_MAX_LENGTH)
    state = models.CharField(
        max_length=20,
        choices=STATE_CHOICES,
        blank=True,
        db_index=True,
        help_text="Blank while the comment awaits moderation",
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BlogCommentQuerySet.as_manager()

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["blog_post", "state", "created_at"]),
        ]

    def __str__(self):
        return f"Comment by {self.name} on {self.blog_post}"

    def save(self, *args, **kwargs):
        if self._state.adding and not self.state and not self.moderation_enabled():
            self.state = self.APPROVED
        return super().save(*args, **kwargs)

    @classmethod
    def moderation_enabled(cls):
        """Whether new comments wait for approval before being shown."""
        return bool(
            RefinerySetting.find_or_set(
                "comment_moderation",
                blog_settings.COMMENT_MODERATION,
                scoping=blog_settings.SETTINGS_SCOPE,
            )
        )

    @property
    def preview(self):
        """Return truncated body for admin display."""
        if len(self.body) > 100:
            return self.body[:100] + "..."
        return self.body

    @property
    def is_approved(self):
        return self.state == self.APPROVED

    @property
    def is_rejected(self):
        return self.state == self.REJECTED

    @property
    def is_unmoderated(self):
        return not self.state

    def approve(self):
        """Approve the comment for display."""
        self.state = self.APPROVED
        logger.info("Approved comment %s on post %s", self.pk, self.blog_post_id)
        return self.save(update_fields=["state", "updated_at"])

    def reject(self):
        """Reject the comment."""
        self.state = self.REJECTED
        logger.info("Rejected comment %s on post %s", self.pk, self.blog_post_id)
        return self.save(update_fields=["state", "updated_at"])
