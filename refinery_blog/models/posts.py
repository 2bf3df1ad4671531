"""
BlogPost, BlogCategory, and Tag models for refinery-blog.
"""
import logging
from datetime import date, datetime, time

from django.conf import settings
from django.db import models, transaction
from django.db.models import Q
from django.urls import reverse
from django.utils import timezone
from django.utils.text import slugify

from ..conf import blog_settings
from .base import ValidatedModel
from .settings import RefinerySetting

logger = logging.getLogger(__name__)


def unique_slug(model, value, instance=None):
    """
    Slugify ``value`` and append a counter until it is unused.

    Values without any usable characters fall back to the model name, and
    the result always fits the model's slug column.
    """
    max_length = min(
        model._meta.get_field("slug").max_length,
        blog_settings.SLUG_MAX_LENGTH,
    )
    base_slug = slugify(value, allow_unicode=True) or model._meta.model_name
    slug = base_slug[:max_length]
    counter = 1
    existing = model.objects.all()
    if instance is not None and instance.pk:
        existing = existing.exclude(pk=instance.pk)
    while existing.filter(slug=slug).exists():
        suffix = f"-{counter}"
        slug = base_slug[:max_length - len(suffix)] + suffix
        counter += 1
    return slug


def month_bounds(value):
    """
    Return (start, end) aware datetimes spanning the month of ``value``.

    ``value`` may be a date, a datetime or a "MM/YYYY" string.
    """
    if isinstance(value, str):
        value = datetime.strptime(value.strip(), "%m/%Y")
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        value = value.date()
    if not isinstance(value, date):
        raise TypeError(f"Cannot build an archive month from {value!r}")

    start = datetime.combine(value.replace(day=1), time.min)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return timezone.make_aware(start), timezone.make_aware(end)


class BlogCategory(ValidatedModel):
    """Category grouping blog posts."""

    presence_fields = ("title",)

    title = models.CharField(max_length=255, unique=True)
    slug = models.SlugField(max_length=255, unique=True, blank=True, allow_unicode=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["title"]
        verbose_name = "Blog category"
        verbose_name_plural = "Blog categories"

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug and self.title:
            self.slug = unique_slug(BlogCategory, self.title, self)
        return super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("refinery_blog:category_detail", kwargs={"slug": self.slug})

    @property
    def post_count(self):
        """Return count of live posts in this category."""
        return self.posts.live().count()


class Tag(models.Model):
    """
    Flat tag for posts.

    Tags are created on demand from a post's tag_list.
    """

    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=100, unique=True, allow_unicode=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(Tag, self.name, self)
        super().save(*args, **kwargs)

    def get_absolute_url(self):
        return reverse("refinery_blog:tag_detail", kwargs={"slug": self.slug})

    @property
    def post_count(self):
        """Return count of live posts with this tag."""
        return self.posts.live().count()


class Categorization(models.Model):
    """Join row between a post and a category, kept in assignment order."""

    blog_post = models.ForeignKey(
        "refinery_blog.BlogPost",
        on_delete=models.CASCADE,
        related_name="categorizations",
    )
    blog_category = models.ForeignKey(
        BlogCategory,
        on_delete=models.CASCADE,
        related_name="categorizations",
    )

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["blog_post", "blog_category"],
                name="refinery_blog_unique_categorization",
            ),
        ]

    def __str__(self):
        return f"{self.blog_post} in {self.blog_category}"


class BlogPostQuerySet(models.QuerySet):
    """Named scopes for blog posts. All of them order newest first."""

    def live(self):
        """Posts that are not drafts and whose publish time has passed."""
        return self.filter(
            draft=False,
            published_at__lte=timezone.now(),
        ).order_by("-published_at")

    def by_archive(self, archive_date):
        """Posts published during the calendar month of ``archive_date``."""
        start, end = month_bounds(archive_date)
        return self.filter(
            published_at__gte=start,
            published_at__lt=end,
        ).order_by("-published_at")

    def all_previous(self):
        """Live posts published before the start of the current month."""
        start, _ = month_bounds(timezone.now())
        return self.live().filter(published_at__lt=start)

    def uncategorized(self):
        """Posts without any category."""
        return self.filter(categories__isnull=True).order_by("-published_at")

    def tagged_with(self, name):
        return self.filter(tags__name=name).distinct().order_by("-published_at")


class BlogPost(ValidatedModel):
    """
    Blog post.

    Supports:
    - Drafts and future publish dates
    - Ordered categories and free-text tags
    - Comments that are removed together with the post
    """

    presence_fields = ("title", "body")

    title = models.CharField(max_length=255, unique=True)
    slug = models.SlugField(max_length=255, unique=True, blank=True, allow_unicode=True)
    body = models.TextField()
    draft = models.BooleanField(default=False)
    published_at = models.DateTimeField(default=timezone.now, db_index=True)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="blog_posts",
    )

    # categories.all() follows BlogCategory ordering (by title); use
    # category_ids or ordered_categories() for the assignment order.
    categories = models.ManyToManyField(
        BlogCategory,
        through=Categorization,
        related_name="posts",
        blank=True,
    )
    tags = models.ManyToManyField(Tag, related_name="posts", blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BlogPostQuerySet.as_manager()

    class Meta:
        ordering = ["-published_at"]
        indexes = [
            models.Index(fields=["draft", "-published_at"]),
        ]

    def __str__(self):
        return self.title

    def save(self, *args, **kwargs):
        if not self.slug and self.title:
            self.slug = unique_slug(BlogPost, self.title, self)

        with transaction.atomic():
            saved = super().save(*args, **kwargs)
            if saved:
                self._apply_pending_categories()
                self._apply_pending_tags()
        return saved

    def get_absolute_url(self):
        return reverse("refinery_blog:post_detail", kwargs={"slug": self.slug})

    @property
    def is_live(self):
        """Check if post is out of draft and its publish time has passed."""
        return not self.draft and self.published_at <= timezone.now()

    def next(self, live_only=False):
        """
        Return the post published right after this one, or None.

        Posts sharing a publish time are ordered by primary key. With
        ``live_only`` drafts and future posts are skipped.
        """
        posts = BlogPost.objects.live() if live_only else BlogPost.objects.all()
        return posts.filter(
            Q(published_at__gt=self.published_at)
            | Q(published_at=self.published_at, pk__gt=self.pk)
        ).order_by("published_at", "pk").first()

    def prev(self, live_only=False):
        """Return the post published right before this one, or None."""
        posts = BlogPost.objects.live() if live_only else BlogPost.objects.all()
        return posts.filter(
            Q(published_at__lt=self.published_at)
            | Q(published_at=self.published_at, pk__lt=self.pk)
        ).order_by("-published_at", "-pk").first()

    @classmethod
    def comments_allowed(cls):
        """Whether the CMS currently accepts comments on blog posts."""
        return bool(
            RefinerySetting.find_or_set(
                "comments_allowed",
                blog_settings.COMMENTS_ALLOWED,
                scoping=blog_settings.SETTINGS_SCOPE,
            )
        )

    # Categories

    @property
    def category_ids(self):
        """Ids of the assigned categories, in assignment order."""
        if hasattr(self, "_pending_category_ids"):
            return list(self._pending_category_ids)
        if not self.pk:
            return []
        return list(
            self.categorizations.values_list("blog_category_id", flat=True)
        )

    @category_ids.setter
    def category_ids(self, ids):
        wanted = []
        for value in ids:
            try:
                category_id = int(str(value).strip())
            except ValueError:
                # blank entries from forms, or ids that are not numbers
                continue
            if category_id not in wanted:
                wanted.append(category_id)

        existing = set(
            BlogCategory.objects.filter(pk__in=wanted).values_list("pk", flat=True)
        )
        self._pending_category_ids = [pk for pk in wanted if pk in existing]
        if self.pk:
            self._apply_pending_categories()

    def ordered_categories(self):
        """Return the categories as a list, in assignment order."""
        categorizations = self.categorizations.select_related("blog_category")
        return [c.blog_category for c in categorizations]

    def _apply_pending_categories(self):
        ids = self.__dict__.pop("_pending_category_ids", None)
        if ids is None:
            return
        self.categorizations.all().delete()
        Categorization.objects.bulk_create(
            Categorization(blog_post=self, blog_category_id=pk) for pk in ids
        )

    # Tags

    @property
    def tag_list(self):
        """Names of the tags on this post."""
        if hasattr(self, "_pending_tag_list"):
            return list(self._pending_tag_list)
        if not self.pk:
            return []
        return list(self.tags.values_list("name", flat=True))

    @tag_list.setter
    def tag_list(self, value):
        if isinstance(value, str):
            value = value.split(blog_settings.TAG_DELIMITER)

        names = []
        for name in value:
            name = name.strip()
            if name and name not in names:
                names.append(name)

        self._pending_tag_list = names
        if self.pk:
            self._apply_pending_tags()

    def _apply_pending_tags(self):
        names = self.__dict__.pop("_pending_tag_list", None)
        if names is None:
            return
        tags = [Tag.objects.get_or_create(name=name)[0] for name in names]
        self.tags.set(tags)
