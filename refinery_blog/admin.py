"""
Django admin configuration for refinery_blog.
"""
from django.contrib import admin

from .models import (
    BlogCategory,
    BlogComment,
    BlogPost,
    Categorization,
    RefinerySetting,
)


class CategorizationInline(admin.TabularInline):
    """Inline for assigning categories to posts."""

    model = Categorization
    extra = 1


class BlogCommentInline(admin.TabularInline):
    model = BlogComment
    extra = 0
    fields = ["name", "email", "body", "state"]


@admin.register(BlogCategory)
class BlogCategoryAdmin(admin.ModelAdmin):
    list_display = ["title", "slug", "post_count", "created_at"]
    search_fields = ["title", "slug"]
    prepopulated_fields = {"slug": ("title",)}


@admin.register(BlogPost)
class BlogPostAdmin(admin.ModelAdmin):
    list_display = ["title", "author", "draft", "is_live", "published_at"]
    list_filter = ["draft", "published_at"]
    search_fields = ["title", "body", "author__username"]
    raw_id_fields = ["author"]
    filter_horizontal = ["tags"]
    date_hierarchy = "published_at"
    inlines = [CategorizationInline, BlogCommentInline]
    readonly_fields = ["created_at", "updated_at"]
    prepopulated_fields = {"slug": ("title",)}

    fieldsets = (
        (None, {
            "fields": ("title", "slug", "body", "author")
        }),
        ("Publishing", {
            "fields": ("draft", "published_at")
        }),
        ("Taxonomy", {
            "fields": ("tags",)
        }),
        ("Metadata", {
            "fields": ("created_at", "updated_at"),
            "classes": ("collapse",),
        }),
    )

    actions = ["publish_posts", "draft_posts"]

    @admin.display(boolean=True, description="Live")
    def is_live(self, obj):
        return obj.is_live

    @admin.action(description="Publish selected posts")
    def publish_posts(self, request, queryset):
        count = queryset.update(draft=False)
        self.message_user(request, f"{count} posts published.")

    @admin.action(description="Move selected posts back to draft")
    def draft_posts(self, request, queryset):
        count = queryset.update(draft=True)
        self.message_user(request, f"{count} posts moved to draft.")


@admin.register(BlogComment)
class BlogCommentAdmin(admin.ModelAdmin):
    list_display = ["preview", "name", "email", "blog_post", "state", "created_at"]
    list_filter = ["state", "created_at"]
    search_fields = ["body", "name", "email", "blog_post__title"]
    raw_id_fields = ["blog_post"]
    readonly_fields = ["created_at", "updated_at"]
    actions = ["approve_comments", "reject_comments"]

    @admin.action(description="Approve selected comments")
    def approve_comments(self, request, queryset):
        count = queryset.update(state=BlogComment.APPROVED)
        self.message_user(request, f"{count} comments approved.")

    @admin.action(description="Reject selected comments")
    def reject_comments(self, request, queryset):
        count = queryset.update(state=BlogComment.REJECTED)
        self.message_user(request, f"{count} comments rejected.")


@admin.register(RefinerySetting)
class RefinerySettingAdmin(admin.ModelAdmin):
    list_display = ["name", "scoping", "value", "restricted", "updated_at"]
    list_filter = ["scoping", "restricted"]
    search_fields = ["name", "scoping"]
    readonly_fields = ["created_at", "updated_at"]

    def has_change_permission(self, request, obj=None):
        if obj is not None and obj.restricted and not request.user.is_superuser:
            return False
        return super().has_change_permission(request, obj)
