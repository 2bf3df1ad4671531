"""
Views for refinery-blog.
"""
import logging

from django.http import Http404, JsonResponse
from django.shortcuts import get_object_or_404, redirect
from django.views import View
from django.views.generic import DetailView, ListView

from .conf import blog_settings
from .models import BlogCategory, BlogComment, BlogPost, Tag

logger = logging.getLogger(__name__)


class BlogPostListView(ListView):
    """List live posts with pagination."""

    model = BlogPost
    template_name = "refinery_blog/post_list.html"
    context_object_name = "posts"

    def get_paginate_by(self, queryset):
        return blog_settings.POSTS_PER_PAGE

    def get_queryset(self):
        return (
            BlogPost.objects.live()
            .select_related("author")
            .prefetch_related("categories", "tags")
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["categories"] = BlogCategory.objects.all()
        context["archive_dates"] = BlogPost.objects.live().dates(
            "published_at", "month", order="DESC"
        )
        return context


class BlogPostDetailView(DetailView):
    """Display a single live post with its approved comments."""

    model = BlogPost
    template_name = "refinery_blog/post_detail.html"
    context_object_name = "post"

    def get_object(self, queryset=None):
        post = get_object_or_404(BlogPost, slug=self.kwargs["slug"])
        if not post.is_live:
            raise Http404("Post not found")
        return post

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["comments"] = self.object.comments.approved()
        context["comments_allowed"] = BlogPost.comments_allowed()
        context["next_post"] = self.object.next(live_only=True)
        context["prev_post"] = self.object.prev(live_only=True)
        return context


class ArchivePostListView(BlogPostListView):
    """List posts published in a given month."""

    template_name = "refinery_blog/archive.html"

    def get_queryset(self):
        try:
            self.archive_date = f"{int(self.kwargs['month']):02d}/{self.kwargs['year']}"
            return BlogPost.objects.live().by_archive(self.archive_date)
        except ValueError:
            raise Http404("Invalid archive date")

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["archive_date"] = self.archive_date
        return context


class CategoryPostListView(BlogPostListView):
    """List posts in a specific category."""

    template_name = "refinery_blog/category_detail.html"

    def get_queryset(self):
        self.category = get_object_or_404(BlogCategory, slug=self.kwargs["slug"])
        return super().get_queryset().filter(categories=self.category)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["category"] = self.category
        return context


class TagPostListView(BlogPostListView):
    """List posts with a specific tag."""

    template_name = "refinery_blog/tag_detail.html"

    def get_queryset(self):
        self.tag = get_object_or_404(Tag, slug=self.kwargs["slug"])
        return super().get_queryset().filter(tags=self.tag)

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["tag"] = self.tag
        return context


class CommentCreateView(View):
    """Add a comment to a live post."""

    def post(self, request, slug):
        post = get_object_or_404(BlogPost, slug=slug)
        if not post.is_live:
            raise Http404("Post not found")

        if not BlogPost.comments_allowed():
            return JsonResponse({"error": "Comments disabled"}, status=403)

        comment = BlogComment(
            blog_post=post,
            name=request.POST.get("name", "").strip(),
            email=request.POST.get("email", "").strip(),
            body=request.POST.get("body", "").strip(),
        )
        if not comment.save():
            return JsonResponse({"errors": comment.errors}, status=400)

        logger.info(
            "New %s comment %s on post %s",
            "approved" if comment.is_approved else "unmoderated",
            comment.pk,
            post.pk,
        )

        if request.headers.get("Accept") == "application/json":
            return JsonResponse({
                "id": comment.pk,
                "name": comment.name,
                "body": comment.body,
                "created_at": comment.created_at.isoformat(),
                "is_approved": comment.is_approved,
            })

        return redirect(post.get_absolute_url())
