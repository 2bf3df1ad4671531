"""
URL configuration for refinery-blog.

Include in your project urls.py:

    path('blog/', include('refinery_blog.urls')),
"""
from django.urls import path

from . import views

app_name = "refinery_blog"

urlpatterns = [
    # Posts
    path("", views.BlogPostListView.as_view(), name="post_list"),
    path("posts/<str:slug>/", views.BlogPostDetailView.as_view(), name="post_detail"),

    # Archive
    path(
        "archive/<int:year>/<int:month>/",
        views.ArchivePostListView.as_view(),
        name="archive",
    ),

    # Categories and tags
    path("categories/<str:slug>/", views.CategoryPostListView.as_view(), name="category_detail"),
    path("tagged/<str:slug>/", views.TagPostListView.as_view(), name="tag_detail"),

    # Interactions
    path("posts/<str:slug>/comments/", views.CommentCreateView.as_view(), name="comment_create"),
]
