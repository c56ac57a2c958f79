"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /api/v1/auth/token/            - Obtain a JWT pair
    /api/v1/auth/token/refresh/    - Refresh an access token
    /api/v1/media/                 - Media endpoints
        upload/                    - Upload a batch of pictures and videos
    /api/v1/posts/                 - Post endpoints
        (root)                     - List approved posts / create a post
        {id}/                      - Get / delete a post
        {id}/approve/              - Approve a post (staff)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication (JWT)
    path("auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    # Media
    path("media/", include("media.urls")),
    # Posts
    path("posts/", include("posts.urls")),
]

urlpatterns = [
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Antenna Posts Admin"
admin.site.site_title = "Antenna Posts"
admin.site.index_title = "Moderation"
