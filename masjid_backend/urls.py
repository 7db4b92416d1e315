"""
urls.py — Root URL configuration for the Masjid backend

Purpose
===============================================================================
- Wire Django admin, the app routers and auth endpoints.
- Serve media files in development.
- Provide JWT auth endpoints (login, refresh, logout, me).
- Provide interactive API docs:
    * /api/docs/   → Swagger UI
    * /api/schema/ → OpenAPI JSON (machine-readable)

Notes
- Each app owns its routes (announcements.urls, prayer_times.urls); they are
  mounted under /api/ here.
- Auth views are centralized in users.auth_views.
- Swagger UI helps manual testing and is a handy reference for the FE.
"""

from django.contrib import admin
from django.urls import path, include
from rest_framework import permissions
from django.conf import settings
from django.conf.urls.static import static
from django.shortcuts import redirect

# Auth endpoints (centralized)
from users.auth_views import (
    EmailTokenObtainPairView,
    TokenRefreshTaggedView,
    logout as jwt_logout,
    AuthMeView,
)

# ----------------------------------------------------------------------------- #
# API Docs (Swagger/OpenAPI via drf-yasg)                                       #
# ----------------------------------------------------------------------------- #
# /api/docs/   → Swagger UI
# /api/schema/ → OpenAPI JSON

from drf_yasg.views import get_schema_view
from drf_yasg import openapi

schema_view = get_schema_view(
    openapi.Info(
        title="Masjid Announcement API",
        default_version="v1",
        description=(
            "Interactive API documentation for the mosque announcement board. "
            "Reads are public; writes use JWT (Bearer) tokens. Click 'Authorize' and paste: Bearer <ACCESS_TOKEN>. "
            "Key endpoints: "
            "/api/announcements/ (feed + CRUD), "
            "/api/announcements/categories/, "
            "/api/prayer-times/ (today's schedule, admin override), "
            "/api/auth/login/"
        ),
        contact=openapi.Contact(email="admin@masjid.com"),
    ),
    public=True,
    permission_classes=[permissions.AllowAny],
)

# ----------------------------------------------------------------------------- #
# URL Patterns                                                                  #
# ----------------------------------------------------------------------------- #
urlpatterns = [
    # tiny root view that redirects to the FE (configurable per env)
    path("", lambda r: redirect(settings.FRONTEND_URL), name="root-redirect"),

    path("admin/", admin.site.urls),

    # Auth (JWT)
    path("api/auth/login/",    EmailTokenObtainPairView.as_view(),  name="auth_login"),
    path("api/auth/refresh/",  TokenRefreshTaggedView.as_view(),    name="auth_refresh_create"),
    path("api/auth/logout/",   jwt_logout,                          name="logout"),
    path("api/auth/me/",       AuthMeView.as_view(),                name="auth-me"),

    # API docs
    path("api/docs/",   schema_view.with_ui("swagger", cache_timeout=0), name="api-docs-swagger"),
    path("api/schema/", schema_view.without_ui(cache_timeout=0),         name="openapi-schema"),

    # Apps
    path("api/", include("announcements.urls", namespace="announcements")),
    path("api/", include("prayer_times.urls", namespace="prayer_times")),
]

# Dev-only media serving (uploads in /media/)
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
