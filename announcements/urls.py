"""
announcements/urls.py

Router for the announcements ViewSet (includes the /categories/ action).
Include this under the global /api/ prefix.
"""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AnnouncementViewSet


app_name = "announcements"

router = DefaultRouter()
router.register(r"announcements", AnnouncementViewSet, basename="announcement")

urlpatterns = [
    path("", include(router.urls)),
]
