"""
prayer_times/urls.py

Include this under the global /api/ prefix.
"""
from django.urls import path

from .views import PrayerTimesRefreshView, PrayerTimesView, ResetJumatView


app_name = "prayer_times"

urlpatterns = [
    path("prayer-times/", PrayerTimesView.as_view(), name="prayer-times"),
    path("prayer-times/refresh/", PrayerTimesRefreshView.as_view(), name="prayer-times-refresh"),
    path("prayer-times/reset-jumat/", ResetJumatView.as_view(), name="prayer-times-reset-jumat"),
]
