"""
prayer_times/apps.py

AppConfig for the Prayer Times app: the daily schedule shown on the public
screen, resolved from external APIs with a stored fallback.
"""
from django.apps import AppConfig


class PrayerTimesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "prayer_times"
    verbose_name = "Prayer Times"
