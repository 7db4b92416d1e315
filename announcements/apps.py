"""
announcements/apps.py

AppConfig for the Announcements app.

Why this app exists
-------------------
The mosque's public screen and website show a feed of notices (kajian,
zakat, events, Friday info). Takmir/admin accounts curate them from the
dashboard through the same API, with an optional image or video each.
"""
from django.apps import AppConfig


class AnnouncementsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "announcements"
    verbose_name = "Announcements"
