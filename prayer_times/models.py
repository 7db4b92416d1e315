"""
prayer_times/models.py

PrayerTimeOverride: the single row of manually-set prayer times.

Notes & design choices
----------------------
- Every time column is nullable; an admin may set any subset of them.
- Only `jumat` overrides the external schedule while a provider is reachable.
  The other columns are used when every provider is down.
- The table is expected to hold at most one row; `current()` reads the
  oldest one, and the repository upserts into it.
"""
from django.conf import settings
from django.db import models

from .constants import MANDATORY_FIELDS, OVERRIDE_FIELDS
from .timeutils import format_hhmm


class PrayerTimeOverride(models.Model):
    subuh = models.TimeField(null=True, blank=True)
    dzuhur = models.TimeField(null=True, blank=True)
    ashar = models.TimeField(null=True, blank=True)
    maghrib = models.TimeField(null=True, blank=True)
    isya = models.TimeField(null=True, blank=True)
    jumat = models.TimeField(
        null=True, blank=True,
        help_text="Leave empty to derive the Friday prayer from dzuhur (30 minutes earlier).",
    )
    imsak = models.TimeField(null=True, blank=True)

    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name="prayer_time_updates",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Prayer time override"
        verbose_name_plural = "Prayer time overrides"

    def __str__(self) -> str:
        return f"Prayer times (jumat={format_hhmm(self.jumat) or 'auto'})"

    @classmethod
    def current(cls):
        return cls.objects.order_by("pk").first()

    def is_complete(self) -> bool:
        return all(getattr(self, name) is not None for name in MANDATORY_FIELDS)

    def as_schedule(self) -> dict:
        return {name: format_hhmm(getattr(self, name)) for name in OVERRIDE_FIELDS}
