"""
prayer_times/admin.py

Admin for the override row. Saving here also drops today's cached schedule,
just like an API edit.
"""
from django.contrib import admin

from .models import PrayerTimeOverride
from .resolver import get_resolver


@admin.register(PrayerTimeOverride)
class PrayerTimeOverrideAdmin(admin.ModelAdmin):
    list_display = ("subuh", "dzuhur", "ashar", "maghrib", "isya", "jumat", "imsak", "updated_by", "updated_at")
    readonly_fields = ("updated_by", "created_at", "updated_at")

    def has_add_permission(self, request):
        return not PrayerTimeOverride.objects.exists()

    def save_model(self, request, obj, form, change):
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)
        get_resolver().invalidate()
