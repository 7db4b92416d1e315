"""
announcements/admin.py

Minimal admin to allow quick manual curation.
"""
from django.contrib import admin
from .models import Announcement


@admin.register(Announcement)
class AnnouncementAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "media_type", "is_active", "publish_at", "created_at")
    list_filter = ("category", "is_active", "media_type", "publish_at")
    search_fields = ("title", "content")
    ordering = ("-created_at",)
    readonly_fields = ("media_type", "created_at", "updated_at")

    def save_model(self, request, obj, form, change):
        if obj.video:
            obj.media_type = obj.MediaType.VIDEO
        elif obj.image:
            obj.media_type = obj.MediaType.IMAGE
        else:
            obj.media_type = obj.MediaType.NONE
        super().save_model(request, obj, form, change)
