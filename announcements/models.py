"""
announcements/models.py

Data model for:
- Announcement: a mosque notice (kajian schedule, zakat info, events, …) with
  an optional image or video attachment.

Notes & design choices
----------------------
- "category" is constrained to the keys in categories.py.
- At most one attachment is live: media_type says which one ("none", "image",
  "video"). The serializer keeps image/video and media_type consistent and
  deletes replaced files from storage.
- Files go through the default storage (local MEDIA_ROOT, or S3 through
  django-storages when USE_S3_MEDIA=True).
- publish_at is optional; a future value hides the row from anonymous readers
  until that moment.
"""
from django.core.validators import FileExtensionValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from .categories import CATEGORY_CHOICES, DEFAULT_CATEGORY

IMAGE_EXTENSIONS = ["jpeg", "jpg", "png", "gif", "webp"]
VIDEO_EXTENSIONS = ["mp4", "webm", "ogg", "mov"]


class AnnouncementQuerySet(models.QuerySet):
    def visible(self, now=None):
        """Active and already published (publish_at empty or in the past)."""
        now = now or timezone.now()
        return self.filter(is_active=True).filter(Q(publish_at__isnull=True) | Q(publish_at__lte=now))


class Announcement(models.Model):
    class MediaType(models.TextChoices):
        NONE = "none", "None"
        IMAGE = "image", "Image"
        VIDEO = "video", "Video"

    title = models.CharField(max_length=255, help_text="Headline shown on the feed.")
    content = models.TextField(help_text="Body text; basic HTML from the dashboard editor is allowed.")
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES, default=DEFAULT_CATEGORY, db_index=True)

    image = models.FileField(
        upload_to="announcements/", null=True, blank=True,
        validators=[FileExtensionValidator(allowed_extensions=IMAGE_EXTENSIONS)],
    )
    video = models.FileField(
        upload_to="announcements/videos/", null=True, blank=True,
        validators=[FileExtensionValidator(allowed_extensions=VIDEO_EXTENSIONS)],
    )
    media_type = models.CharField(max_length=8, choices=MediaType.choices, default=MediaType.NONE)

    publish_at = models.DateTimeField(null=True, blank=True, db_index=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = AnnouncementQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"[{self.category}] {self.title}"

    def delete_media(self, image=True, video=True):
        """Remove stored attachment files (without saving the row)."""
        if image and self.image:
            self.image.delete(save=False)
            self.image = None
        if video and self.video:
            self.video.delete(save=False)
            self.video = None
