"""
announcements/serializers.py

DRF serializers that define the public JSON shapes returned to the frontend.
Keep these thin and explicit; they are our API contract.

Media handling
- `image` / `video` are write-only uploads; responses carry `image_path`,
  `video_path` (storage names) and `image_url`, `video_url` (absolute URLs).
- A video wins over an image sent in the same request.
- Uploading one kind of media replaces (and deletes) any previous attachment.
- `remove_media=true` deletes both attachments.
"""
from django.conf import settings
from django.core.validators import FileExtensionValidator
from rest_framework import serializers

from .categories import CATEGORIES
from .models import IMAGE_EXTENSIONS, VIDEO_EXTENSIONS, Announcement


def _max_size(limit_setting, label):
    def check(f):
        limit = getattr(settings, limit_setting)
        if f and getattr(f, "size", 0) > limit:
            raise serializers.ValidationError(f"{label} too large (max {limit // (1024 * 1024)} MB).")
    return check


class AnnouncementSerializer(serializers.ModelSerializer):
    image = serializers.FileField(
        write_only=True, required=False, allow_null=True,
        validators=[
            FileExtensionValidator(allowed_extensions=IMAGE_EXTENSIONS),
            _max_size("ANNOUNCEMENT_IMAGE_MAX_BYTES", "Image"),
        ],
    )
    video = serializers.FileField(
        write_only=True, required=False, allow_null=True,
        validators=[
            FileExtensionValidator(allowed_extensions=VIDEO_EXTENSIONS),
            _max_size("ANNOUNCEMENT_VIDEO_MAX_BYTES", "Video"),
        ],
    )
    remove_media = serializers.BooleanField(write_only=True, required=False, default=False)
    # Explicit default: an omitted checkbox in multipart input must not deactivate the row.
    is_active = serializers.BooleanField(required=False, default=True)

    category_label = serializers.SerializerMethodField()
    image_path = serializers.SerializerMethodField()
    video_path = serializers.SerializerMethodField()
    image_url = serializers.SerializerMethodField()
    video_url = serializers.SerializerMethodField()

    class Meta:
        model = Announcement
        fields = [
            "id",
            "title",
            "content",
            "category",
            "category_label",
            "image",
            "video",
            "remove_media",
            "image_path",
            "video_path",
            "image_url",
            "video_url",
            "media_type",
            "publish_at",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "media_type", "created_at", "updated_at"]

    # ---- read helpers --------------------------------------------------------
    def get_category_label(self, obj):
        return CATEGORIES.get(obj.category, obj.category)

    def get_image_path(self, obj):
        return obj.image.name if obj.image else None

    def get_video_path(self, obj):
        return obj.video.name if obj.video else None

    def _absolute(self, f):
        if not f:
            return None
        url = f.url
        request = self.context.get("request")
        return request.build_absolute_uri(url) if request is not None else url

    def get_image_url(self, obj):
        return self._absolute(obj.image)

    def get_video_url(self, obj):
        return self._absolute(obj.video)

    # ---- write path ----------------------------------------------------------
    def validate_title(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Title is required.")
        return value

    def create(self, validated_data):
        validated_data.pop("remove_media", None)
        image = validated_data.pop("image", None)
        video = validated_data.pop("video", None)

        if video:
            validated_data.update(video=video, media_type=Announcement.MediaType.VIDEO)
        elif image:
            validated_data.update(image=image, media_type=Announcement.MediaType.IMAGE)
        else:
            validated_data["media_type"] = Announcement.MediaType.NONE
        return super().create(validated_data)

    def update(self, instance, validated_data):
        remove_media = validated_data.pop("remove_media", False)
        image = validated_data.pop("image", None)
        video = validated_data.pop("video", None)

        if remove_media:
            instance.delete_media()
            instance.media_type = Announcement.MediaType.NONE

        if video:
            instance.delete_media()
            instance.video = video
            instance.media_type = Announcement.MediaType.VIDEO
        elif image:
            instance.delete_media()
            instance.image = image
            instance.media_type = Announcement.MediaType.IMAGE

        return super().update(instance, validated_data)
