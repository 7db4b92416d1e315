"""
prayer_times/serializers.py

Request/response shapes for the prayer-times endpoints. The response is the
resolver's composite document; serializers here exist to validate admin input
and to describe the payloads in /api/docs.
"""
from rest_framework import serializers

from .exceptions import TimeParseFailure
from .timeutils import parse_strict_hhmm


class HHMMField(serializers.TimeField):
    """TimeField that only accepts the exact 'HH:MM' form ("9:5" and "09:05:00" are rejected)."""

    default_error_messages = {"invalid": "Time must use the HH:MM format."}

    def to_internal_value(self, value):
        try:
            return parse_strict_hhmm(value)
        except TimeParseFailure:
            self.fail("invalid")


def _time_field(label):
    return HHMMField(
        required=False,
        allow_null=True,
        format="%H:%M",
        help_text=f"{label} (HH:MM, 24-hour). Send null to clear.",
    )


class PrayerOverrideSerializer(serializers.Serializer):
    """Any subset of the fields; omitted fields are left unchanged."""

    subuh = _time_field("Subuh")
    dzuhur = _time_field("Dzuhur")
    ashar = _time_field("Ashar")
    maghrib = _time_field("Maghrib")
    isya = _time_field("Isya")
    jumat = _time_field("Jumat (null = derive from dzuhur)")
    imsak = _time_field("Imsak")

    def validate(self, attrs):
        unknown = set(self.initial_data) - set(self.fields) if isinstance(self.initial_data, dict) else set()
        if unknown:
            raise serializers.ValidationError({name: ["Unknown prayer time field."] for name in sorted(unknown)})
        return attrs


class ScheduleDataSerializer(serializers.Serializer):
    subuh = serializers.CharField()
    dzuhur = serializers.CharField()
    ashar = serializers.CharField()
    maghrib = serializers.CharField()
    isya = serializers.CharField()
    jumat = serializers.CharField()
    imsak = serializers.CharField(allow_null=True)
    sunrise = serializers.CharField(allow_null=True)


class CoordinatesSerializer(serializers.Serializer):
    latitude = serializers.FloatField()
    longitude = serializers.FloatField()


class PrayerScheduleSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    data = ScheduleDataSerializer()
    source = serializers.ChoiceField(choices=["myquran", "aladhan", "database", "default"])
    jumat_source = serializers.ChoiceField(choices=["manual", "auto"])
    location = serializers.CharField()
    coordinates = CoordinatesSerializer()
    date = serializers.DateField()
    updated_at = serializers.DateTimeField(allow_null=True)
