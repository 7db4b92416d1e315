"""
users/serializers.py — Auth serializers for the mosque dashboard


Purpose
===============================================================================
- EmailOrUsernameTokenObtainPairSerializer: SimpleJWT login that accepts a
  single `email_or_username` field instead of a fixed username field.
- MeSerializer: the read-only identity shape returned by /api/auth/me/ and
  embedded in the login response under "user".


Login rules
- A value containing "@" is looked up as an email (case-insensitive); anything
  else is looked up as a username (case-insensitive).
- Unknown accounts and wrong passwords produce the same 401 so the endpoint
  does not reveal which accounts exist.
- Inactive accounts are rejected by SimpleJWT's default user rule.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer


User = get_user_model()


class MeSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "email", "is_staff"]
        read_only_fields = fields


class EmailOrUsernameTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Body: {"email_or_username": "...", "password": "..."}
    Returns: {"access", "refresh", "username", "email", "user": {...}}
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Swap the stock username field for the combined identifier.
        self.fields.pop(self.username_field, None)
        self.fields["email_or_username"] = serializers.CharField(write_only=True)

    def validate(self, attrs):
        identifier = (attrs.pop("email_or_username", "") or "").strip()
        lookup = {"email__iexact": identifier} if "@" in identifier else {"username__iexact": identifier}
        user = User.objects.filter(**lookup).order_by("pk").first()

        # SimpleJWT authenticates against USERNAME_FIELD; feed it the real username.
        # Unknown identifiers fall through with the raw value and fail the same way.
        attrs[self.username_field] = user.get_username() if user else identifier
        data = super().validate(attrs)

        data["username"] = self.user.get_username()
        data["email"] = self.user.email
        data["user"] = MeSerializer(self.user).data
        return data
