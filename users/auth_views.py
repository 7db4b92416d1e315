"""
users/auth_views.py — JWT auth endpoints for the mosque dashboard


Purpose
===============================================================================
Provide a focused module for authentication endpoints:
- Login (JWT pair, email or username accepted)
- Refresh (via SimpleJWT)
- Logout (blacklist a submitted refresh token to invalidate future use)
- Me (current account, read-only)


Why a dedicated file?
- Keeps auth concerns separate from the announcement and prayer-time apps.
- Groups all identity endpoints under a single Swagger tag ("Auth").


Endpoints (wired in root urls.py)
- POST /api/auth/login/    → {"access", "refresh", "username", "email", "user": {...}}
- POST /api/auth/refresh/  → (SimpleJWT's refresh view, tagged)
- POST /api/auth/logout/   → blacklist provided refresh token (owner-checked)
- GET  /api/auth/me/       → {id, username, email, is_staff}


Security Notes
- Accounts are created by staff (admin site or `manage.py seed_demo`); there
  is no public signup.
- Logout requires SimpleJWT blacklist tables; ensure
  'rest_framework_simplejwt.token_blacklist' is in INSTALLED_APPS and migrated.
"""
import logging

from rest_framework import status, permissions, serializers, generics
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .serializers import EmailOrUsernameTokenObtainPairSerializer, MeSerializer

# SimpleJWT
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView as _TokenRefreshView,
)
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError

# Swagger / OpenAPI
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Common response schemas for docs
# ---------------------------------------------------------------------------
TOKENS_PAIR_SCHEMA = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    required=["access", "refresh"],
    properties={
        "access": openapi.Schema(type=openapi.TYPE_STRING, description="Access JWT"),
        "refresh": openapi.Schema(type=openapi.TYPE_STRING, description="Refresh JWT"),
        "username": openapi.Schema(type=openapi.TYPE_STRING, description="Username for UI display"),
        "email": openapi.Schema(type=openapi.TYPE_STRING, format="email", description="User email"),
        "user": openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                "id": openapi.Schema(type=openapi.TYPE_INTEGER),
                "username": openapi.Schema(type=openapi.TYPE_STRING),
                "email": openapi.Schema(type=openapi.TYPE_STRING, format="email"),
                "is_staff": openapi.Schema(type=openapi.TYPE_BOOLEAN),
            },
        ),
    },
)
ACCESS_ONLY_SCHEMA = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "access": openapi.Schema(type=openapi.TYPE_STRING, description="New access JWT"),
        # May also include 'refresh' if ROTATE_REFRESH_TOKENS=True.
    },
)


# ---------------------------------------------------------------------------
# Login (email or username) → JWT pair
# ---------------------------------------------------------------------------
class LoginDocSerializer(serializers.Serializer):
    email_or_username = serializers.CharField(help_text="Email address (e.g. admin@masjid.com) OR username.")
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class EmailTokenObtainPairView(TokenObtainPairView):
    """POST /api/auth/login/ — Returns refresh & access JWTs (email_or_username + password)."""
    serializer_class = EmailOrUsernameTokenObtainPairSerializer

    @swagger_auto_schema(
        tags=["Auth"],
        operation_description="Log in with **email_or_username** and **password**.",
        request_body=LoginDocSerializer,
        security=[],
        responses={
            200: openapi.Response("JWT pair", TOKENS_PAIR_SCHEMA),
            400: "Bad Request",
            401: "Invalid credentials",
        },
    )
    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        if response.status_code == status.HTTP_200_OK:
            logger.info("Login succeeded for %s", response.data.get("username"))
        return response


# ---------------------------------------------------------------------------
# Refresh access token
# ---------------------------------------------------------------------------
class TokenRefreshTaggedView(_TokenRefreshView):
    """POST /api/auth/refresh/ — Exchange refresh for a new access token."""
    @swagger_auto_schema(
        tags=["Auth"],
        operation_description="Refresh access token using a refresh JWT.",
        security=[],
        responses={
            200: openapi.Response("New access token", ACCESS_ONLY_SCHEMA),
            400: "Bad Request",
            401: "Invalid or blacklisted refresh token",
        },
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


# ---------------------------------------------------------------------------
# Logout (blacklist refresh token)
# ---------------------------------------------------------------------------
logout_request_schema = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    required=["refresh"],
    properties={"refresh": openapi.Schema(type=openapi.TYPE_STRING, description="Refresh token to blacklist")},
)


@swagger_auto_schema(
    method="post",
    tags=["Auth"],
    operation_description=(
        "Blacklist a submitted refresh token to invalidate future use.\n\n"
        "**Ownership check**: the submitted token must belong to the authenticated caller."
    ),
    request_body=logout_request_schema,
    responses={
        205: "Reset Content",
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
    },
)
@api_view(["POST"])
@permission_classes([permissions.IsAuthenticated])
def logout(request):
    """
    POST /api/auth/logout/
    Body: { "refresh": "<refresh_token>" }

    - Validates the provided refresh token and ensures it belongs to the caller.
    - Blacklists the refresh token (SimpleJWT blacklist app).
    - Returns 205 Reset Content.
    """
    refresh_token = request.data.get("refresh")
    if not refresh_token:
        return Response({"detail": "refresh token is required"}, status=status.HTTP_400_BAD_REQUEST)

    try:
        token = RefreshToken(refresh_token)

        # user_id claim is serialized as a string by newer SimpleJWT releases
        if str(token.get("user_id")) != str(request.user.id):
            return Response({"detail": "token does not belong to you"}, status=status.HTTP_403_FORBIDDEN)

        token.blacklist()
    except TokenError:
        return Response({"detail": "Invalid refresh token."}, status=status.HTTP_400_BAD_REQUEST)

    logger.info("User %s logged out", request.user)
    return Response({"detail": "Logged out."}, status=status.HTTP_205_RESET_CONTENT)


# ---------------------------------------------------------------------------
# Me (current account)
# ---------------------------------------------------------------------------
class AuthMeView(generics.RetrieveAPIView):
    """GET /api/auth/me/ — the authenticated account (id, username, email, is_staff)."""
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = MeSerializer

    def get_object(self):
        return self.request.user

    @swagger_auto_schema(
        tags=["Auth"],
        operation_description="Get the logged-in account.",
        responses={200: MeSerializer, 401: "Unauthorized"},
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)
