"""
prayer_times/views.py

Endpoints:
- GET        /api/prayer-times/              today's schedule (public)
- PUT/PATCH  /api/prayer-times/              update the override row (auth required)
- POST       /api/prayer-times/refresh/      drop today's cache and re-fetch (auth required)
- POST       /api/prayer-times/reset-jumat/  revert Jumat to auto-calculation (auth required)

All responses carry the resolver's composite document (see resolver.py).
"""
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from users.authentication import OptionalJWTAuthentication

from .resolver import get_resolver
from .serializers import PrayerOverrideSerializer, PrayerScheduleSerializer


_resp_ok = openapi.Response("OK", PrayerScheduleSerializer())


class PrayerTimesView(APIView):
    """Read is public (home page display); writes are for logged-in admins."""

    authentication_classes = [OptionalJWTAuthentication]

    def get_permissions(self):
        if self.request.method == "GET":
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    @swagger_auto_schema(
        tags=["Prayer Times"],
        operation_description=(
            "Today's prayer times.\n\n"
            "`source` tells where the schedule came from: `myquran` (primary API), "
            "`aladhan` (secondary API), `database` (stored times) or `default`.\n"
            "`jumat_source` is `manual` when an admin set the Friday time, else `auto` "
            "(dzuhur minus 30 minutes)."
        ),
        security=[],
        responses={200: _resp_ok},
    )
    def get(self, request):
        return Response(get_resolver().get_todays_schedule())

    @swagger_auto_schema(
        tags=["Prayer Times"],
        operation_description=(
            "Store manual prayer times (any subset of fields, HH:MM or null).\n\n"
            "While an external API is reachable only `jumat` overrides the fetched "
            "schedule; the other fields are served when every API is down.\n\n"
            "Responses:\n"
            "- 200: updated schedule\n"
            "- 400: invalid time (field named in the body)\n"
            "- 401: Unauthorized"
        ),
        request_body=PrayerOverrideSerializer,
        responses={200: _resp_ok, 400: "Bad Request", 401: "Unauthorized"},
    )
    def put(self, request):
        ser = PrayerOverrideSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        schedule = get_resolver().update_override(ser.validated_data, request.user)
        return Response({**schedule, "message": "Jadwal sholat berhasil diperbarui"}, status=status.HTTP_200_OK)

    @swagger_auto_schema(
        tags=["Prayer Times"],
        operation_description="Same as PUT; provided for clients that prefer PATCH semantics.",
        request_body=PrayerOverrideSerializer,
        responses={200: _resp_ok, 400: "Bad Request", 401: "Unauthorized"},
    )
    def patch(self, request):
        return self.put(request)


class PrayerTimesRefreshView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        tags=["Prayer Times"],
        operation_description="Discard today's cached schedule and fetch it again from the external APIs.",
        responses={200: _resp_ok, 401: "Unauthorized"},
    )
    def post(self, request):
        schedule = get_resolver().force_refresh()
        return Response({**schedule, "message": "Jadwal sholat berhasil diperbarui dari API"})


class ResetJumatView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        tags=["Prayer Times"],
        operation_description="Clear the manual Jumat time so it is derived from dzuhur again.",
        responses={200: _resp_ok, 401: "Unauthorized"},
    )
    def post(self, request):
        schedule = get_resolver().reset_jumat_override(request.user)
        return Response({**schedule, "message": "Waktu Jumat dikembalikan ke perhitungan otomatis"})
