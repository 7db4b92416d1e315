"""
announcements/views.py

Endpoints:
- /api/announcements/              (GET list: public; POST create: auth)
- /api/announcements/{id}/         (GET retrieve: public; PUT/PATCH/DELETE: auth)
- /api/announcements/categories/   (GET category key → label map; public)

Visibility:
- Anonymous callers only see active rows whose publish_at is empty or past.
- Authenticated callers (admin dashboard) see everything.

Filtering & sorting (list):
- search=free text (title, content; case-insensitive contains)
- category=<key>
- is_active=true|false
- sort_by=id|title|created_at|updated_at|publish_at|is_active|category (default created_at)
- sort_order=asc|desc (default desc)
- page=<n>, per_page=<1..100> (default 15)

Response envelope:
    {"success": true, "data": [...], "pagination": {...}, "categories": {...}}
"""
import logging

from django.core.paginator import Page
from django.db.models import Q
from django.http import Http404
from django_filters import rest_framework as dj_filters
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import filters, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from users.authentication import OptionalJWTAuthentication

from .categories import CATEGORIES
from .models import Announcement
from .serializers import AnnouncementSerializer

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Pengumuman tidak ditemukan"


# ----------------------------------------------------------------------------- #
# Filters                                                                       #
# ----------------------------------------------------------------------------- #
class AnnouncementFilter(dj_filters.FilterSet):
    search = dj_filters.CharFilter(method="filter_search")
    category = dj_filters.CharFilter(field_name="category", lookup_expr="exact")
    is_active = dj_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = Announcement
        fields = ["search", "category", "is_active"]

    def filter_search(self, queryset, name, value):
        value = (value or "").strip()
        if not value:
            return queryset
        return queryset.filter(Q(title__icontains=value) | Q(content__icontains=value))


class SortByOrderingFilter(filters.OrderingFilter):
    """
    OrderingFilter driven by `sort_by` + `sort_order` instead of `ordering`.
    Unknown values fall back to created_at / desc rather than erroring.
    """
    default_field = "created_at"

    def get_ordering(self, request, queryset, view):
        allowed = getattr(view, "ordering_fields", [])
        sort_by = request.query_params.get("sort_by") or self.default_field
        if sort_by not in allowed:
            sort_by = self.default_field
        sort_order = (request.query_params.get("sort_order") or "desc").lower()
        prefix = "" if sort_order == "asc" else "-"

        ordering = [f"{prefix}{sort_by}"]
        if sort_by != "id":
            ordering.append(f"{prefix}id")  # stable pages when values tie
        return ordering


# ----------------------------------------------------------------------------- #
# Pagination                                                                    #
# ----------------------------------------------------------------------------- #
class AnnouncementPagination(PageNumberPagination):
    """
    Page-number pagination that never 404s: a non-numeric or < 1 page means
    page 1, and a page past the end comes back empty with the real last_page.
    """
    page_size = 15
    page_size_query_param = "per_page"
    max_page_size = 100

    def get_page_size(self, request):
        raw = request.query_params.get(self.page_size_query_param)
        try:
            size = int(raw)
        except (TypeError, ValueError):
            return self.page_size
        return min(max(size, 1), self.max_page_size)

    def get_page_number(self, request, paginator=None):
        try:
            number = int(request.query_params.get(self.page_query_param, 1))
        except (TypeError, ValueError):
            return 1
        return max(number, 1)

    def paginate_queryset(self, queryset, request, view=None):
        paginator = self.django_paginator_class(queryset, self.get_page_size(request))
        number = self.get_page_number(request, paginator)
        if number > paginator.num_pages:
            self.page = Page([], number, paginator)
        else:
            self.page = paginator.page(number)
        self.request = request
        return list(self.page)

    def get_paginated_response(self, data):
        page = self.page
        has_rows = len(page) > 0
        return Response({
            "success": True,
            "data": data,
            "pagination": {
                "current_page": page.number,
                "per_page": page.paginator.per_page,
                "total": page.paginator.count,
                "last_page": page.paginator.num_pages,
                "from": page.start_index() if has_rows else None,
                "to": page.end_index() if has_rows else None,
            },
            "categories": CATEGORIES,
        })


# ----------------------------------------------------------------------------- #
# Announcements                                                                 #
# ----------------------------------------------------------------------------- #
class AnnouncementViewSet(viewsets.ModelViewSet):
    """
    Public feed + admin CRUD for announcements.

    Reads are public (with the visibility rule above); writes require a JWT.
    """
    queryset = Announcement.objects.all()
    serializer_class = AnnouncementSerializer
    authentication_classes = [OptionalJWTAuthentication]
    parser_classes = [JSONParser, FormParser, MultiPartParser]
    pagination_class = AnnouncementPagination

    filter_backends = [dj_filters.DjangoFilterBackend, SortByOrderingFilter]
    filterset_class = AnnouncementFilter
    ordering_fields = ["id", "title", "created_at", "updated_at", "publish_at", "is_active", "category"]
    ordering = ["-created_at"]

    public_actions = ("list", "retrieve", "categories")

    def get_permissions(self):
        if self.action in self.public_actions:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Announcement.objects.none()
        qs = super().get_queryset()
        if not self.request.user.is_authenticated:
            qs = qs.visible()
        return qs

    def handle_exception(self, exc):
        if isinstance(exc, Http404):
            return Response({"success": False, "message": NOT_FOUND_MESSAGE}, status=status.HTTP_404_NOT_FOUND)
        return super().handle_exception(exc)

    # ---- Swagger docs --------------------------------------------------------
    _params_list = [
        openapi.Parameter("search", openapi.IN_QUERY, type=openapi.TYPE_STRING,
                          description="Free-text search across title and content"),
        openapi.Parameter("category", openapi.IN_QUERY, type=openapi.TYPE_STRING,
                          description="Category key, e.g. kajian", enum=list(CATEGORIES)),
        openapi.Parameter("is_active", openapi.IN_QUERY, type=openapi.TYPE_BOOLEAN,
                          description="Only active (true) or inactive (false) rows"),
        openapi.Parameter("sort_by", openapi.IN_QUERY, type=openapi.TYPE_STRING,
                          description="id, title, created_at, updated_at, publish_at, is_active, category"),
        openapi.Parameter("sort_order", openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=["asc", "desc"]),
        openapi.Parameter("per_page", openapi.IN_QUERY, type=openapi.TYPE_INTEGER,
                          description="Page size, 1–100 (default 15)"),
    ]
    _resp_item_ok = openapi.Response("OK", AnnouncementSerializer())

    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description=(
            "List announcements (public).\n\n"
            "Anonymous callers only see active, already-published rows; with a "
            "Bearer token every row is listed."
        ),
        manual_parameters=_params_list,
        security=[],
        responses={200: "OK"},
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description="Retrieve a single announcement by ID (public, same visibility rule).",
        security=[],
        responses={200: _resp_item_ok, 404: "Not Found"},
    )
    def retrieve(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance)
        return Response({"success": True, "data": serializer.data, "categories": CATEGORIES})

    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description=(
            "Create an announcement (auth required). Send multipart/form-data to "
            "attach an `image` (jpeg/png/gif/webp, ≤5 MB) or a `video` "
            "(mp4/webm/ogg/mov, ≤50 MB); a video wins if both are sent."
        ),
        responses={201: _resp_item_ok, 400: "Bad Request", 401: "Unauthorized"},
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.perform_create(serializer)
        logger.info("Announcement %s created by %s", serializer.instance.pk, request.user)
        return Response(
            {"success": True, "message": "Pengumuman berhasil dibuat", "data": serializer.data},
            status=status.HTTP_201_CREATED,
        )

    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description=(
            "Update an announcement (auth required). Fields are optional; "
            "`remove_media=true` deletes the attachment, a new `image`/`video` replaces it."
        ),
        responses={200: _resp_item_ok, 400: "Bad Request", 401: "Unauthorized", 404: "Not Found"},
    )
    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return Response({"success": True, "message": "Pengumuman berhasil diperbarui", "data": serializer.data})

    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description="Partially update an announcement (auth required).",
        responses={200: _resp_item_ok, 400: "Bad Request", 401: "Unauthorized", 404: "Not Found"},
    )
    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description="Delete an announcement and its stored media (auth required).",
        responses={200: "Deleted", 401: "Unauthorized", 404: "Not Found"},
    )
    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        instance.delete_media()
        instance.delete()
        logger.info("Announcement %s deleted by %s", kwargs.get("pk"), request.user)
        return Response({"success": True, "message": "Pengumuman berhasil dihapus"}, status=status.HTTP_200_OK)

    @swagger_auto_schema(
        tags=["Announcements"],
        operation_description="Category key → label map used by the feed filters.",
        security=[],
        responses={200: "OK"},
    )
    @action(detail=False, methods=["get"])
    def categories(self, request):
        return Response({"success": True, "data": CATEGORIES})
