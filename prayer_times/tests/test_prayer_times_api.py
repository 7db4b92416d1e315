"""
Integration tests for the Prayer Times API.

External APIs are replaced by patching `requests.get`; the Django cache and
the database are real (test settings).
"""
from datetime import time
from io import StringIO
from unittest.mock import patch

import requests
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.core.management import call_command
from rest_framework import status
from rest_framework.test import APITestCase

from prayer_times.models import PrayerTimeOverride

from .test_providers import ALADHAN_OK, MYQURAN_OK, fake_response


def myquran_only(url, params=None, timeout=None):
    if "myquran" in url:
        return fake_response(payload=MYQURAN_OK)
    raise AssertionError("secondary provider must not be called")


def myquran_down(url, params=None, timeout=None):
    if "myquran" in url:
        return fake_response(status_code=502)
    return fake_response(payload=ALADHAN_OK)


def all_down(url, params=None, timeout=None):
    raise requests.ConnectionError("network unreachable")


class PrayerTimesApiTests(APITestCase):
    def setUp(self):
        cache.clear()
        User = get_user_model()
        self.admin = User.objects.create_user(
            username="admin", email="admin@masjid.com", password="password123"
        )

    def tearDown(self):
        cache.clear()

    # -----------------------
    # Public read
    # -----------------------
    @patch("prayer_times.providers.requests.get", side_effect=myquran_only)
    def test_get_is_public_and_uses_primary(self, get):
        r = self.client.get("/api/prayer-times/")
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
        self.assertTrue(r.data["success"])
        self.assertEqual(r.data["source"], "myquran")
        self.assertEqual(r.data["data"]["dzuhur"], "12:03")
        self.assertEqual(r.data["data"]["jumat"], "11:33")
        self.assertEqual(r.data["jumat_source"], "auto")
        self.assertIn("coordinates", r.data)

    @patch("prayer_times.providers.requests.get", side_effect=myquran_only)
    def test_second_get_served_from_cache(self, get):
        self.client.get("/api/prayer-times/")
        self.client.get("/api/prayer-times/")
        self.assertEqual(get.call_count, 1)

    @patch("prayer_times.providers.requests.get", side_effect=myquran_down)
    def test_falls_back_to_secondary(self, get):
        r = self.client.get("/api/prayer-times/")
        self.assertEqual(r.data["source"], "aladhan")
        self.assertEqual(r.data["data"]["subuh"], "04:19")
        self.assertEqual(r.data["data"]["jumat"], "11:15")

    @patch("prayer_times.providers.requests.get", side_effect=all_down)
    def test_all_down_uses_database_then_default(self, get):
        r = self.client.get("/api/prayer-times/")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data["source"], "default")

        PrayerTimeOverride.objects.create(
            subuh=time(4, 35), dzuhur=time(12, 5), ashar=time(15, 20),
            maghrib=time(18, 5), isya=time(19, 20), jumat=time(11, 40),
        )
        r = self.client.get("/api/prayer-times/")
        self.assertEqual(r.data["source"], "database")
        self.assertEqual(r.data["data"]["jumat"], "11:40")
        self.assertEqual(r.data["jumat_source"], "manual")

    # -----------------------
    # Admin writes
    # -----------------------
    def test_writes_require_auth(self):
        self.assertEqual(self.client.put("/api/prayer-times/", {"jumat": "11:45"}, format="json").status_code,
                         status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(self.client.post("/api/prayer-times/refresh/").status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(self.client.post("/api/prayer-times/reset-jumat/").status_code, status.HTTP_401_UNAUTHORIZED)

    @patch("prayer_times.providers.requests.get", side_effect=myquran_only)
    def test_update_override_upserts_and_invalidates(self, get):
        self.client.force_authenticate(self.admin)
        self.client.get("/api/prayer-times/")

        r = self.client.put("/api/prayer-times/", {"jumat": "11:45"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
        self.assertEqual(r.data["data"]["jumat"], "11:45")
        self.assertEqual(r.data["jumat_source"], "manual")
        self.assertIn("message", r.data)
        self.assertEqual(get.call_count, 2)

        r = self.client.patch("/api/prayer-times/", {"subuh": "04:40"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)

        self.assertEqual(PrayerTimeOverride.objects.count(), 1)
        row = PrayerTimeOverride.objects.get()
        self.assertEqual(row.jumat, time(11, 45))
        self.assertEqual(row.subuh, time(4, 40))
        self.assertEqual(row.updated_by, self.admin)

    def test_update_override_rejects_bad_time(self):
        self.client.force_authenticate(self.admin)
        r = self.client.put("/api/prayer-times/", {"jumat": "11.45"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("jumat", r.data)
        self.assertFalse(PrayerTimeOverride.objects.exists())

    def test_update_override_rejects_non_hhmm_strings(self):
        self.client.force_authenticate(self.admin)
        for loose in ("9:5", "9:05", "12:00:00", " 11:45", ""):
            r = self.client.put("/api/prayer-times/", {"jumat": loose}, format="json")
            self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST, loose)
            self.assertIn("jumat", r.data)
        self.assertFalse(PrayerTimeOverride.objects.exists())

    def test_update_override_rejects_unknown_field(self):
        self.client.force_authenticate(self.admin)
        r = self.client.put("/api/prayer-times/", {"dhuha": "06:00"}, format="json")
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("dhuha", r.data)

    @patch("prayer_times.providers.requests.get", side_effect=myquran_only)
    def test_reset_jumat(self, get):
        self.client.force_authenticate(self.admin)
        self.client.put("/api/prayer-times/", {"jumat": "11:45", "isya": "19:30"}, format="json")

        r = self.client.post("/api/prayer-times/reset-jumat/")
        self.assertEqual(r.status_code, status.HTTP_200_OK, r.data)
        self.assertEqual(r.data["jumat_source"], "auto")
        self.assertEqual(r.data["data"]["jumat"], "11:33")

        row = PrayerTimeOverride.objects.get()
        self.assertIsNone(row.jumat)
        self.assertEqual(row.isya, time(19, 30))

    @patch("prayer_times.providers.requests.get", side_effect=myquran_only)
    def test_refresh_refetches(self, get):
        self.client.force_authenticate(self.admin)
        self.client.get("/api/prayer-times/")
        r = self.client.post("/api/prayer-times/refresh/")
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data["source"], "myquran")
        self.assertEqual(get.call_count, 2)

    # -----------------------
    # Management command
    # -----------------------
    @patch("prayer_times.providers.requests.get", side_effect=myquran_only)
    def test_refresh_command_prints_schedule(self, get):
        out = StringIO()
        call_command("refresh_prayer_times", stdout=out)
        output = out.getvalue()
        self.assertIn("source=myquran", output)
        self.assertIn("12:03", output)
