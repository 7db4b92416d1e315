"""
Provider tests: HTTP is patched at `requests.get`, no network access.
"""
from datetime import date
from unittest.mock import MagicMock, patch

import requests
from django.test import SimpleTestCase

from prayer_times.providers import AladhanProvider, MyQuranProvider

DAY = date(2026, 3, 6)

MYQURAN_URL = "https://api.myquran.com/v2/sholat/jadwal/{city}/{year}/{month:02d}/{day:02d}"
ALADHAN_URL = "https://api.aladhan.com/v1/timings/{date}"


def fake_response(status_code=200, payload=None, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response


MYQURAN_OK = {
    "status": True,
    "data": {
        "id": "1301",
        "lokasi": "KOTA JAKARTA",
        "jadwal": {
            "tanggal": "Jumat, 06/03/2026",
            "imsak": "04:27",
            "subuh": "04:37",
            "terbit": "05:51",
            "dhuha": "06:18",
            "dzuhur": "12:03",
            "ashar": "15:08",
            "maghrib": "18:10",
            "isya": "19:19",
            "date": "2026-03-06",
        },
    },
}

ALADHAN_OK = {
    "code": 200,
    "status": "OK",
    "data": {
        "timings": {
            "Fajr": "04:19 (WIB)",
            "Sunrise": "05:33 (WIB)",
            "Dhuhr": "11:45 (WIB)",
            "Asr": "15:06 (WIB)",
            "Sunset": "17:57 (WIB)",
            "Maghrib": "17:57 (WIB)",
            "Isha": "19:08 (WIB)",
            "Imsak": "04:09 (WIB)",
        }
    },
}


class MyQuranProviderTests(SimpleTestCase):
    def setUp(self):
        self.provider = MyQuranProvider(MYQURAN_URL, "1301", timeout=12)

    @patch("prayer_times.providers.requests.get")
    def test_success_maps_fields(self, get):
        get.return_value = fake_response(payload=MYQURAN_OK)
        result = self.provider.fetch(DAY)

        self.assertTrue(result.ok)
        self.assertEqual(result.provider, "myquran")
        self.assertEqual(result.schedule["subuh"], "04:37")
        self.assertEqual(result.schedule["dzuhur"], "12:03")
        self.assertEqual(result.schedule["sunrise"], "05:51")
        self.assertNotIn("jumat", result.schedule)
        get.assert_called_once_with(
            "https://api.myquran.com/v2/sholat/jadwal/1301/2026/03/06", params=None, timeout=12
        )

    @patch("prayer_times.providers.requests.get")
    def test_missing_fields_use_location_defaults(self, get):
        payload = {"status": True, "data": {"jadwal": {"subuh": "04:37", "dzuhur": "12:03"}}}
        get.return_value = fake_response(payload=payload)
        result = self.provider.fetch(DAY)

        self.assertTrue(result.ok)
        self.assertEqual(result.schedule["ashar"], "15:15")
        self.assertEqual(result.schedule["isya"], "19:15")
        self.assertIsNone(result.schedule["sunrise"])

    @patch("prayer_times.providers.requests.get")
    def test_status_flag_false_is_failure(self, get):
        get.return_value = fake_response(payload={"status": False, "message": "Not found"})
        result = self.provider.fetch(DAY)
        self.assertFalse(result.ok)
        self.assertIn("schedule missing", result.error)

    @patch("prayer_times.providers.requests.get")
    def test_non_200_is_failure(self, get):
        get.return_value = fake_response(status_code=503)
        result = self.provider.fetch(DAY)
        self.assertFalse(result.ok)
        self.assertEqual(result.error, "HTTP 503")

    @patch("prayer_times.providers.requests.get")
    def test_invalid_json_is_failure(self, get):
        get.return_value = fake_response(json_error=True)
        self.assertFalse(self.provider.fetch(DAY).ok)

    @patch("prayer_times.providers.requests.get")
    def test_timeout_is_failure(self, get):
        get.side_effect = requests.Timeout("read timed out")
        result = self.provider.fetch(DAY)
        self.assertFalse(result.ok)
        self.assertIn("timed out", result.error)

    @patch("prayer_times.providers.requests.get")
    def test_connection_error_is_failure(self, get):
        get.side_effect = requests.ConnectionError("dns failure")
        result = self.provider.fetch(DAY)
        self.assertFalse(result.ok)
        self.assertIn("request failed", result.error)


class AladhanProviderTests(SimpleTestCase):
    def setUp(self):
        self.provider = AladhanProvider(
            ALADHAN_URL, latitude=-6.2088, longitude=106.8456, method=20, timezone="Asia/Jakarta"
        )

    @patch("prayer_times.providers.requests.get")
    def test_annotations_are_stripped(self, get):
        get.return_value = fake_response(payload=ALADHAN_OK)
        result = self.provider.fetch(DAY)

        self.assertTrue(result.ok)
        self.assertEqual(result.provider, "aladhan")
        self.assertEqual(result.schedule["subuh"], "04:19")
        self.assertEqual(result.schedule["dzuhur"], "11:45")
        self.assertEqual(result.schedule["imsak"], "04:09")
        self.assertEqual(result.schedule["sunrise"], "05:33")

        url = get.call_args.args[0]
        params = get.call_args.kwargs["params"]
        self.assertEqual(url, "https://api.aladhan.com/v1/timings/06-03-2026")
        self.assertEqual(params["method"], 20)
        self.assertEqual(params["timezonestring"], "Asia/Jakarta")

    @patch("prayer_times.providers.requests.get")
    def test_missing_timings_is_failure(self, get):
        get.return_value = fake_response(payload={"code": 200, "data": {}})
        self.assertFalse(self.provider.fetch(DAY).ok)

    @patch("prayer_times.providers.requests.get")
    def test_error_code_in_body_is_failure(self, get):
        get.return_value = fake_response(payload={"code": 400, "data": "Invalid date"})
        self.assertFalse(self.provider.fetch(DAY).ok)
