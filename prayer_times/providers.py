"""
prayer_times/providers.py

External prayer-time sources.

Each provider exposes `name` and `fetch(day) -> FetchResult`. A provider never
raises for network or payload problems; it returns `FetchResult.failure(...)`
with a reason and lets the resolver decide what to log and where to fall back.

- MyQuranProvider (primary):  GET {PRIMARY_URL} by city id and date.
    {"status": true, "data": {"jadwal": {"imsak": "04:10", "subuh": "04:20",
     "terbit": "05:38", "dzuhur": "11:55", ...}}}
- AladhanProvider (secondary): GET {SECONDARY_URL} by lat/lon + method.
    {"code": 200, "data": {"timings": {"Fajr": "04:19 (WIB)", ...}}}
"""
from dataclasses import dataclass
from datetime import date

import requests

from .constants import DEFAULT_SCHEDULE, SOURCE_ALADHAN, SOURCE_MYQURAN
from .exceptions import ExternalFetchFailure
from .timeutils import clean_time


@dataclass(frozen=True)
class FetchResult:
    provider: str
    schedule: dict = None
    error: str = None

    @property
    def ok(self) -> bool:
        return self.schedule is not None

    @classmethod
    def success(cls, provider, schedule):
        return cls(provider=provider, schedule=schedule)

    @classmethod
    def failure(cls, provider, error):
        return cls(provider=provider, error=error)


class PrayerTimeProvider:
    """Shared HTTP plumbing; subclasses build the request and parse the body."""

    name = ""
    # our field -> provider field
    field_map = {}

    def __init__(self, url: str, timeout: float = 10.0, http=None):
        self.url = url
        self.timeout = timeout
        self.http = http or requests

    def build_request(self, day: date):
        raise NotImplementedError

    def extract_timings(self, payload):
        """Return the provider's timings dict, or None when the body is not a schedule."""
        raise NotImplementedError

    def fetch(self, day: date) -> FetchResult:
        try:
            timings = self._fetch_timings(day)
        except ExternalFetchFailure as exc:
            return FetchResult.failure(exc.provider, exc.reason)
        return FetchResult.success(self.name, self.to_schedule(timings))

    def _fetch_timings(self, day):
        url, params = self.build_request(day)
        try:
            response = self.http.get(url, params=params, timeout=self.timeout)
        except requests.Timeout:
            raise ExternalFetchFailure(self.name, f"timed out after {self.timeout}s") from None
        except requests.RequestException as exc:
            raise ExternalFetchFailure(self.name, f"request failed: {exc}") from exc

        if response.status_code != 200:
            raise ExternalFetchFailure(self.name, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            raise ExternalFetchFailure(self.name, "response body is not JSON") from None

        timings = self.extract_timings(payload)
        if not isinstance(timings, dict):
            raise ExternalFetchFailure(self.name, "schedule missing from payload")
        return timings

    def to_schedule(self, timings: dict) -> dict:
        # Missing or garbled fields fall back to the location defaults.
        schedule = {}
        for field, key in self.field_map.items():
            schedule[field] = clean_time(timings.get(key)) or DEFAULT_SCHEDULE.get(field)
        return schedule


class MyQuranProvider(PrayerTimeProvider):
    name = SOURCE_MYQURAN
    field_map = {
        "imsak": "imsak",
        "subuh": "subuh",
        "sunrise": "terbit",
        "dzuhur": "dzuhur",
        "ashar": "ashar",
        "maghrib": "maghrib",
        "isya": "isya",
    }

    def __init__(self, url: str, city_id, timeout: float = 10.0, http=None):
        super().__init__(url, timeout=timeout, http=http)
        self.city_id = city_id

    def build_request(self, day):
        url = self.url.format(city=self.city_id, year=day.year, month=day.month, day=day.day)
        return url, None

    def extract_timings(self, payload):
        if not isinstance(payload, dict) or payload.get("status") is not True:
            return None
        data = payload.get("data")
        if not isinstance(data, dict):
            return None
        return data.get("jadwal")


class AladhanProvider(PrayerTimeProvider):
    name = SOURCE_ALADHAN
    field_map = {
        "imsak": "Imsak",
        "subuh": "Fajr",
        "sunrise": "Sunrise",
        "dzuhur": "Dhuhr",
        "ashar": "Asr",
        "maghrib": "Maghrib",
        "isya": "Isha",
    }

    def __init__(self, url: str, latitude: float, longitude: float, method: int,
                 timezone: str, timeout: float = 10.0, http=None):
        super().__init__(url, timeout=timeout, http=http)
        self.latitude = latitude
        self.longitude = longitude
        self.method = method
        self.timezone = timezone

    def build_request(self, day):
        url = self.url.format(date=day.strftime("%d-%m-%Y"))
        params = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "method": self.method,
            "timezonestring": self.timezone,
        }
        return url, params

    def extract_timings(self, payload):
        if not isinstance(payload, dict) or payload.get("code", 200) != 200:
            return None
        data = payload.get("data")
        if not isinstance(data, dict):
            return None
        return data.get("timings")
