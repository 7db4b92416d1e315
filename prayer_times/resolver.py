"""
prayer_times/resolver.py — today's prayer schedule with fallback and caching

Purpose
===============================================================================
Produce the day's prayer times from the best available source:

    1. cached external schedule for today (expires at local midnight)
    2. providers in order (myQuran by city id, then Aladhan by coordinates)
    3. the stored override row, when it has every mandatory prayer
    4. the hardcoded default schedule

While an external schedule is available only `jumat` may be overridden by the
stored row; without an override it is derived from dzuhur (minus 30 minutes).

Every public operation returns the same composite document:

    {
      "success": true,
      "data": {subuh, dzuhur, ashar, maghrib, isya, jumat, imsak, sunrise},
      "source": "myquran" | "aladhan" | "database" | "default",
      "jumat_source": "manual" | "auto",
      "location": "...", "coordinates": {...}, "date": "YYYY-MM-DD",
      "updated_at": "<override row timestamp or null>",
    }

Collaborators (injected)
===============================================================================
- cache:      Django cache backend (get / set / delete with per-key timeout)
- repository: OverrideRepository (ORM access to the single override row)
- clock:      LocalClock (today's date, seconds until local midnight)
- providers:  ordered list of objects with `name` and `fetch(day) -> FetchResult`

`get_resolver()` builds the production wiring from settings.PRAYER_TIMES.
"""
import logging

from django.conf import settings
from django.core.cache import caches
from django.db import DatabaseError

from .constants import (
    CACHE_KEY_PREFIX,
    DEFAULT_SCHEDULE,
    JUMAT_AUTO,
    JUMAT_MANUAL,
    OVERRIDE_FIELDS,
    SCHEDULE_FIELDS,
    SOURCE_DATABASE,
    SOURCE_DEFAULT,
)
from .exceptions import TimeParseFailure, ValidationFailure
from .models import PrayerTimeOverride
from .providers import AladhanProvider, MyQuranProvider
from .timeutils import LocalClock, auto_jumat, format_hhmm, parse_strict_hhmm

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Persistence                                                                 #
# --------------------------------------------------------------------------- #
class OverrideRepository:
    """Read and upsert the single PrayerTimeOverride row."""

    model = PrayerTimeOverride

    def get(self):
        return self.model.current()

    def upsert(self, fields: dict, actor=None):
        row = self.get()
        if row is None:
            row = self.model()
        for name, value in fields.items():
            setattr(row, name, value)
        row.updated_by = _actor_or_none(actor)
        row.save()
        return row

    def clear_jumat(self, actor=None):
        row = self.get()
        if row is None:
            return None
        row.jumat = None
        row.updated_by = _actor_or_none(actor)
        row.save(update_fields=["jumat", "updated_by", "updated_at"])
        return row


def _actor_or_none(actor):
    if actor is None or not getattr(actor, "is_authenticated", False):
        return None
    return actor


# --------------------------------------------------------------------------- #
# Resolver                                                                    #
# --------------------------------------------------------------------------- #
class PrayerTimeResolver:
    def __init__(self, cache, repository, clock, providers, location_name="", latitude=None, longitude=None):
        self.cache = cache
        self.repository = repository
        self.clock = clock
        self.providers = list(providers)
        self.location_name = location_name
        self.latitude = latitude
        self.longitude = longitude

    # ---- public operations -------------------------------------------------
    def get_todays_schedule(self) -> dict:
        """Resolve today's schedule. Never raises; worst case is the default schedule."""
        day = self.clock.today()
        try:
            return self._resolve(day)
        except Exception:
            logger.exception("Prayer time resolution failed for %s; serving default schedule", day)
            return self._document(day, dict(DEFAULT_SCHEDULE), SOURCE_DEFAULT, JUMAT_AUTO)

    def update_override(self, fields: dict, actor=None) -> dict:
        """
        Merge `fields` (HH:MM strings, time objects, or None) into the override
        row, creating it when absent. Omitted fields stay untouched.

        Raises ValidationFailure naming the first bad field.
        """
        cleaned = {name: self._coerce(name, value) for name, value in (fields or {}).items()}
        self.repository.upsert(cleaned, actor)
        logger.info("Prayer time override updated by %s: %s", _actor_label(actor), sorted(cleaned))
        self.invalidate()
        return self.get_todays_schedule()

    def reset_jumat_override(self, actor=None) -> dict:
        self.repository.clear_jumat(actor)
        logger.info("Jumat override reset to auto by %s", _actor_label(actor))
        self.invalidate()
        return self.get_todays_schedule()

    def force_refresh(self) -> dict:
        self.invalidate()
        return self.get_todays_schedule()

    def invalidate(self):
        self.cache.delete(self.cache_key(self.clock.today()))

    @staticmethod
    def cache_key(day) -> str:
        return f"{CACHE_KEY_PREFIX}:{day.isoformat()}"

    # ---- pipeline ----------------------------------------------------------
    def _resolve(self, day) -> dict:
        external = self.cache.get(self.cache_key(day))
        if external is not None:
            logger.debug("Prayer times cache hit for %s (%s)", day, external.get("source"))
        else:
            external = self._fetch_external(day)

        override = self._read_override()

        if external is not None:
            data = {name: external["schedule"].get(name) for name in SCHEDULE_FIELDS if name != "jumat"}
            manual_jumat = format_hhmm(override.jumat) if override is not None else None
            if manual_jumat:
                data["jumat"], jumat_source = manual_jumat, JUMAT_MANUAL
            else:
                data["jumat"], jumat_source = auto_jumat(data.get("dzuhur")), JUMAT_AUTO
            return self._document(day, data, external["source"], jumat_source, override)

        if override is not None and override.is_complete():
            data = override.as_schedule()
            data["sunrise"] = None
            if data.get("jumat"):
                jumat_source = JUMAT_MANUAL
            else:
                data["jumat"], jumat_source = auto_jumat(data["dzuhur"]), JUMAT_AUTO
            return self._document(day, data, SOURCE_DATABASE, jumat_source, override)

        return self._document(day, dict(DEFAULT_SCHEDULE), SOURCE_DEFAULT, JUMAT_AUTO, override)

    def _fetch_external(self, day):
        for provider in self.providers:
            result = provider.fetch(day)
            if result.ok:
                entry = {"schedule": result.schedule, "source": result.provider}
                self.cache.set(self.cache_key(day), entry, timeout=self.clock.seconds_until_midnight())
                logger.info("Prayer times for %s fetched from %s", day, result.provider)
                return entry
            logger.warning("Prayer time provider %s failed for %s: %s", result.provider, day, result.error)

        logger.error("All prayer time providers failed for %s; falling back to stored times", day)
        return None

    def _read_override(self):
        try:
            return self.repository.get()
        except DatabaseError:
            logger.exception("Could not read the prayer time override")
            return None

    def _coerce(self, name, value):
        if name not in OVERRIDE_FIELDS:
            raise ValidationFailure(name, "Unknown prayer time field.")
        if value is None or value == "":
            return None
        try:
            return parse_strict_hhmm(value)
        except TimeParseFailure:
            raise ValidationFailure(name, "Time must use the HH:MM format.") from None

    def _document(self, day, data, source, jumat_source, override=None) -> dict:
        updated_at = getattr(override, "updated_at", None)
        return {
            "success": True,
            "data": {name: data.get(name) for name in SCHEDULE_FIELDS},
            "source": source,
            "jumat_source": jumat_source,
            "location": self.location_name,
            "coordinates": {"latitude": self.latitude, "longitude": self.longitude},
            "date": day.isoformat(),
            "updated_at": updated_at.isoformat() if updated_at else None,
        }


def _actor_label(actor):
    return getattr(actor, "username", None) or "system"


# --------------------------------------------------------------------------- #
# Factory                                                                     #
# --------------------------------------------------------------------------- #
def get_resolver() -> PrayerTimeResolver:
    """Build a resolver wired to the configured cache, database and providers."""
    conf = settings.PRAYER_TIMES
    timeout = conf.get("TIMEOUT", 10.0)
    timezone = conf.get("TIMEZONE") or settings.TIME_ZONE
    providers = [
        MyQuranProvider(conf["PRIMARY_URL"], conf["CITY_ID"], timeout=timeout),
        AladhanProvider(
            conf["SECONDARY_URL"],
            latitude=conf["LATITUDE"],
            longitude=conf["LONGITUDE"],
            method=conf["METHOD"],
            timezone=timezone,
            timeout=timeout,
        ),
    ]
    return PrayerTimeResolver(
        cache=caches[conf.get("CACHE_ALIAS", "default")],
        repository=OverrideRepository(),
        clock=LocalClock(timezone),
        providers=providers,
        location_name=conf.get("LOCATION_NAME", ""),
        latitude=conf["LATITUDE"],
        longitude=conf["LONGITUDE"],
    )
