"""
prayer_times/timeutils.py

Wall-clock helpers: HH:MM parsing/formatting, the Jumat derivation, and the
local clock used for cache keys and midnight expiry.
"""
import logging
import re
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from .constants import DEFAULT_JUMAT, JUMAT_OFFSET_MINUTES
from .exceptions import TimeParseFailure

logger = logging.getLogger(__name__)

_HHMM_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$")
# Admin input: exactly two-digit hours and minutes, nothing else.
STRICT_HHMM_RE = re.compile(r"[0-9]{2}:[0-9]{2}")
# Trailing "(WIB)", "(+07)" and friends added by some providers.
_ANNOTATION_RE = re.compile(r"\s*\([^)]*\)\s*$")

MINUTES_PER_DAY = 24 * 60


def parse_hhmm(value) -> time:
    """Parse 'HH:MM' (seconds tolerated) into a time; raise TimeParseFailure otherwise."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str):
        raise TimeParseFailure(f"expected HH:MM string, got {type(value).__name__}")
    match = _HHMM_RE.match(value)
    if not match:
        raise TimeParseFailure(f"not a HH:MM time: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise TimeParseFailure(f"time out of range: {value!r}")
    return time(hour, minute)


def parse_strict_hhmm(value) -> time:
    """Like parse_hhmm, but strings must be exactly 'HH:MM' (no padding, no seconds)."""
    if isinstance(value, str) and not STRICT_HHMM_RE.fullmatch(value):
        raise TimeParseFailure(f"not a HH:MM time: {value!r}")
    return parse_hhmm(value)


def format_hhmm(value):
    if value is None:
        return None
    if isinstance(value, str):
        return format_hhmm(parse_hhmm(value))
    return value.strftime("%H:%M")


def strip_annotation(value):
    """'04:19 (WIB)' -> '04:19'. Non-strings pass through untouched."""
    if not isinstance(value, str):
        return value
    return _ANNOTATION_RE.sub("", value).strip()


def clean_time(value):
    """Normalize a provider value to HH:MM, or None when it is unusable."""
    try:
        return format_hhmm(parse_hhmm(strip_annotation(value)))
    except TimeParseFailure:
        return None


def auto_jumat(dzuhur) -> str:
    """
    Friday prayer = dzuhur minus JUMAT_OFFSET_MINUTES, wrapping past midnight.

    Never raises: an unparseable dzuhur yields DEFAULT_JUMAT and a warning.
    """
    try:
        parsed = parse_hhmm(dzuhur)
    except TimeParseFailure as exc:
        logger.warning("Cannot derive Jumat from dzuhur=%r (%s); using %s", dzuhur, exc, DEFAULT_JUMAT)
        return DEFAULT_JUMAT
    minutes = (parsed.hour * 60 + parsed.minute - JUMAT_OFFSET_MINUTES) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class LocalClock:
    """Current date/time in the mosque's fixed timezone."""

    def __init__(self, tz="Asia/Jakarta"):
        self.tz = ZoneInfo(tz) if isinstance(tz, str) else tz

    def now(self) -> datetime:
        return datetime.now(self.tz)

    def today(self) -> date:
        return self.now().date()

    def seconds_until_midnight(self) -> int:
        now = self.now()
        midnight = datetime.combine(now.date() + timedelta(days=1), time.min, tzinfo=self.tz)
        return max(1, int((midnight - now).total_seconds()))
