"""
prayer_times/constants.py

Field names and location defaults shared by the providers and the resolver.
"""

# Order used in every response payload.
SCHEDULE_FIELDS = ("subuh", "dzuhur", "ashar", "maghrib", "isya", "jumat", "imsak", "sunrise")

# Fields an admin may store on the override row.
OVERRIDE_FIELDS = ("subuh", "dzuhur", "ashar", "maghrib", "isya", "jumat", "imsak")

# Without these the stored row cannot stand in for an external schedule.
MANDATORY_FIELDS = ("subuh", "dzuhur", "ashar", "maghrib", "isya")

# Friday prayer is derived as dzuhur minus this many minutes.
JUMAT_OFFSET_MINUTES = 30
DEFAULT_JUMAT = "11:30"

DEFAULT_SCHEDULE = {
    "subuh": "04:30",
    "dzuhur": "12:00",
    "ashar": "15:15",
    "maghrib": "18:00",
    "isya": "19:15",
    "jumat": DEFAULT_JUMAT,
    "imsak": "04:20",
    "sunrise": None,
}

# Response `source` tags.
SOURCE_MYQURAN = "myquran"
SOURCE_ALADHAN = "aladhan"
SOURCE_DATABASE = "database"
SOURCE_DEFAULT = "default"

JUMAT_MANUAL = "manual"
JUMAT_AUTO = "auto"

CACHE_KEY_PREFIX = "prayer_times"
