"""
settings.py — Django project configuration for the Masjid Announcement Backend

What this file configures
===============================================================================
- Core Django wiring (INSTALLED_APPS, MIDDLEWARE, TEMPLATES, DB)
- REST Framework defaults (JWT auth, IsAuthenticated, filtering, pagination)
- SimpleJWT (access/refresh) + blacklist app (logout invalidates refresh)
- CORS for FE ↔ BE requests
- Static + media handling, including optional S3 via django-storages
- Production serving of static via WhiteNoise
- Swagger (drf-yasg) configured to use Bearer tokens in the Authorize dialog
- CSP (django-csp v4) `frame-ancestors` so the dashboard can embed media
- Cache (local memory by default, Redis when CACHE_URL is set)
- Prayer-time resolver configuration (PRAYER_TIMES)

How environment variables drive behavior (deployment-safe)
===============================================================================
DJANGO_DEBUG            -> Enables dev mode when true. Defaults to True locally.
DJANGO_SECRET_KEY       -> Required when DJANGO_DEBUG=False (production).
DJANGO_ALLOWED_HOSTS    -> Comma-separated list of allowed hostnames in prod.
DJANGO_TIME_ZONE        -> Local timezone of the mosque (default Asia/Jakarta).
CORS_ALLOW_ALL_ORIGINS  -> Dev toggle to allow any origin (default True in dev).
CORS_ALLOWED_ORIGINS    -> Comma-separated list of exact origins (prod).
DATABASE_URL            -> Postgres/MySQL URL; SQLite when empty.
CACHE_URL               -> redis://… URL; local-memory cache when empty.
USE_S3_MEDIA            -> When true, use S3 for media (django-storages).
AWS_STORAGE_BUCKET_NAME -> S3 bucket for uploads.
AWS_S3_REGION_NAME      -> AWS region (e.g., ap-southeast-3).
AWS_ACCESS_KEY_ID       -> AWS key (omit if using instance role).
AWS_SECRET_ACCESS_KEY   -> AWS secret (omit if using instance role).
AWS_S3_CUSTOM_DOMAIN    -> Optional CDN/CloudFront domain for media URLs.
AWS_QUERYSTRING_AUTH    -> True to sign URLs; False for public-read objects.

Prayer times
PRAYER_LOCATION_NAME    -> Display name of the location (default "Jakarta").
PRAYER_CITY_ID          -> myQuran city identifier (default 1301, Kota Jakarta).
PRAYER_LATITUDE         -> Latitude used for Aladhan (default -6.2088).
PRAYER_LONGITUDE        -> Longitude used for Aladhan (default 106.8456).
PRAYER_METHOD           -> Aladhan calculation method (default 20, Kemenag RI).
PRAYER_TIMEOUT          -> Seconds before an external call counts as failed.
PRAYER_LOG_LEVEL        -> Level of the prayer_times logger (default INFO).

Why some ordering matters
===============================================================================
- We compute DEBUG first so SECRET_KEY can enforce “prod requires a key.”
- SECRET_KEY only falls back to a dev key when DEBUG=True.
- TIME_ZONE is read before PRAYER_TIMES so the resolver clock defaults to it.

Deployment notes
===============================================================================
- Build command example:
    pip install . && python manage.py collectstatic --noinput && python manage.py migrate --noinput
- Start command example:
    gunicorn masjid_backend.wsgi:application --log-file -
"""

from pathlib import Path
from datetime import timedelta
from urllib.parse import urlparse
import os
import sys

import dj_database_url


# ---------------------------
# Helpers for env parsing
# ---------------------------
def _get_bool(env_key: str, default: bool = False) -> bool:
    """Parse booleans from env like '1', 'true', 'yes'."""
    raw = os.environ.get(env_key, str(default))
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}

def _get_list(env_key: str, default=None):
    """Parse comma-separated lists from env (e.g., 'a.com,b.com')."""
    if default is None:
        default = []
    raw = os.environ.get(env_key)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]

def _get_float(env_key: str, default: float) -> float:
    raw = os.environ.get(env_key)
    try:
        return float(raw) if raw else default
    except ValueError:
        return default

def _origin_from(url: str) -> str:
    """Turn a full URL into an origin string (scheme://host[:port])."""
    p = urlparse(url or "")
    if not p.scheme or not p.hostname:
        return ""
    return f"{p.scheme}://{p.hostname}" + (f":{p.port}" if p.port else "")


BASE_DIR = Path(__file__).resolve().parent.parent

# Reads DJANGO_DEBUG from env. Defaults to True for dev.
DEBUG = _get_bool("DJANGO_DEBUG", True)

# Test runs (manage.py test or pytest) switch off throttling below.
RUNNING_TESTS = "test" in sys.argv or "pytest" in sys.modules


# --- Frontend URL & CORS/CSRF (dev-friendly defaults) ---
# Root redirect will send "/" here (see urls.py). In dev we default to Next.js on 3000.
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000/")

CORS_ALLOW_ALL_ORIGINS = _get_bool("CORS_ALLOW_ALL_ORIGINS", DEBUG)

CORS_ALLOWED_ORIGINS = _get_list("CORS_ALLOWED_ORIGINS", [])
if not CORS_ALLOWED_ORIGINS and FRONTEND_URL:
    derived = _origin_from(FRONTEND_URL)
    if derived:
        CORS_ALLOWED_ORIGINS = [derived]

CSRF_TRUSTED_ORIGINS = _get_list("CSRF_TRUSTED_ORIGINS", [])
if not CSRF_TRUSTED_ORIGINS and FRONTEND_URL:
    derived = _origin_from(FRONTEND_URL)
    if derived:
        CSRF_TRUSTED_ORIGINS = [derived]

CORS_ALLOWED_ORIGIN_REGEXES = _get_list("CORS_ALLOWED_ORIGIN_REGEXES", [])

# --- Framing / media preview -------------------------------------------------
# The dashboard embeds uploaded videos/images served by the API.
_frontend_origin = _origin_from(FRONTEND_URL) if FRONTEND_URL else ""
_allowed_ancestors = set(["'self'"])

if _frontend_origin:
    _allowed_ancestors.add(_frontend_origin)

for o in CORS_ALLOWED_ORIGINS:
    if o:
        _allowed_ancestors.add(o)

_allowed_ancestors.update([
    "http://localhost:3000",
    "http://127.0.0.1:3000",
])

# django-csp v4+ format:
CONTENT_SECURITY_POLICY = {
    "DIRECTIVES": {
        "frame-ancestors": sorted(_allowed_ancestors),
    }
}


# SECRET_KEY with safe production enforcement
SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY") or (
    "django-insecure-masjid-dev-key-7q%x0+u4w@l8z!c2n3d^r6b1e9k$y5t" if DEBUG else None
)
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY must be set when DJANGO_DEBUG=False")


ALLOWED_HOSTS = _get_list("DJANGO_ALLOWED_HOSTS", [] if DEBUG else ["127.0.0.1"])


INSTALLED_APPS = [
    # Django core
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third-party
    'rest_framework',
    'corsheaders',
    'django_filters',                             # filtering backend for DRF
    'drf_yasg',                                   # Swagger/OpenAPI docs
    'rest_framework_simplejwt.token_blacklist',   # refresh-token blacklist
    'csp',

    # Local apps
    'users',
    'announcements',
    'prayer_times',
]

SWAGGER_SETTINGS = {
    "USE_SESSION_AUTH": False,
    "SECURITY_DEFINITIONS": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Paste: Bearer <access-token>",
        }
    },
}

MIDDLEWARE = [
    # CORS should be as high as possible
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',

    'django.middleware.security.SecurityMiddleware',
    "csp.middleware.CSPMiddleware",
    'whitenoise.middleware.WhiteNoiseMiddleware',  # Serves static in prod
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework_simplejwt.authentication.JWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    "DEFAULT_FILTER_BACKENDS": (
        "django_filters.rest_framework.DjangoFilterBackend",
    ),
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ],
    "DEFAULT_THROTTLE_CLASSES": [ "rest_framework.throttling.AnonRateThrottle" ],
    "DEFAULT_THROTTLE_RATES": {"anon": os.environ.get("ANON_THROTTLE_RATE", "120/min")},
}

# Disable throttling when running tests
if RUNNING_TESTS:
    REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=12),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
}

ROOT_URLCONF = 'masjid_backend.urls'
WSGI_APPLICATION = 'masjid_backend.wsgi.application'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]


# --- Database (DATABASE_URL when set; SQLite otherwise) ---
DB_URL = os.environ.get("DATABASE_URL", "").strip()
IS_POSTGRES = DB_URL.startswith("postgres://") or DB_URL.startswith("postgresql://")

if DB_URL:
    DATABASES = {
        "default": dj_database_url.parse(
            DB_URL,
            conn_max_age=600,
            ssl_require=IS_POSTGRES,  # only apply SSL flag for Postgres URLs
        )
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }


# --- Cache (daily prayer schedule lives here) ---
CACHE_URL = os.environ.get("CACHE_URL", "").strip()

if CACHE_URL:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.redis.RedisCache",
            "LOCATION": CACHE_URL,
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "masjid-backend",
        }
    }


AUTHENTICATION_BACKENDS = [
    "django.contrib.auth.backends.ModelBackend",
]

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

LANGUAGE_CODE = 'id'
TIME_ZONE = os.environ.get("DJANGO_TIME_ZONE", "Asia/Jakarta")
USE_I18N = True
USE_TZ = True

# Static & media
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / "staticfiles"

MEDIA_URL = "/media/"
MEDIA_ROOT = BASE_DIR / "media"

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Upload limits for announcement media (bytes)
ANNOUNCEMENT_IMAGE_MAX_BYTES = 5 * 1024 * 1024
ANNOUNCEMENT_VIDEO_MAX_BYTES = 50 * 1024 * 1024
DATA_UPLOAD_MAX_MEMORY_SIZE = ANNOUNCEMENT_VIDEO_MAX_BYTES + 1024 * 1024

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedStaticFilesStorage"},
}

# --- S3 media storage (optional; prod) ---
USE_S3 = _get_bool("USE_S3_MEDIA", False)

if USE_S3:
    INSTALLED_APPS += ["storages"]
    STORAGES["default"] = {"BACKEND": "storages.backends.s3boto3.S3Boto3Storage"}
    AWS_STORAGE_BUCKET_NAME = os.environ.get("AWS_STORAGE_BUCKET_NAME")
    AWS_S3_REGION_NAME = os.environ.get("AWS_S3_REGION_NAME", "ap-southeast-3")
    AWS_S3_SIGNATURE_VERSION = os.environ.get("AWS_S3_SIGNATURE_VERSION", "s3v4")
    AWS_S3_ADDRESSING_STYLE = os.environ.get("AWS_S3_ADDRESSING_STYLE", "virtual")
    AWS_QUERYSTRING_AUTH = _get_bool("AWS_QUERYSTRING_AUTH", False)
    AWS_S3_FILE_OVERWRITE = False
    AWS_DEFAULT_ACL = None

    AWS_ACCESS_KEY_ID = os.environ.get("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY = os.environ.get("AWS_SECRET_ACCESS_KEY")

    AWS_S3_CUSTOM_DOMAIN = os.environ.get("AWS_S3_CUSTOM_DOMAIN")
    if AWS_S3_CUSTOM_DOMAIN:
        MEDIA_URL = f"https://{AWS_S3_CUSTOM_DOMAIN}/"
    else:
        MEDIA_URL = f"https://{AWS_STORAGE_BUCKET_NAME}.s3.{AWS_S3_REGION_NAME}.amazonaws.com/"


# --- Prayer times ---
# Primary: myQuran (by city id). Secondary: Aladhan (by coordinates + method).
PRAYER_TIMES = {
    "LOCATION_NAME": os.environ.get("PRAYER_LOCATION_NAME", "Jakarta"),
    "CITY_ID": os.environ.get("PRAYER_CITY_ID", "1301"),
    "LATITUDE": _get_float("PRAYER_LATITUDE", -6.2088),
    "LONGITUDE": _get_float("PRAYER_LONGITUDE", 106.8456),
    "METHOD": int(_get_float("PRAYER_METHOD", 20)),
    "TIMEZONE": os.environ.get("PRAYER_TIMEZONE", TIME_ZONE),
    "PRIMARY_URL": os.environ.get(
        "PRAYER_PRIMARY_URL", "https://api.myquran.com/v2/sholat/jadwal/{city}/{year}/{month:02d}/{day:02d}"
    ),
    "SECONDARY_URL": os.environ.get("PRAYER_SECONDARY_URL", "https://api.aladhan.com/v1/timings/{date}"),
    "TIMEOUT": _get_float("PRAYER_TIMEOUT", 10.0),
    "CACHE_ALIAS": "default",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "[{asctime}] {levelname} {name}: {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "django.request": {  # 500s, 404s with exceptions
            "handlers": ["console"],
            "level": "ERROR",
            "propagate": True,
        },
        "django": {
            "handlers": ["console"],
            "level": "INFO",
        },
        "prayer_times": {
            "handlers": ["console"],
            "level": os.environ.get("PRAYER_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "announcements": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}
