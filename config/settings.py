import os
from pathlib import Path
from dotenv import load_dotenv
from corsheaders.defaults import default_headers

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

# ---- Core ----
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-booking-confirmations-dev-only")
DEBUG = os.getenv("DJANGO_DEBUG", "true").strip().lower() in ("1", "true", "yes")

ALLOWED_HOSTS = [
    "localhost",
    "127.0.0.1",
] + [h.strip() for h in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if h.strip()]

# --- behind proxy / https ---
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True

# ---- Apps ----
INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.staticfiles",
    "rest_framework",
    "corsheaders",
    "confirmations",
]

# ---- Middleware (CORS first) ----
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"

WSGI_APPLICATION = "config.wsgi.application"
ASGI_APPLICATION = "config.asgi.application"

# ---- DB ----
# Stateless service: nothing is persisted.
DATABASES = {}

# ---- I18N/Timezone ----
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# ---- Static (font files live under static/fonts) ----
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STATICFILES_DIRS = [BASE_DIR / "static"]
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

# ---- CORS (PDFs are embedded inline by browser frontends) ----
CORS_ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:5173").split(",") if o.strip()
]
CORS_ALLOW_METHODS = ["GET", "OPTIONS"]
CORS_ALLOW_HEADERS = list(default_headers)
CORS_EXPOSE_HEADERS = ["Content-Disposition"]

# ---- DRF ----
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
}

# ---- Confirmation PDFs (env-driven) ----
_timeout = os.getenv("CONFIRMATIONS_IMAGE_FETCH_TIMEOUT", "").strip()
CONFIRMATIONS = {
    "LOGO_URL": os.getenv(
        "CONFIRMATIONS_LOGO_URL",
        "https://rxqfrojpwinspidmrgyl.supabase.co/storage/v1/object/public/edm/msf-logo.png",
    ),
    # None: no deadline beyond what requests/the OS impose
    "IMAGE_FETCH_TIMEOUT": float(_timeout) if _timeout else None,
    "FONT_DIR": os.getenv("CONFIRMATIONS_FONT_DIR", str(BASE_DIR / "static" / "fonts")),
    # Bare names resolve in FONT_DIR, then static fonts/, then ReportLab's bundled fonts
    "FONTS": {
        "regular": os.getenv("CONFIRMATIONS_FONT_REGULAR") or "Vera.ttf",
        "semibold": os.getenv("CONFIRMATIONS_FONT_SEMIBOLD") or "VeraBd.ttf",
        "bold": os.getenv("CONFIRMATIONS_FONT_BOLD") or "VeraBd.ttf",
    },
    "CHUNK_SIZE": 8192,
}

# ---- Logging ----
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {
        "confirmations": {"handlers": ["console"], "level": os.getenv("CONFIRMATIONS_LOG_LEVEL", "DEBUG")},
        "django.request": {"handlers": ["console"], "level": "WARNING"},
    },
}
