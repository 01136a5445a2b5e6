# conf.py
import os

from django.conf import settings

DEFAULT_FONTS = {
    "regular": "Vera.ttf",
    "semibold": "VeraBd.ttf",
    "bold": "VeraBd.ttf",
}


def cfg() -> dict:
    """
    Lazy-read CONFIRMATIONS from settings so tests can override it per call.
    """
    raw = getattr(settings, "CONFIRMATIONS", {}) or {}
    font_dir = raw.get("FONT_DIR") or os.path.join(settings.BASE_DIR, "static", "fonts")
    return {
        "LOGO_URL": raw.get("LOGO_URL") or "",
        "IMAGE_FETCH_TIMEOUT": raw.get("IMAGE_FETCH_TIMEOUT"),
        "FONT_DIR": str(font_dir),
        "FONTS": {**DEFAULT_FONTS, **(raw.get("FONTS") or {})},
        "CHUNK_SIZE": int(raw.get("CHUNK_SIZE") or 8192),
    }
