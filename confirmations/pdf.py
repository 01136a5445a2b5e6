# pdf.py
from __future__ import annotations

import logging
import os
from io import BytesIO
from typing import BinaryIO, Callable, Iterator, NamedTuple, Optional

import reportlab
from django.contrib.staticfiles import finders
from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .conf import cfg
from .exceptions import FontLoadError
from .fetch import fetch_image
from .layout import DocumentLayout, Margins, hex_color
from .records import NOTES, SAMPLE_BOOKING, BookingRecord, note_depth

logger = logging.getLogger(__name__)


# =====================================================================
# DESIGN TOKENS
# =====================================================================

PAGE_W, PAGE_H = A4

# Booking confirmation
MARGINS = Margins(top=80, bottom=20, left=125, right=125)
IMAGE_W = 80
IMAGE_Y = 20
NOTE_INDENT = 20

BACKGROUND = hex_color("#F6F4EE")
TEXT       = hex_color("#1F2A24")
SEPARATOR  = hex_color("#8FA398")
ERROR      = hex_color("#C0392B")

# Type scale (pt)
T_TITLE  = 20
T_HEADER = 13
T_BODY   = 10.5
T_ERROR  = 13

_FONT_ERROR = "Helvetica-Bold"

TITLE = "Booking Confirmation"
INSTRUCTIONS = (
    "Thank you for your booking. Please review the details below and let us "
    "know as soon as possible if anything needs to be changed."
)
BOOKING_ERROR = "Error: Could not generate the booking confirmation."

# Image demo
DEMO_MARGINS = Margins.uniform(50)
DEMO_IMAGE_W = 100
DEMO_IMAGE_Y = 30
DEMO_TEXT_Y = 150
DEMO_ERROR = "Error: Could not generate the PDF."


# =====================================================================
# FONTS
# =====================================================================

class Fonts(NamedTuple):
    regular: str
    semibold: str
    bold: str


_BUNDLED_FONT_DIR = os.path.join(os.path.dirname(reportlab.__file__), "fonts")


def _font_path(filename: str, font_dir: str) -> Optional[str]:
    """FONT_DIR first, then the staticfiles finders (fonts/<name>), then ReportLab's own fonts."""
    if os.path.isabs(filename) and os.path.exists(filename):
        return filename
    cand = os.path.join(font_dir, filename)
    if os.path.exists(cand):
        return cand
    found = finders.find(f"fonts/{filename}")
    if found:
        return found
    cand = os.path.join(_BUNDLED_FONT_DIR, filename)
    return cand if os.path.exists(cand) else None


def register_fonts() -> Fonts:
    """
    Register the regular/semibold/bold TTFs under stable names.
    Any missing or unreadable file raises FontLoadError.
    """
    conf = cfg()
    names = {}
    for weight in Fonts._fields:
        filename = conf["FONTS"][weight]
        path = _font_path(filename, conf["FONT_DIR"])
        if not path:
            raise FontLoadError(f"{weight} font not found: {filename} (FONT_DIR={conf['FONT_DIR']})")
        name = f"Confirmation-{weight.title()}"
        try:
            pdfmetrics.registerFont(TTFont(name, path))
        except Exception as e:
            raise FontLoadError(f"could not load {weight} font from {path}: {e}") from e
        names[weight] = name
    return Fonts(**names)


# =====================================================================
# BOOKING CONFIRMATION
# =====================================================================

def _booking_layout(sink: BinaryIO) -> DocumentLayout:
    return DocumentLayout(sink, pagesize=A4, margins=MARGINS, background=BACKGROUND)


def _section(layout: DocumentLayout, fonts: Fonts, title: str):
    layout.move_down(1)
    layout.font(fonts.bold, T_HEADER).text(title)
    layout.move_down(0.25)
    layout.font(fonts.regular, T_BODY)


def _compose_booking(layout: DocumentLayout, image_url: str, record: BookingRecord):
    """Draw every block of the confirmation, top to bottom. Raises on any failure."""
    fonts = register_fonts()
    image = fetch_image(image_url)

    layout.fill(TEXT)
    layout.image(image, width=IMAGE_W, y=IMAGE_Y)
    layout.move_down(1)

    # Title + greeting
    layout.font(fonts.bold, T_TITLE).text(TITLE, align="center")
    layout.move_down(0.5)
    layout.font(fonts.regular, T_BODY)
    layout.text_runs([("Dear ", fonts.regular), (record.point_of_contact, fonts.bold), (",", fonts.regular)])
    layout.move_down(0.5)
    layout.text(INSTRUCTIONS)

    # Booking Dates
    _section(layout, fonts, "Booking Dates")
    layout.text(record.booking_dates)
    layout.rule(SEPARATOR)

    # Bouncy Castle Selection
    _section(layout, fonts, "Bouncy Castle Selection")
    layout.font(fonts.semibold)
    for item in record.selected_items:
        layout.text(item)
    layout.font(fonts.regular)
    layout.move_down(0.5)
    layout.text_runs([("Collection Method: ", fonts.regular), (record.collection_method, fonts.bold)])
    layout.rule(SEPARATOR)

    # Key Event Details
    _section(layout, fonts, "Key Event Details")
    rows = record.key_value_rows()
    for i, (label, value) in enumerate(rows):
        layout.text_runs([(f"{label}: ", fonts.regular), (value, fonts.bold)])
        if i < len(rows) - 1:
            layout.move_down(0.5)
    layout.rule(SEPARATOR)

    # Notes
    _section(layout, fonts, "Notes")
    for line in NOTES:
        layout.bullet(line, indent=NOTE_INDENT * note_depth(line))


def write_booking_pdf(sink: BinaryIO, image_url: str, record: BookingRecord = SAMPLE_BOOKING) -> None:
    """
    Best-effort render into `sink` (anything with .write()).
    A failure while drawing content is logged and replaced by a centred error
    line; the document is always finalized. The sink is not closed.
    """
    layout = _booking_layout(sink)
    try:
        _compose_booking(layout, image_url, record)
    except Exception:
        logger.exception("booking confirmation render failed url=%s", image_url)
        layout.fill(ERROR).font(_FONT_ERROR, T_ERROR).centred_line(BOOKING_ERROR)
    layout.save()


def build_booking_pdf(image_url: str, record: BookingRecord = SAMPLE_BOOKING) -> bytes:
    """
    Render the confirmation into memory, e.g. for an email attachment.
    Unlike write_booking_pdf, failures propagate; no partial document is returned.
    """
    buf = BytesIO()
    layout = _booking_layout(buf)
    _compose_booking(layout, image_url, record)
    layout.save()
    return buf.getvalue()


# =====================================================================
# IMAGE DEMO
# =====================================================================

def write_demo_pdf(sink: BinaryIO, image_url: str) -> None:
    """Centred image plus a headline; an error line instead if the fetch fails."""
    layout = DocumentLayout(sink, pagesize=A4, margins=DEMO_MARGINS)
    try:
        image = fetch_image(image_url)
        layout.image(image, width=DEMO_IMAGE_W, y=DEMO_IMAGE_Y)
        layout.move_to(DEMO_TEXT_Y)
        layout.font("Helvetica", 24).text("Lorem ipsum", align="center")
    except Exception:
        logger.exception("demo pdf render failed url=%s", image_url)
        layout.font("Helvetica", 16).centred_line(DEMO_ERROR)
    layout.save()


# =====================================================================
# STREAMING
# =====================================================================

def _chunks(data: bytes, chunk_size: int) -> Iterator[bytes]:
    for start in range(0, len(data), chunk_size):
        yield data[start:start + chunk_size]


def iter_pdf(writer: Callable[..., None], *args, chunk_size: Optional[int] = None) -> Iterator[bytes]:
    """
    Run `writer(sink, *args)` now and return an iterator over the finished PDF
    in fixed-size chunks. The document is complete before the first chunk is
    handed out, so anything the writer raises surfaces here and never as a
    truncated body.
    """
    chunk_size = chunk_size or cfg()["CHUNK_SIZE"]
    buf = BytesIO()
    writer(buf, *args)
    return _chunks(buf.getvalue(), chunk_size)
