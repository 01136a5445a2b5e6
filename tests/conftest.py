"""
Shared fixtures.

Fonts are pinned to the Vera TTFs bundled with ReportLab so geometry is
stable whatever FONT_DIR holds, and every test that needs the logo patches
requests.get inside the fetcher.
"""
import os
from io import BytesIO
from unittest.mock import MagicMock, patch

import pytest
import reportlab
import requests
from PIL import Image
from pypdf import PdfReader
from reportlab.pdfgen.canvas import Canvas

LOGO_URL = "https://images.example.test/logo.png"
VERA_DIR = os.path.join(os.path.dirname(reportlab.__file__), "fonts")


@pytest.fixture(autouse=True)
def confirmations_settings(settings):
    settings.CONFIRMATIONS = {
        "LOGO_URL": LOGO_URL,
        "IMAGE_FETCH_TIMEOUT": None,
        "FONT_DIR": VERA_DIR,
        "FONTS": {"regular": "Vera.ttf", "semibold": "VeraBd.ttf", "bold": "VeraBd.ttf"},
        "CHUNK_SIZE": 1024,
    }
    return settings.CONFIRMATIONS


@pytest.fixture
def png_bytes():
    buf = BytesIO()
    Image.new("RGB", (120, 60), (30, 120, 80)).save(buf, format="PNG")
    return buf.getvalue()


def _response(content=b"", error=None):
    resp = MagicMock()
    resp.content = content
    if error is not None:
        resp.raise_for_status.side_effect = error
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def image_ok(png_bytes):
    with patch("confirmations.fetch.requests.get", return_value=_response(png_bytes)) as get:
        yield get


@pytest.fixture
def image_404():
    err = requests.HTTPError("404 Client Error: Not Found for url")
    with patch("confirmations.fetch.requests.get", return_value=_response(b"not found", err)) as get:
        yield get


@pytest.fixture
def read_pdf():
    """Return (text, page_count) for PDF bytes."""
    def _read(data: bytes):
        reader = PdfReader(BytesIO(data))
        text = "\n".join(page.extract_text() or "" for page in reader.pages)
        return text, len(reader.pages)
    return _read


@pytest.fixture
def drawn_strings():
    """Record (font, x, y, text) for every Canvas.drawString call."""
    calls = []
    original = Canvas.drawString

    def spy(self, x, y, text, *args, **kwargs):
        calls.append((self._fontname, round(x, 2), round(y, 2), text))
        return original(self, x, y, text, *args, **kwargs)

    with patch.object(Canvas, "drawString", spy):
        yield calls


@pytest.fixture
def drawn_lines():
    """Record (x1, y1, x2, y2) for every Canvas.line call."""
    calls = []
    original = Canvas.line

    def spy(self, x1, y1, x2, y2):
        calls.append((round(x1, 2), round(y1, 2), round(x2, 2), round(y2, 2)))
        return original(self, x1, y1, x2, y2)

    with patch.object(Canvas, "line", spy):
        yield calls


@pytest.fixture
def centred_strings():
    """Record (font, size, text) for every Canvas.drawCentredString call."""
    calls = []
    original = Canvas.drawCentredString

    def spy(self, x, y, text, *args, **kwargs):
        calls.append((self._fontname, self._fontsize, text))
        return original(self, x, y, text, *args, **kwargs)

    with patch.object(Canvas, "drawCentredString", spy):
        yield calls
