# layout.py
from __future__ import annotations

import re
from dataclasses import dataclass
from io import BytesIO
from typing import BinaryIO, Iterable, List, Optional, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas


def hex_color(rgb: str) -> colors.Color:
    rgb = rgb.lstrip("#")
    r, g, b = tuple(int(rgb[i:i+2], 16) / 255 for i in (0, 2, 4))
    return colors.Color(r, g, b)


@dataclass(frozen=True)
class Margins:
    top: float
    bottom: float
    left: float
    right: float

    @classmethod
    def uniform(cls, value: float) -> "Margins":
        return cls(value, value, value, value)


BULLET_GAP = 12     # bullet dot -> text
BULLET_RADIUS = 1.8

_TOKENS = re.compile(r"\S+|\s+")


def text_width(text: str, font: str, size: float) -> float:
    return pdfmetrics.stringWidth(text or "", font, size)


def wrap_text(text: str, max_w: float, font: str, size: float) -> List[str]:
    """Simple word-wrap avoiding mid-word breaks."""
    words = (text or "").split()
    lines, cur = [], ""
    for w in words:
        cand = (cur + " " + w).strip()
        if text_width(cand, font, size) <= max_w or not cur:
            cur = cand
        else:
            lines.append(cur)
            cur = w
    if cur:
        lines.append(cur)
    return lines


class DocumentLayout:
    """
    Flowing layout on top of a ReportLab canvas.

    `y` is the cursor: distance in points from the TOP edge of the current
    page. Every drawing call starts at the cursor and moves it down; it never
    moves up within a page. When a line would cross into the bottom margin a
    new page is started (background repainted, font/colour restored) and the
    cursor goes back to the top margin.
    """

    def __init__(
        self,
        sink: BinaryIO,
        *,
        pagesize: Tuple[float, float] = A4,
        margins: Margins = Margins.uniform(72),
        background: Optional[colors.Color] = None,
    ):
        self.canvas = canvas.Canvas(sink, pagesize=pagesize, invariant=1)
        self.page_w, self.page_h = pagesize
        self.margins = margins
        self.background = background
        self.y = margins.top
        self._font: Tuple[str, float] = ("Helvetica", 12)
        self._color: colors.Color = colors.black
        self._paint_background()
        self._apply_style()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def left(self) -> float:
        return self.margins.left

    @property
    def right(self) -> float:
        return self.page_w - self.margins.right

    @property
    def content_width(self) -> float:
        return self.right - self.left

    @property
    def line_height(self) -> float:
        ascent, descent = pdfmetrics.getAscentDescent(*self._font)
        return ascent - descent

    def _baseline(self) -> float:
        """ReportLab y of the baseline for a line whose top sits at the cursor."""
        ascent, _ = pdfmetrics.getAscentDescent(*self._font)
        return self.page_h - self.y - ascent

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def font(self, name: str, size: Optional[float] = None) -> "DocumentLayout":
        self._font = (name, size if size is not None else self._font[1])
        self.canvas.setFont(*self._font)
        return self

    def fill(self, color: colors.Color) -> "DocumentLayout":
        self._color = color
        self.canvas.setFillColor(color)
        return self

    def _apply_style(self):
        self.canvas.setFont(*self._font)
        self.canvas.setFillColor(self._color)

    def _paint_background(self):
        if self.background is None:
            return
        self.canvas.saveState()
        self.canvas.setFillColor(self.background)
        self.canvas.rect(0, 0, self.page_w, self.page_h, stroke=0, fill=1)
        self.canvas.restoreState()

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------
    def move_down(self, lines: float = 1) -> "DocumentLayout":
        self.y += lines * self.line_height
        return self

    def move_to(self, y: float) -> "DocumentLayout":
        self.y = max(self.y, y)
        return self

    def new_page(self):
        self.canvas.showPage()
        self._paint_background()
        self._apply_style()
        self.y = self.margins.top

    def _ensure_room(self, height: float):
        limit = self.page_h - self.margins.bottom
        if self.y + height > limit and self.y > self.margins.top:
            self.new_page()

    # ------------------------------------------------------------------
    # Content blocks
    # ------------------------------------------------------------------
    def image(self, data: bytes, *, width: float, y: float, x: Optional[float] = None) -> float:
        """
        Draw image bytes `width` points wide (aspect kept) with its top edge at `y`.
        x=None centres it horizontally. Returns the drawn height.
        """
        img = ImageReader(BytesIO(data))
        iw, ih = img.getSize()
        height = width * ih / float(iw)
        if x is None:
            x = (self.page_w - width) / 2
        self.canvas.drawImage(img, x, self.page_h - y - height, width, height, mask="auto")
        self.y = max(self.y, y + height)
        return height

    def text(self, text: str, *, align: str = "left", indent: float = 0) -> "DocumentLayout":
        name, size = self._font
        x0 = self.left + indent
        max_w = self.right - x0
        for line in wrap_text(text, max_w, name, size) or [""]:
            self._ensure_room(self.line_height)
            if align == "center":
                self.canvas.drawCentredString(x0 + max_w / 2.0, self._baseline(), line)
            else:
                self.canvas.drawString(x0, self._baseline(), line)
            self.y += self.line_height
        return self

    def centred_line(self, text: str, *, min_size: float = 6) -> "DocumentLayout":
        """
        A single centred line that is never wrapped: the font size steps down
        until the text fits between the margins.
        """
        name, size = self._font
        while size > min_size and text_width(text, name, size) > self.content_width:
            size -= 0.5
        self.font(name, size)
        self._ensure_room(self.line_height)
        self.canvas.drawCentredString(self.left + self.content_width / 2.0, self._baseline(), text)
        self.y += self.line_height
        return self

    def text_runs(self, runs: Iterable[Tuple[str, str]]) -> "DocumentLayout":
        """
        One flowing line built from (text, font) runs drawn back to back.
        Runs share the current size; overflow continues at the left margin.
        """
        name, size = self._font
        self._ensure_room(self.line_height)
        x = self.left
        for text, run_font in runs:
            start, pending = x, ""
            for token in _TOKENS.findall(text or ""):
                w = text_width(token, run_font, size)
                if x + w > self.right and x > self.left:
                    self._draw_run(start, pending, run_font, size)
                    self.y += self.line_height
                    self._ensure_room(self.line_height)
                    start, pending, x = self.left, "", self.left
                    if token.isspace():
                        continue
                pending += token
                x += w
            self._draw_run(start, pending, run_font, size)
        self.canvas.setFont(name, size)
        self.y += self.line_height
        return self

    def _draw_run(self, x: float, text: str, font: str, size: float):
        if not text:
            return
        self.canvas.setFont(font, size)
        self.canvas.drawString(x, self._baseline(), text)

    def bullet(self, text: str, *, indent: float = 0) -> "DocumentLayout":
        name, size = self._font
        dot_x = self.left + indent
        text_x = dot_x + BULLET_GAP
        lines = wrap_text(text, self.right - text_x, name, size) or [""]
        for i, line in enumerate(lines):
            self._ensure_room(self.line_height)
            baseline = self._baseline()
            if i == 0:
                self.canvas.circle(dot_x + BULLET_RADIUS, baseline + size * 0.3,
                                   BULLET_RADIUS, stroke=0, fill=1)
            self.canvas.drawString(text_x, baseline, line)
            self.y += self.line_height
        return self

    def rule(self, color: colors.Color, width: float = 1) -> "DocumentLayout":
        """Full-line gap, then a horizontal rule from margin to margin at the cursor."""
        self.move_down(1)
        self._ensure_room(width)
        y = self.page_h - self.y
        self.canvas.saveState()
        self.canvas.setStrokeColor(color)
        self.canvas.setLineWidth(width)
        self.canvas.line(self.left, y, self.right, y)
        self.canvas.restoreState()
        return self

    def save(self):
        self.canvas.save()

