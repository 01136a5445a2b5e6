# views.py
import json
import logging

from django.http import StreamingHttpResponse
from rest_framework import renderers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.negotiation import BaseContentNegotiation
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .conf import cfg
from .pdf import iter_pdf, write_booking_pdf, write_demo_pdf
from .records import SAMPLE_BOOKING

log = logging.getLogger("confirmations")

DEMO_FILENAME = "document.pdf"
BOOKING_FILENAME = "booking-confirmation.pdf"


def _dbg(*args, **kwargs):
    """
    Flexible debug logger:
      - _dbg("TAG", key=val, ...)
      - _dbg(key=val, ...)
    Never raises.
    """
    try:
        tag = args[0] if args else kwargs.pop("tag", None)
        payload = {"tag": tag} if tag is not None else {}
        payload.update(kwargs)
        log.debug(json.dumps(payload, default=str))
    except Exception:
        pass


class PassthroughPDFRenderer(renderers.BaseRenderer):
    """
    Accepts Accept: application/pdf so DRF doesn't 406 before our view runs.
    The views return a StreamingHttpResponse, so this is a no-op renderer.
    """
    media_type = "application/pdf"
    format = "pdf"
    charset = None
    render_style = "binary"

    def render(self, data, accepted_media_type=None, renderer_context=None):
        return data


class IgnoreClientContentNegotiation(BaseContentNegotiation):
    """
    The PDF routes answer with the same document whatever the client asks
    for, so the Accept header never leads to a 406.
    """
    def select_parser(self, request, parsers):
        return parsers[0]

    def select_renderer(self, request, renderers, format_suffix=None):
        return (renderers[0], renderers[0].media_type)


def _inline_pdf(chunks, filename: str) -> StreamingHttpResponse:
    resp = StreamingHttpResponse(chunks, content_type="application/pdf")
    resp["Content-Disposition"] = f"inline; filename={filename}"
    return resp


@api_view(["GET"])
@permission_classes([AllowAny])
def health(request):
    return Response({"ok": True})


class InlinePDFView(APIView):
    """Read-only, unauthenticated, always application/pdf."""
    http_method_names = ["get", "head", "options"]
    authentication_classes = []
    permission_classes = [AllowAny]
    renderer_classes = [PassthroughPDFRenderer, renderers.JSONRenderer]
    content_negotiation_class = IgnoreClientContentNegotiation


# ---------- Demo page (image + headline) ----------

class GeneratePDFView(InlinePDFView):

    def get(self, request):
        conf = cfg()
        _dbg("DEMO:ENTRY", path=request.get_full_path(), image_url=conf["LOGO_URL"])
        # Content failures end up inside the PDF; the status is always 200.
        chunks = iter_pdf(write_demo_pdf, conf["LOGO_URL"], chunk_size=conf["CHUNK_SIZE"])
        return _inline_pdf(chunks, DEMO_FILENAME)


# ---------- Booking confirmation ----------

class BookingConfirmationPDFView(InlinePDFView):

    def get(self, request):
        conf = cfg()
        _dbg("BOOKING:ENTRY",
             path=request.get_full_path(),
             image_url=conf["LOGO_URL"],
             event=SAMPLE_BOOKING.event_name)
        chunks = iter_pdf(write_booking_pdf, conf["LOGO_URL"], SAMPLE_BOOKING, chunk_size=conf["CHUNK_SIZE"])
        return _inline_pdf(chunks, BOOKING_FILENAME)
