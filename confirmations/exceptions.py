# exceptions.py


class PdfRenderError(Exception):
    """Base class for failures while producing a confirmation PDF."""


class ImageFetchError(PdfRenderError):
    """The header image could not be retrieved (DNS, timeout, non-2xx, empty body)."""


class FontLoadError(PdfRenderError):
    """A configured TTF file is missing or unreadable."""
