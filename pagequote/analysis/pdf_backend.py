"""PDF backend: the one full-document parser the deep pass relies on.

Wraps PyMuPDF behind a small capability interface::

    backend = get_pdf_backend()
    doc = backend.open(buffer)
    doc.page_count
    page = doc.page(0)
    page.get_text()            → str
    page.get_operation_list()  → list[str] of operation tags

Operation tags
--------------
MuPDF interprets the page (content stream, form XObjects, resource names)
and reports what it draws; get_operation_list() turns that report into
tags:

    text span (get_texttrace)          → showText
    vector path (get_drawings)         → constructPath, then one of
                                         fill eoFill stroke fillStroke
                                         eoFillStroke
    image XObject (get_image_info)     → paintImage
    inline image  (get_image_info)     → paintInlineImage

Annotation appearances (ink signatures, stamps, drawn markup) are part of
what a viewer paints, so a page carrying annotations is inspected through a
one-page copy with its annotations baked into the content.

Tags are grouped by kind, not in painting order.

Thread safety
-------------
MuPDF is not thread-safe.  The backend serializes every MuPDF call behind
one lock; callers never touch fitz objects directly.  get_pdf_backend()
initialises the singleton exactly once, even under concurrent first calls.
"""
from __future__ import annotations

import logging
import threading
from typing import Any

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)

# (path type, even-odd rule) → paint tag
_PAINT_TAGS: dict[tuple[str, bool], str] = {
    ("f", False): "fill",
    ("f", True): "eoFill",
    ("s", False): "stroke",
    ("s", True): "stroke",
    ("fs", False): "fillStroke",
    ("fs", True): "eoFillStroke",
}


def _path_tags(path: dict[str, Any]) -> list[str]:
    paint = _PAINT_TAGS.get((path.get("type"), bool(path.get("even_odd"))))
    return [] if paint is None else ["constructPath", paint]


def page_operations(page: fitz.Page) -> list[str]:
    """Return the operation tags of a fitz page's own painting."""
    ops = ["showText" for _ in page.get_texttrace()]
    for path in page.get_drawings():
        ops.extend(_path_tags(path))
    for info in page.get_image_info(xrefs=True):
        ops.append("paintImage" if info.get("xref") else "paintInlineImage")
    return ops


class PdfPage:
    """One page of an open PdfDocument."""

    def __init__(self, page: fitz.Page, lock: threading.RLock) -> None:
        self._page = page
        self._lock = lock

    def get_text(self) -> str:
        with self._lock:
            return self._page.get_text()

    def get_operation_list(self) -> list[str]:
        """Return the operation tags of the page, annotations included."""
        with self._lock:
            if self._page.first_annot is None and self._page.first_widget is None:
                return page_operations(self._page)
            number = self._page.number
            with fitz.open() as flat:
                flat.insert_pdf(self._page.parent, from_page=number, to_page=number)
                flat.bake(annots=True, widgets=True)
                return page_operations(flat[0])


class PdfDocument:
    """An open PDF; release it with close() or a with-block."""

    def __init__(self, doc: fitz.Document, lock: threading.RLock) -> None:
        self._doc = doc
        self._lock = lock

    @property
    def page_count(self) -> int:
        with self._lock:
            return self._doc.page_count

    def page(self, index: int) -> PdfPage:
        """Return the page at 0-based *index*."""
        with self._lock:
            return PdfPage(self._doc.load_page(index), self._lock)

    def close(self) -> None:
        with self._lock:
            self._doc.close()

    def __enter__(self) -> PdfDocument:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class PdfBackend:
    """Opens in-memory PDFs with PyMuPDF.

    Construction quiets MuPDF's own stderr chatter; broken uploads are
    routine and are reported through logging instead.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        fitz.TOOLS.mupdf_display_errors(False)
        logger.info("PDF backend initialised (PyMuPDF %s)", fitz.VersionBind)

    def open(self, buffer: bytes) -> PdfDocument:
        """Open *buffer* as a PDF.  Raises on unreadable content."""
        with self._lock:
            doc = fitz.open(stream=bytes(buffer), filetype="pdf")
        return PdfDocument(doc, self._lock)


_backend: PdfBackend | None = None
_backend_lock = threading.Lock()


def get_pdf_backend() -> PdfBackend:
    """Return the process-wide PdfBackend, creating it on first use."""
    global _backend
    if _backend is None:
        with _backend_lock:
            if _backend is None:
                _backend = PdfBackend()
    return _backend
