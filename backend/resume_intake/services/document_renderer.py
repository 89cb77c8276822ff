"""
Document Renderer - converts an uploaded resume into a single AI-ready payload.

PDFs are rasterized page by page with PyMuPDF and stitched into one tall
JPEG so the model always receives one visual artifact per file. Images are
forwarded as-is and Word documents are reduced to plain text.
"""
import asyncio
import base64
import io
import logging
import mimetypes
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Union

import docx
import fitz  # PyMuPDF
from PIL import Image

from ..config import get_settings
from .errors import RenderError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)
settings = get_settings()

ProgressCallback = Callable[[int], None]

# Progress window owned by rendering; the remainder belongs to the AI call.
RENDER_PROGRESS_START = 5
RENDER_PROGRESS_END = 80

PDF_MIME_TYPE = "application/pdf"


# ============================================================================
# Inputs and payloads
# ============================================================================

@dataclass
class UploadedResume:
    """A file handle as received from the client."""
    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class ImagePayload:
    mime_type: str
    data: bytes

    @property
    def base64_data(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass
class TextPayload:
    text: str


DocumentPayload = Union[ImagePayload, TextPayload]


def resolve_content_type(filename: str, declared: Optional[str]) -> str:
    """Fall back to the file extension when the client sent no useful type."""
    if declared and declared != "application/octet-stream":
        return declared
    guessed, _ = mimetypes.guess_type(filename or "")
    return guessed or (declared or "")


def document_kind(content_type: str) -> str:
    """Classify a mime type as 'image', 'pdf' or 'docx'."""
    content_type = (content_type or "").lower()
    if content_type.startswith("image/"):
        return "image"
    if content_type == PDF_MIME_TYPE:
        return "pdf"
    if "wordprocessingml" in content_type or "msword" in content_type:
        return "docx"
    raise UnsupportedFileTypeError(content_type)


class _ProgressReporter:
    """Forwards only strictly increasing values to the observer."""

    def __init__(self, callback: Optional[ProgressCallback]):
        self._callback = callback
        self._last = -1

    def __call__(self, value: int) -> None:
        value = max(0, min(100, int(value)))
        if value <= self._last:
            return
        self._last = value
        if self._callback:
            self._callback(value)


# ============================================================================
# PDF helpers
# ============================================================================

def open_pdf(data: bytes) -> fitz.Document:
    try:
        return fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise RenderError(f"Could not open PDF: {e}") from e


def rasterize_page(document: fitz.Document, page_number: int, scale: float) -> Image.Image:
    """Render one 1-indexed page to an opaque RGB image."""
    page = document.load_page(page_number - 1)
    pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
    return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)


def stitch_vertically(pages: List[Image.Image]) -> Image.Image:
    """
    Stack pages top to bottom on a white canvas.

    Width is the widest page, height the sum of all page heights.
    """
    width = max(page.width for page in pages)
    height = sum(page.height for page in pages)
    composite = Image.new("RGB", (width, height), "white")
    offset = 0
    for page in pages:
        composite.paste(page, (0, offset))
        offset += page.height
    return composite


def encode_jpeg(image: Image.Image, quality: int) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def default_page_selection(page_count: int) -> List[int]:
    return list(range(1, page_count + 1))


def _selected_pages(pages: Optional[Iterable[int]], page_count: int) -> List[int]:
    if not pages:
        return default_page_selection(page_count)
    return sorted(set(int(p) for p in pages))


async def render_pdf(
    data: bytes,
    pages: Optional[Iterable[int]],
    report: ProgressCallback,
    scale: Optional[float] = None,
    quality: Optional[int] = None,
) -> ImagePayload:
    scale = scale or settings.pdf_render_scale
    quality = quality or settings.composite_jpeg_quality

    document = open_pdf(data)
    try:
        page_count = len(document)
        selection = _selected_pages(pages, page_count)
        total = len(selection)
        span = RENDER_PROGRESS_END - RENDER_PROGRESS_START

        rendered: List[Image.Image] = []
        processed = 0
        for page_number in selection:
            if page_number < 1 or page_number > page_count:
                continue  # Out-of-range pages are skipped silently
            try:
                image = await asyncio.to_thread(rasterize_page, document, page_number, scale)
            except Exception as e:
                logger.warning(f"Failed to rasterize page {page_number}: {e}")
                continue
            rendered.append(image)
            processed += 1
            report(RENDER_PROGRESS_START + round(processed / total * span))
    finally:
        document.close()

    if not rendered:
        raise RenderError("Could not render any PDF pages.")

    composite = await asyncio.to_thread(stitch_vertically, rendered)
    jpeg_bytes = await asyncio.to_thread(encode_jpeg, composite, quality)
    return ImagePayload(mime_type="image/jpeg", data=jpeg_bytes)


# ============================================================================
# Word documents
# ============================================================================

def extract_docx_text(data: bytes) -> str:
    """Extract paragraphs and table rows from a DOCX file."""
    try:
        document = docx.Document(io.BytesIO(data))
    except Exception as e:
        raise RenderError(f"Could not read Word document: {e}") from e

    lines = [para.text for para in document.paragraphs if para.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines).strip()


# ============================================================================
# Entry point
# ============================================================================

async def render_document(
    resume: UploadedResume,
    pages: Optional[Iterable[int]] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> DocumentPayload:
    """
    Produce the AI payload for one file.

    Progress starts at 5 and ends at 80. `pages` is a 1-indexed selection that
    only applies to PDFs; None or empty means every page.
    """
    report = _ProgressReporter(on_progress)
    kind = document_kind(resume.content_type)
    report(RENDER_PROGRESS_START)

    if kind == "image":
        payload = ImagePayload(mime_type=resume.content_type, data=resume.data)
    elif kind == "pdf":
        payload = await render_pdf(resume.data, pages, report)
    else:
        text = await asyncio.to_thread(extract_docx_text, resume.data)
        if not text:
            raise RenderError("Word document contains no extractable text.")
        payload = TextPayload(text=text)

    report(RENDER_PROGRESS_END)
    return payload


def count_pages(resume: UploadedResume) -> int:
    """Page count for PDFs; 0 for formats without pages."""
    if document_kind(resume.content_type) != "pdf":
        return 0
    document = open_pdf(resume.data)
    try:
        return len(document)
    finally:
        document.close()
