"""
Preview data for the manual page-selection step.
"""
import asyncio
import base64
import io
from dataclasses import dataclass, field
from typing import List

from PIL import Image

from ..config import get_settings
from .document_renderer import (
    UploadedResume,
    default_page_selection,
    document_kind,
    encode_jpeg,
    extract_docx_text,
    open_pdf,
    rasterize_page,
)

settings = get_settings()


@dataclass
class DocumentPreview:
    kind: str
    page_count: int = 0
    default_pages: List[int] = field(default_factory=list)
    thumbnails: List[str] = field(default_factory=list)  # base64 encoded
    thumbnail_mime_type: str = ""
    text: str = ""


def _pdf_thumbnails(data: bytes, scale: float) -> List[str]:
    document = open_pdf(data)
    try:
        thumbnails = []
        for page_number in range(1, len(document) + 1):
            image = rasterize_page(document, page_number, scale)
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
            thumbnails.append(base64.b64encode(buffer.getvalue()).decode("ascii"))
        return thumbnails
    finally:
        document.close()


def _image_thumbnail(data: bytes, max_dimension: int, quality: int) -> str:
    image = Image.open(io.BytesIO(data))
    image = image.convert("RGB")
    # Downscale large images for preview to save memory
    image.thumbnail((max_dimension, max_dimension))
    return base64.b64encode(encode_jpeg(image, quality)).decode("ascii")


async def inspect_document(resume: UploadedResume) -> DocumentPreview:
    """Build the preview for the file currently awaiting page selection."""
    kind = document_kind(resume.content_type)

    if kind == "pdf":
        thumbnails = await asyncio.to_thread(
            _pdf_thumbnails, resume.data, settings.preview_thumbnail_scale
        )
        return DocumentPreview(
            kind=kind,
            page_count=len(thumbnails),
            default_pages=default_page_selection(len(thumbnails)),
            thumbnails=thumbnails,
            thumbnail_mime_type="image/png",
        )

    if kind == "image":
        thumbnail = await asyncio.to_thread(
            _image_thumbnail,
            resume.data,
            settings.preview_max_dimension,
            settings.preview_jpeg_quality,
        )
        return DocumentPreview(kind=kind, thumbnails=[thumbnail], thumbnail_mime_type="image/jpeg")

    text = await asyncio.to_thread(extract_docx_text, resume.data)
    return DocumentPreview(kind=kind, text=text)
