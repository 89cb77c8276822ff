"""Tests for turning uploads into AI payloads."""
import io

import fitz
import pytest
from PIL import Image

from resume_intake.services.document_preview import inspect_document
from resume_intake.services.document_renderer import (
    ImagePayload,
    TextPayload,
    UploadedResume,
    count_pages,
    document_kind,
    rasterize_page,
    render_document,
    render_pdf,
    resolve_content_type,
    stitch_vertically,
)
from resume_intake.services.errors import RenderError, UnsupportedFileTypeError

from conftest import DOCX_TYPE, PDF_TYPE, make_docx, make_pdf


def _page_heights(data, pages, scale):
    document = fitz.open(stream=data, filetype="pdf")
    try:
        return [rasterize_page(document, p, scale).height for p in pages]
    finally:
        document.close()


class TestDocumentKind:
    def test_kinds(self):
        assert document_kind("image/png") == "image"
        assert document_kind("application/pdf") == "pdf"
        assert document_kind(DOCX_TYPE) == "docx"
        assert document_kind("application/msword") == "docx"

    def test_unsupported(self):
        with pytest.raises(UnsupportedFileTypeError, match="Unsupported file type: text/plain"):
            document_kind("text/plain")

    def test_resolve_content_type_from_extension(self):
        assert resolve_content_type("cv.pdf", "application/octet-stream") == PDF_TYPE
        assert resolve_content_type("cv.pdf", None) == PDF_TYPE
        assert resolve_content_type("cv.png", "image/png") == "image/png"


class TestStitch:
    def test_width_is_max_and_height_is_sum(self):
        pages = [Image.new("RGB", (100, 50), "red"), Image.new("RGB", (80, 70), "blue")]
        composite = stitch_vertically(pages)
        assert composite.size == (100, 120)
        # narrower page leaves white background on the right
        assert composite.getpixel((95, 100)) == (255, 255, 255)


class TestRenderPdf:
    @pytest.mark.asyncio
    async def test_selected_pages_are_stacked(self):
        data = make_pdf(page_heights=(300, 400, 500))
        payload = await render_pdf(data, [1, 3], lambda value: None, scale=1.0)

        assert isinstance(payload, ImagePayload)
        assert payload.mime_type == "image/jpeg"
        image = Image.open(io.BytesIO(payload.data))
        assert image.format == "JPEG"
        assert image.height == sum(_page_heights(data, [1, 3], 1.0))

    @pytest.mark.asyncio
    async def test_out_of_range_pages_are_skipped(self):
        data = make_pdf(page_heights=(300, 400, 500))
        payload = await render_pdf(data, [1, 99], lambda value: None, scale=1.0)

        image = Image.open(io.BytesIO(payload.data))
        assert image.height == sum(_page_heights(data, [1], 1.0))

    @pytest.mark.asyncio
    async def test_no_renderable_pages(self):
        with pytest.raises(RenderError, match="Could not render any PDF pages."):
            await render_pdf(make_pdf(), [42], lambda value: None)

    @pytest.mark.asyncio
    async def test_corrupt_pdf(self):
        with pytest.raises(RenderError):
            await render_pdf(b"not a pdf", None, lambda value: None)


class TestRenderDocument:
    @pytest.mark.asyncio
    async def test_pdf_progress_is_monotonic_within_render_window(self, pdf_resume):
        seen = []
        payload = await render_document(pdf_resume, None, seen.append)

        assert isinstance(payload, ImagePayload)
        assert seen[0] == 5
        assert seen[-1] == 80
        assert seen == sorted(seen)
        assert len(seen) == len(set(seen))
        assert all(5 <= value <= 80 for value in seen)

    @pytest.mark.asyncio
    async def test_image_is_forwarded_unchanged(self, image_resume):
        payload = await render_document(image_resume)
        assert payload == ImagePayload(mime_type="image/png", data=image_resume.data)

    @pytest.mark.asyncio
    async def test_docx_becomes_text(self, docx_resume):
        payload = await render_document(docx_resume)
        assert isinstance(payload, TextPayload)
        assert "Jane Doe" in payload.text
        assert "Skills: Python, SQL" in payload.text

    @pytest.mark.asyncio
    async def test_empty_docx(self):
        resume = UploadedResume(name="blank.docx", content_type=DOCX_TYPE, data=make_docx())
        with pytest.raises(RenderError):
            await render_document(resume)

    @pytest.mark.asyncio
    async def test_unsupported_type(self):
        resume = UploadedResume(name="notes.txt", content_type="text/plain", data=b"hello")
        with pytest.raises(UnsupportedFileTypeError):
            await render_document(resume)

    def test_count_pages(self, pdf_resume, image_resume):
        assert count_pages(pdf_resume) == 3
        assert count_pages(image_resume) == 0


class TestInspectDocument:
    @pytest.mark.asyncio
    async def test_pdf_preview(self, pdf_resume):
        preview = await inspect_document(pdf_resume)
        assert preview.kind == "pdf"
        assert preview.page_count == 3
        assert preview.default_pages == [1, 2, 3]
        assert len(preview.thumbnails) == 3
        assert preview.thumbnail_mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_image_preview(self, image_resume):
        preview = await inspect_document(image_resume)
        assert preview.kind == "image"
        assert len(preview.thumbnails) == 1

    @pytest.mark.asyncio
    async def test_docx_preview(self, docx_resume):
        preview = await inspect_document(docx_resume)
        assert preview.kind == "docx"
        assert "Jane Doe" in preview.text
