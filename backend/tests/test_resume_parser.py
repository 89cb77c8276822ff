"""Tests for single-file extraction."""
import json

import pytest

from resume_intake.schemas.extraction import RESUME_SCHEMA
from resume_intake.services.document_renderer import ImagePayload, TextPayload, UploadedResume
from resume_intake.services.errors import (
    AiUnavailableError,
    ExtractionError,
    InvalidAiResponseError,
    UnsupportedFileTypeError,
)
from resume_intake.services.resume_parser import (
    ResumeParser,
    normalize_mobile,
    parse_extraction_response,
)

from conftest import FakeGenerator, resume_json


def _parser(responder, **kwargs):
    generator = FakeGenerator(responder)
    kwargs.setdefault("max_retries", 0)
    kwargs.setdefault("retry_delay", 0)
    return ResumeParser(generator, **kwargs), generator


@pytest.mark.asyncio
async def test_image_resume_end_to_end(image_resume):
    parser, generator = _parser(lambda *args: resume_json())

    candidate = await parser.parse(image_resume)

    assert candidate.full_name == "Jane Doe"
    assert candidate.email == "jane@x.com"
    assert candidate.mobile == "9876543210"
    assert candidate.total_experience == 5.0
    assert candidate.relevant_experience == 3.5
    assert candidate.skills == ["Python"]
    assert candidate.file_name == "jane.png"
    assert candidate.is_shortlisted is False
    assert candidate.id
    assert candidate.match_score is None and candidate.match_reason is None

    call = generator.calls[0]
    assert call["schema"] is RESUME_SCHEMA
    assert call["payload"] == ImagePayload(mime_type="image/png", data=image_resume.data)


@pytest.mark.asyncio
async def test_each_parse_gets_a_fresh_id(image_resume):
    parser, _ = _parser(lambda *args: resume_json())
    first = await parser.parse(image_resume)
    second = await parser.parse(image_resume)
    assert first.id != second.id


@pytest.mark.asyncio
async def test_docx_is_sent_as_text(docx_resume):
    parser, generator = _parser(lambda *args: resume_json())
    await parser.parse(docx_resume)
    payload = generator.calls[0]["payload"]
    assert isinstance(payload, TextPayload)
    assert "Jane Doe" in payload.text


@pytest.mark.asyncio
async def test_progress_sequence(pdf_resume):
    parser, _ = _parser(lambda *args: resume_json())
    seen = []
    await parser.parse(pdf_resume, [2], seen.append)

    assert seen[0] == 5
    assert seen[-3:] == [80, 95, 100]
    assert seen == sorted(seen)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "raw",
    [
        "this is not json",
        "[1, 2, 3]",
        json.dumps({"fullName": "Jane Doe"}),  # required fields missing
        resume_json(skills="Python"),  # wrong type
        resume_json(mobile=None),
    ],
)
async def test_invalid_ai_responses(image_resume, raw):
    parser, _ = _parser(lambda *args: raw)

    with pytest.raises(ExtractionError) as exc_info:
        await parser.parse(image_resume)

    assert str(exc_info.value).startswith("AI processing failed: ")
    assert isinstance(exc_info.value.__cause__, InvalidAiResponseError)


@pytest.mark.asyncio
async def test_unsupported_file_never_reaches_the_model():
    parser, generator = _parser(lambda *args: resume_json())
    resume = UploadedResume(name="notes.txt", content_type="text/plain", data=b"hi")

    with pytest.raises(ExtractionError, match="Unsupported file type: text/plain") as exc_info:
        await parser.parse(resume)

    assert isinstance(exc_info.value.__cause__, UnsupportedFileTypeError)
    assert generator.calls == []


@pytest.mark.asyncio
async def test_transport_failure_is_retried(image_resume):
    attempts = []

    def flaky(*args):
        attempts.append(1)
        if len(attempts) == 1:
            return ConnectionError("reset by peer")
        return resume_json()

    parser, generator = _parser(flaky, max_retries=2)
    candidate = await parser.parse(image_resume)

    assert candidate.full_name == "Jane Doe"
    assert len(generator.calls) == 2


@pytest.mark.asyncio
async def test_retries_exhausted(image_resume):
    parser, generator = _parser(lambda *args: AiUnavailableError("quota exceeded"), max_retries=1)

    with pytest.raises(ExtractionError, match="quota exceeded"):
        await parser.parse(image_resume)
    assert len(generator.calls) == 2


@pytest.mark.asyncio
async def test_invalid_response_is_not_retried(image_resume):
    parser, generator = _parser(lambda *args: "oops", max_retries=3)
    with pytest.raises(ExtractionError):
        await parser.parse(image_resume)
    assert len(generator.calls) == 1


def test_code_fences_are_stripped():
    extraction = parse_extraction_response("```json\n" + resume_json() + "\n```")
    assert extraction.full_name == "Jane Doe"


def test_null_optional_fields_become_empty():
    extraction = parse_extraction_response(resume_json(dob=None, noticePeriod=None))
    assert extraction.dob == ""
    assert extraction.notice_period == ""


def test_invalid_response_keeps_raw_text():
    with pytest.raises(InvalidAiResponseError) as exc_info:
        parse_extraction_response("{broken")
    assert exc_info.value.raw_response == "{broken"


def test_normalize_mobile():
    assert normalize_mobile("+91 (987) 654-3210") == "919876543210"
    assert normalize_mobile("") == ""
