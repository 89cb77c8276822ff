"""
Resume Parser Service using Gemini for data extraction.
Renders the uploaded file into one payload, asks the model for a fixed JSON
schema and normalizes the answer into a typed Candidate.
"""
import asyncio
import json
import logging
import re
from typing import Iterable, Optional

from pydantic import ValidationError

from ..config import get_settings
from ..models import Candidate
from ..schemas.extraction import RESUME_SCHEMA, ResumeExtraction
from .document_renderer import ProgressCallback, UploadedResume, render_document
from .errors import ExtractionError, InvalidAiResponseError
from .experience import parse_experience
from .gemini_client import StructuredGenerator

logger = logging.getLogger(__name__)
settings = get_settings()


# ============================================================================
# Resume Parsing Prompt
# ============================================================================

RESUME_PARSER_PROMPT = """
You are an expert HR assistant specializing in parsing resumes.
Analyze the provided resume content (which could be an image or text) and extract the candidate's details.
Strictly follow the JSON schema provided.

Instructions for specific fields:
1. **Mobile Number**: Extract digits only. Remove spaces, brackets, hyphens. (e.g., "9876543210").
2. **Skills**: Identify and list all key technical skills (like Python, React, AWS) and soft skills (like Teamwork, Communication) as a flat list of strings.
3. **Experience**: Extract the exact text found (e.g., "5 years", "6 months", "2 years 4 months"). Do not convert to a number.
4. **General**: If a specific piece of information is not found, return an empty string "" for that field, or an empty list [] for the skills field. Do not make up information.
"""

PROGRESS_AI_DONE = 95
PROGRESS_DONE = 100


# ============================================================================
# Core Functions
# ============================================================================

def _strip_code_fences(text: str) -> str:
    """Clean up response if it has markdown code blocks."""
    text = text.strip()
    if text.startswith("```json"):
        text = text[7:]
    if text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_extraction_response(raw: str) -> ResumeExtraction:
    """Validate the model's raw JSON text against the extraction schema."""
    text = _strip_code_fences(raw or "")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response from Gemini: {e}\nRaw response: {raw}")
        raise InvalidAiResponseError(
            "The AI model returned an invalid data format. Please try again.", raw_response=raw
        ) from e

    if not isinstance(data, dict):
        logger.error(f"Gemini response is not a JSON object. Raw response: {raw}")
        raise InvalidAiResponseError("The AI model returned an unexpected data shape.", raw_response=raw)

    try:
        return ResumeExtraction.model_validate(data)
    except ValidationError as e:
        logger.error(f"Gemini response does not match the resume schema: {e}\nRaw response: {raw}")
        raise InvalidAiResponseError(
            f"The AI model response is missing or mistyped fields: {e.error_count()} error(s).",
            raw_response=raw,
        ) from e


def normalize_mobile(mobile: str) -> str:
    return re.sub(r"\D", "", mobile or "")


def build_candidate(extraction: ResumeExtraction, file_name: str) -> Candidate:
    """Post-process validated AI fields into a Candidate with a fresh id."""
    return Candidate(
        full_name=extraction.full_name,
        email=extraction.email,
        mobile=normalize_mobile(extraction.mobile),
        dob=extraction.dob,
        current_company=extraction.current_company,
        designation=extraction.designation,
        total_experience=parse_experience(extraction.total_experience),
        relevant_experience=parse_experience(extraction.relevant_experience),
        skills=list(extraction.skills),
        current_ctc=extraction.current_ctc,
        expected_ctc=extraction.expected_ctc,
        notice_period=extraction.notice_period,
        highest_qualification=extraction.highest_qualification,
        education_field=extraction.education_field,
        current_location=extraction.current_location,
        file_name=file_name,
        is_shortlisted=False,
    )


class ResumeParser:
    """
    Turns one uploaded file into one Candidate.

    AI transport failures are retried with a linear backoff; rendering errors
    and invalid responses are not. Every failure surfaces as ExtractionError.
    """

    def __init__(
        self,
        generator: StructuredGenerator,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ):
        self.generator = generator
        self.max_retries = settings.ai_max_retries if max_retries is None else max_retries
        self.retry_delay = settings.ai_retry_delay_sec if retry_delay is None else retry_delay

    async def _generate(self, payload) -> str:
        attempt = 0
        while True:
            try:
                return await self.generator.generate_json(RESUME_PARSER_PROMPT, RESUME_SCHEMA, payload)
            except Exception as e:
                if attempt >= self.max_retries:
                    raise
                attempt += 1
                logger.warning(f"Gemini call failed (attempt {attempt}/{self.max_retries + 1}): {e}")
                await asyncio.sleep(self.retry_delay * attempt)

    async def parse(
        self,
        resume: UploadedResume,
        pages: Optional[Iterable[int]] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Candidate:
        def report(value: int) -> None:
            if on_progress:
                on_progress(value)

        try:
            payload = await render_document(resume, pages, report)
            raw = await self._generate(payload)
            report(PROGRESS_AI_DONE)
            extraction = parse_extraction_response(raw)
            candidate = build_candidate(extraction, resume.name)
        except Exception as e:
            raise ExtractionError(f"AI processing failed: {e}") from e

        report(PROGRESS_DONE)
        return candidate
