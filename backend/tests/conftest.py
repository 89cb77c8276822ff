"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- A fake structured generator standing in for Gemini
- Real PDF / PNG / DOCX documents built in memory
- FastAPI test client bound to an isolated screening session
"""
import io
import json

import docx
import fitz
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from resume_intake.main import app
from resume_intake.schemas.extraction import RESUME_SCHEMA
from resume_intake.services.document_renderer import UploadedResume
from resume_intake.services.resume_parser import ResumeParser
from resume_intake.services.session import ScreeningSession, get_session

PDF_TYPE = "application/pdf"
DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class FakeGenerator:
    """
    Records every call and answers through `responder(prompt, schema, payload)`.
    A responder returning an exception instance makes the call raise it.
    """

    def __init__(self, responder):
        self.responder = responder
        self.calls = []

    async def generate_json(self, prompt, schema, payload=None):
        self.calls.append({"prompt": prompt, "schema": schema, "payload": payload})
        result = self.responder(prompt, schema, payload)
        if isinstance(result, Exception):
            raise result
        return result


def resume_json(**overrides) -> str:
    data = {
        "fullName": "Jane Doe",
        "email": "jane@x.com",
        "mobile": "98-76 543210",
        "dob": "1990-01-01",
        "currentCompany": "Acme",
        "designation": "Backend Engineer",
        "totalExperience": "5 years",
        "relevantExperience": "3 years 6 months",
        "skills": ["Python"],
        "currentCTC": "12 LPA",
        "expectedCTC": "15 LPA",
        "noticePeriod": "30 days",
        "highestQualification": "B.Tech",
        "educationField": "Computer Science",
        "currentLocation": "Pune",
    }
    data.update(overrides)
    return json.dumps(data)


def make_pdf(page_heights=(300, 400, 500), width=200) -> bytes:
    document = fitz.open()
    for number, height in enumerate(page_heights, start=1):
        page = document.new_page(width=width, height=height)
        page.insert_text((20, 40), f"Page {number}")
    data = document.tobytes()
    document.close()
    return data


def make_png(width=120, height=80) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), "navy").save(buffer, format="PNG")
    return buffer.getvalue()


def make_docx(*paragraphs) -> bytes:
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def pdf_resume():
    return UploadedResume(name="resume.pdf", content_type=PDF_TYPE, data=make_pdf())


@pytest.fixture
def image_resume():
    return UploadedResume(name="jane.png", content_type="image/png", data=make_png())


@pytest.fixture
def docx_resume():
    data = make_docx("Jane Doe", "Senior Engineer at Acme", "Skills: Python, SQL")
    return UploadedResume(name="jane.docx", content_type=DOCX_TYPE, data=data)


def default_responder(prompt, schema, payload):
    if schema is RESUME_SCHEMA:
        return resume_json()
    return json.dumps({"matchScore": 80, "matchReason": "Matches: Python."})


@pytest.fixture
def fake_generator():
    return FakeGenerator(default_responder)


@pytest.fixture
def session(fake_generator):
    parser = ResumeParser(fake_generator, max_retries=0, retry_delay=0)
    return ScreeningSession(fake_generator, parser=parser)


@pytest.fixture
def client(session):
    """FastAPI test client with the session dependency overridden."""
    app.dependency_overrides[get_session] = lambda: session

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def wait_idle(client, session):
    """Block until every background parse started through the client is done."""
    def _wait():
        client.portal.call(session.queue.wait_idle)
    return _wait
