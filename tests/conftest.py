"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import asyncio
import io
import json
from typing import List, Optional

import pytest

from resume_checker.providers.types import GenerationConfig, LLMResponse, Message

SAMPLE_EVALUATION = {
    "atsScore": 78,
    "roleDetected": "Backend Engineer",
    "skills": {"matched": ["Python", "PostgreSQL"], "missing": ["Kubernetes"]},
    "analysis": {
        "summary": "Clear and concise.",
        "skillsSection": "Good coverage of core skills.",
        "experience": "Relevant backend roles.",
        "projects": "Could quantify impact.",
        "education": "Fine.",
        "formatting": "ATS friendly.",
        "keywords": "Add 'microservices'.",
    },
    "suggestions": ["Add Kubernetes experience", "Quantify achievements", "Tighten summary"],
}


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "GEMINI_API_KEY",
        "OPENAI_API_KEY",
        "DEEPSEEK_API_KEY",
        "KIMI_API_KEY",
        "PORT",
        "RESUME_CHECKER_PROVIDER",
        "RESUME_CHECKER_MODEL",
        "RESUME_CHECKER_API_BASE",
        "RESUME_CHECKER_UPLOAD_DIR",
    ):
        monkeypatch.delenv(key, raising=False)


class FakeProvider:
    """Provider double that returns canned text and records prompts."""

    model = "fake-model"

    def __init__(self, text: str = "", error: Optional[BaseException] = None, delay: float = 0.0):
        self.text = text or json.dumps(SAMPLE_EVALUATION)
        self.error = error
        self.delay = delay
        self.calls: List[List[Message]] = []

    async def generate(self, messages: List[Message], config: GenerationConfig) -> LLMResponse:
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return LLMResponse(text=self.text)


@pytest.fixture
def sample_evaluation() -> dict:
    return json.loads(json.dumps(SAMPLE_EVALUATION))


@pytest.fixture
def provider_factory():
    """Return the FakeProvider class for tests that need custom behavior."""
    return FakeProvider


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def pdf_factory():
    return make_pdf_bytes


@pytest.fixture
def docx_factory():
    return make_docx_bytes


def make_pdf_bytes(text: str) -> bytes:
    import fitz

    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def make_docx_bytes(paragraphs: List[str], table_rows: Optional[List[List[str]]] = None) -> bytes:
    from docx import Document

    doc = Document()
    for paragraph in paragraphs:
        doc.add_paragraph(paragraph)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row, values in zip(table.rows, table_rows):
            for cell, value in zip(row.cells, values):
                cell.text = value
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def pdf_bytes() -> bytes:
    return make_pdf_bytes("Jane Doe - Senior Python Developer")


@pytest.fixture
def docx_bytes() -> bytes:
    return make_docx_bytes(
        ["Jane Doe", "Senior Python Developer", ""],
        table_rows=[["Skills", "Python, FastAPI"]],
    )
