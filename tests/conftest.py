"""Shared fixtures: in-memory sample documents and a stubbed completion client."""

from __future__ import annotations

import copy
import io
from typing import Any, Dict, Iterator

import fitz  # PyMuPDF
import pytest
from docx import Document as DocxDocument
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw, ImageFont

from resume_api.config import Settings, get_settings
from resume_api.dependencies import get_completion_client, get_rate_limiter
from resume_api.main import app
from resume_api.services.rate_limiter import FixedWindowRateLimiter

from tests.support import SAMPLE_RECORD, StubCompletionClient


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "Priya Raman", fontsize=16)
    page.insert_text((72, 100), "Backend Engineer at Northwind Logistics", fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data

@pytest.fixture
def sample_docx_bytes() -> bytes:
    document = DocxDocument()
    document.add_paragraph("Priya Raman")
    document.add_paragraph("Backend Engineer at Northwind Logistics")
    table = document.add_table(rows=1, cols=1)
    table.cell(0, 0).text = "Skills: Python, PostgreSQL"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()

@pytest.fixture
def sample_png_bytes() -> bytes:
    image = Image.new("RGB", (1000, 220), "white")
    draw = ImageDraw.Draw(image)
    draw.text((40, 60), "PRIYA RAMAN", fill="black", font=ImageFont.load_default(size=72))
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()

@pytest.fixture
def stub_completion() -> StubCompletionClient:
    return StubCompletionClient(result=SAMPLE_RECORD)

@pytest.fixture
def settings() -> Settings:
    return Settings(enforce_schema=True, extraction_timeout_seconds=30)

@pytest.fixture
def rate_limiter() -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(limit=10, window_seconds=60)

@pytest.fixture
def client(
    stub_completion: StubCompletionClient,
    settings: Settings,
    rate_limiter: FixedWindowRateLimiter,
) -> Iterator[TestClient]:
    app.dependency_overrides[get_completion_client] = lambda: stub_completion
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_record() -> Dict[str, Any]:
    return copy.deepcopy(SAMPLE_RECORD)
