# resume_api/services/text_extractor.py

import asyncio
import io
import logging
from typing import Optional

import fitz  # PyMuPDF
import pytesseract
from docx import Document as DocxDocument
from PIL import Image

from resume_api.constants import (
    DOCX_MEDIA_TYPE,
    IMAGE_MEDIA_TYPE_PREFIX,
    PDF_MEDIA_TYPE,
)
from resume_api.exceptions import ExtractionError, UnsupportedTypeError

logger = logging.getLogger(__name__)


def normalize_media_type(media_type: Optional[str]) -> str:
    """Lower-case a media type and drop any parameters (``; charset=...``)."""
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


def is_supported_media_type(media_type: Optional[str]) -> bool:
    file_type = normalize_media_type(media_type)
    return file_type in (PDF_MEDIA_TYPE, DOCX_MEDIA_TYPE) or file_type.startswith(
        IMAGE_MEDIA_TYPE_PREFIX
    )


def extract_text_from_pdf(pdf_bytes: bytes) -> str:
    try:
        with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
            return "\n".join(page.get_text("text") for page in doc)
    except Exception as e:
        raise ExtractionError(f"Error processing PDF with PyMuPDF: {str(e)}") from e


def extract_text_from_docx(docx_bytes: bytes) -> str:
    try:
        doc = DocxDocument(io.BytesIO(docx_bytes))
    except Exception as e:
        raise ExtractionError(f"Error processing DOCX: {str(e)}") from e

    parts = [paragraph.text for paragraph in doc.paragraphs]
    # Resumes laid out in tables keep their text in cells, not body paragraphs
    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                if cell.text:
                    parts.append(cell.text)
    return "\n".join(parts)


def extract_text_from_image(
    image_bytes: bytes, language: str = "eng", timeout: float = 0
) -> str:
    """
    OCR an image with Tesseract.

    pytesseract runs a fresh ``tesseract`` process per call, so nothing is
    shared between requests. A positive ``timeout`` kills that process once
    it runs for longer than ``timeout`` seconds; 0 means no limit.
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as image:
            image.load()
            return pytesseract.image_to_string(image, lang=language, timeout=timeout)
    except pytesseract.TesseractError as e:
        raise ExtractionError(f"Error running OCR on image: {str(e)}") from e
    except RuntimeError as e:
        # pytesseract raises a bare RuntimeError when it kills tesseract
        raise ExtractionError(f"OCR timed out after {timeout} seconds") from e
    except Exception as e:
        raise ExtractionError(f"Error running OCR on image: {str(e)}") from e


def extract_text(
    buffer: bytes,
    media_type: Optional[str],
    ocr_language: str = "eng",
    ocr_timeout: float = 0,
) -> str:
    """
    Extract plain text from an uploaded document.

    Dispatches on the declared media type: PDF text layer, DOCX body text,
    or OCR for any ``image/*`` type. Anything else raises
    ``UnsupportedTypeError`` without touching the bytes.
    """
    file_type = normalize_media_type(media_type)

    if file_type == PDF_MEDIA_TYPE:
        text = extract_text_from_pdf(buffer)
    elif file_type == DOCX_MEDIA_TYPE:
        text = extract_text_from_docx(buffer)
    elif file_type.startswith(IMAGE_MEDIA_TYPE_PREFIX):
        text = extract_text_from_image(
            buffer, language=ocr_language, timeout=ocr_timeout
        )
    else:
        raise UnsupportedTypeError(media_type)

    if not text.strip():
        logger.warning("No text extracted from %s upload (%d bytes)", file_type, len(buffer))
    else:
        logger.info("Extracted %d characters from %s upload", len(text), file_type)
    return text


async def extract_text_async(
    buffer: bytes,
    media_type: Optional[str],
    ocr_language: str = "eng",
    timeout: Optional[float] = None,
) -> str:
    """Run ``extract_text`` in a worker thread, bounded by ``timeout`` seconds."""
    # Reject unsupported types before spending a thread on them
    if not is_supported_media_type(media_type):
        raise UnsupportedTypeError(media_type)

    try:
        return await asyncio.wait_for(
            asyncio.to_thread(
                extract_text, buffer, media_type, ocr_language, timeout or 0
            ),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        raise ExtractionError(
            f"Text extraction timed out after {timeout} seconds"
        ) from e
