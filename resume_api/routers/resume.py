# resume_api/routers/resume.py
import logging
from typing import Any, Dict, Tuple

from fastapi import APIRouter, Depends, Request, Response
from starlette.datastructures import UploadFile

from resume_api.config import Settings, get_settings
from resume_api.constants import (
    GENERIC_ERROR_MESSAGE,
    RESUME_FIELD_NAME,
    SPAM_RESPONSE_KEY,
    SPAM_WARNING_MESSAGE,
)
from resume_api.dependencies import enforce_rate_limit, get_completion_client
from resume_api.exceptions import (
    NoFileError,
    ResumeParseError,
    SchemaValidationError,
)
from resume_api.models import (
    ErrorResponse,
    SpamWarningResponse,
    is_flagged_spam,
    validate_resume_record,
)
from resume_api.services.completion_service import CompletionClient
from resume_api.services.text_extractor import extract_text_async

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_single_upload(request: Request) -> Tuple[bytes, str, str]:
    """
    Read the one file uploaded under the ``resume`` form field.

    Returns ``(content, media_type, filename)``. Raises ``NoFileError`` when the
    body is not a form, the field is missing or repeated, or a file arrives
    under any other field name.
    """
    try:
        async with request.form() as form:
            uploads = form.getlist(RESUME_FIELD_NAME)
            stray_files = [
                key
                for key, value in form.multi_items()
                if key != RESUME_FIELD_NAME and isinstance(value, UploadFile)
            ]
            if stray_files:
                raise NoFileError(f"Unexpected file field(s): {stray_files}")
            if len(uploads) != 1 or not isinstance(uploads[0], UploadFile):
                raise NoFileError(
                    f"Expected exactly one file in '{RESUME_FIELD_NAME}', "
                    f"got {len(uploads)} value(s)."
                )

            upload = uploads[0]
            content = await upload.read()
            return content, upload.content_type or "", upload.filename or ""
    except ResumeParseError:
        raise
    except Exception as e:
        raise NoFileError(f"Could not read multipart upload: {str(e)}") from e


@router.post(
    "/parse",
    dependencies=[Depends(enforce_rate_limit)],
    response_model=None,
    responses={
        200: {"description": "Parsed resume, or a spam warning", "model": SpamWarningResponse},
        429: {"description": "Too many requests from this client"},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def parse_resume_endpoint(
    request: Request,
    response: Response,
    completion_client: CompletionClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Upload a resume (PDF, DOCX or image) under the ``resume`` field and get
    the structured data back.
    """
    filename = ""
    try:
        content, media_type, filename = await read_single_upload(request)
        text = await extract_text_async(
            content,
            media_type,
            ocr_language=settings.ocr_language,
            timeout=settings.extraction_timeout_seconds,
        )
        parsed_resume = await completion_client.complete(text)
    except ResumeParseError as e:
        logger.error(
            "Resume parse failed for %r [%s]: %s", filename, type(e).__name__, e
        )
        response.status_code = 500
        return {"error": GENERIC_ERROR_MESSAGE}
    except Exception:
        logger.exception("Unexpected error while parsing resume %r", filename)
        response.status_code = 500
        return {"error": GENERIC_ERROR_MESSAGE}

    if is_flagged_spam(parsed_resume.get("spam")):
        logger.info("Resume %r flagged as spam", filename)
        return {SPAM_RESPONSE_KEY: SPAM_WARNING_MESSAGE}

    if settings.enforce_schema:
        try:
            validate_resume_record(parsed_resume)
        except SchemaValidationError as e:
            logger.warning("Resume %r rejected: %s %s", filename, e, e.errors)
            response.status_code = 502
            return {"error": GENERIC_ERROR_MESSAGE, "validation_errors": e.errors}

    return parsed_resume
