"""Error kinds raised along the resume parsing pipeline.

Every failure the request handler can hit is a ``ResumeParseError``. The kinds
stay distinct so they can be told apart in the server logs, even though the
caller only ever sees one generic message.
"""

from typing import Any, List, Optional


class ResumeParseError(Exception):
    """Base exception for all resume parsing failures."""

    pass


class NoFileError(ResumeParseError):
    """Raised when the request does not carry exactly one uploaded file."""

    pass


class UnsupportedTypeError(ResumeParseError):
    """Raised when the uploaded file's media type cannot be extracted."""

    def __init__(self, media_type: Optional[str]) -> None:
        super().__init__(f"Unsupported file type: {media_type!r}")
        self.media_type = media_type


class ExtractionError(ResumeParseError):
    """Raised when a decoder fails on the uploaded bytes or runs out of time."""

    pass


class UpstreamError(ResumeParseError):
    """Raised when the completion service cannot be reached or errors out."""

    pass


class MalformedResponseError(ResumeParseError):
    """Raised when the completion is not a JSON object."""

    def __init__(self, message: str, raw_response: Optional[str] = None) -> None:
        super().__init__(message)
        self.raw_response = raw_response


class SchemaValidationError(ResumeParseError):
    """Raised when a parsed completion does not match the resume schema."""

    def __init__(self, message: str, errors: Optional[List[Any]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []
