from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    EmailStr,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from resume_api.exceptions import SchemaValidationError


class ResumeSection(BaseModel):
    # Completions often carry extra keys; keep them and let them pass through.
    class Config:
        extra = "allow"


class PersonalInfo(ResumeSection):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    languages: Optional[Union[str, List[str]]] = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Education(ResumeSection):
    degree: Optional[str] = None
    university: Optional[str] = None
    year: Optional[Union[str, int]] = None


class WorkExperience(ResumeSection):
    job_title: Optional[str] = None
    company: Optional[str] = None
    duration: Optional[str] = None
    responsibilities: Optional[List[str]] = Field(default_factory=list)


class Skills(ResumeSection):
    technical: Optional[List[str]] = Field(default_factory=list)
    soft: Optional[List[str]] = Field(default_factory=list)


class Certification(ResumeSection):
    name: Optional[str] = None
    issuer: Optional[str] = None
    year: Any = None


class Project(ResumeSection):
    title: Optional[str] = None
    technology: Optional[Union[str, List[str]]] = None
    time_period: Any = None


class ResumeRecord(ResumeSection):
    """Structured resume as returned by the completion service."""

    personal_info: PersonalInfo
    education: Optional[List[Education]] = Field(default_factory=list)
    work_experience: Optional[List[WorkExperience]] = Field(default_factory=list)
    skills: Optional[Skills] = None
    certifications: Optional[List[Certification]] = Field(default_factory=list)
    projects: Optional[List[Project]] = Field(default_factory=list)
    spam: bool


class SpamWarningResponse(BaseModel):
    spanResume: str


class ErrorResponse(BaseModel):
    error: str
    validation_errors: Optional[List[Dict[str, Any]]] = None


_bool_adapter = TypeAdapter(bool)


def is_flagged_spam(value: Any) -> bool:
    """
    Normalise the completion's spam flag.

    Booleans are taken as-is. Strings and numbers go through pydantic's lax
    boolean parsing, so "true", "TRUE", "yes" and 1 all count as spam.
    Anything that cannot be read as a boolean counts as not spam.
    """
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        value = value.strip()
    try:
        return _bool_adapter.validate_python(value)
    except ValidationError:
        return False


def validate_resume_record(data: Any) -> ResumeRecord:
    """Check a parsed completion against the resume schema."""
    try:
        return ResumeRecord.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": [str(part) for part in err["loc"]],
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"Completion does not match the resume schema ({len(errors)} errors)",
            errors=errors,
        ) from e
