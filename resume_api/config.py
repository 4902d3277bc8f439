from functools import lru_cache
from typing import Any, List, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Completion service (any OpenAI-compatible chat completion endpoint)
    aiml_api_key: str = ""
    completion_base_url: str = "https://api.aimlapi.com/v1"
    completion_model: str = "gpt-4o"
    completion_max_tokens: int = 1500
    completion_temperature: float = 0.7
    completion_timeout_seconds: float = 60.0

    # Text extraction
    extraction_timeout_seconds: float = 60.0
    ocr_language: str = "eng"

    # Rate limiting for /api/parse
    rate_limit_requests: int = 10
    rate_limit_window_seconds: float = 60.0

    # Reject completions that do not match the resume schema
    enforce_schema: bool = True

    cors_origins: List[str] = ["*"]
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"
    port: int = 3000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_case_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
