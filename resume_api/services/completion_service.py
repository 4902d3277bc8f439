import json
import logging
from typing import Any, Dict, Optional

from openai import AsyncOpenAI, OpenAIError

from resume_api.config import Settings
from resume_api.exceptions import MalformedResponseError, UpstreamError
from resume_api.services.resume_prompt import build_resume_prompt

logger = logging.getLogger(__name__)


class CompletionClient:
    """
    Turns resume text into a structured resume dict with one chat completion.

    The request is single-turn and is sent once: the SDK's own retries are
    disabled and the reply is parsed as-is, without stripping fences or
    repairing JSON.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str = "gpt-4o",
        max_tokens: int = 1500,
        temperature: float = 0.7,
        timeout: Optional[float] = 60.0,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        if not settings.aiml_api_key:
            logger.warning("AIML_API_KEY not set; completion calls will be rejected.")
        return cls(
            api_key=settings.aiml_api_key,
            base_url=settings.completion_base_url,
            model=settings.completion_model,
            max_tokens=settings.completion_max_tokens,
            temperature=settings.completion_temperature,
            timeout=settings.completion_timeout_seconds,
        )

    async def complete(self, resume_text: str) -> Dict[str, Any]:
        prompt = build_resume_prompt(resume_text)

        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except OpenAIError as e:
            raise UpstreamError(f"Completion request failed: {str(e)}") from e

        if not completion.choices:
            raise MalformedResponseError("Completion returned no choices.")

        content = completion.choices[0].message.content
        logger.debug("Completion response: %r", content)
        return parse_completion(content)

    async def close(self) -> None:
        await self._client.close()


def parse_completion(content: Optional[str]) -> Dict[str, Any]:
    """Parse the completion text as a JSON object, with no repair attempt."""
    if content is None:
        raise MalformedResponseError("Completion returned no content.")

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(
            f"Completion is not valid JSON: {e}", raw_response=content
        ) from e

    if not isinstance(parsed, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(parsed).__name__}.",
            raw_response=content,
        )
    return parsed
