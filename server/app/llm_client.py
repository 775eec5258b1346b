# server/app/llm_client.py
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from app.config import DEFAULT_MODEL, DEFAULT_TIMEOUT, Settings
from app.errors import (
    UpstreamAuthError,
    UpstreamFormatError,
    UpstreamGenericError,
    UpstreamQuotaError,
)

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

logger = logging.getLogger("subtext-translator")

# httpx logs the full request URL at INFO, and the key travels in the query string
logging.getLogger("httpx").setLevel(logging.WARNING)


class LLMProvider(ABC):
    @abstractmethod
    async def complete(self, prompt: str, generation_config: Dict[str, Any]) -> str:
        """Send prompt and return the generated text."""
        ...


class GeminiClient(LLMProvider):
    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(settings.api_key, model=settings.model, timeout=settings.timeout)

    @property
    def url(self) -> str:
        return GEMINI_ENDPOINT.format(model=self.model)

    async def call_gemini_raw(self, prompt: str, generation_config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Call the Gemini generateContent endpoint and return the parsed JSON response.
        Non-success statuses are mapped to caller-facing errors; the upstream body is only logged.
        """
        payload = {
            "contents": [
                {"parts": [{"text": prompt}]}
            ],
            "generationConfig": generation_config,
        }
        headers = {"Content-Type": "application/json"}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.post(self.url, params={"key": self.api_key}, json=payload, headers=headers)

        if not resp.is_success:
            logger.error("Gemini API error: %s %s", resp.status_code, resp.text)
            raise _error_for_status(resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            logger.error("Gemini returned a non-JSON body (%d bytes)", len(resp.content))
            raise UpstreamFormatError(details=f"Response body is not JSON: {e}") from e

    async def complete(self, prompt: str, generation_config: Dict[str, Any]) -> str:
        raw_resp = await self.call_gemini_raw(prompt, generation_config)
        return extract_candidate_text(raw_resp)


def _error_for_status(status: int) -> Exception:
    if status in (401, 403):
        return UpstreamAuthError()
    if status == 429:
        return UpstreamQuotaError()
    return UpstreamGenericError(message=f"AI service responded with status {status}")


def extract_candidate_text(resp: Any) -> str:
    """
    Join the text parts of the first candidate in a generateContent response.
    """
    candidates = resp.get("candidates") if isinstance(resp, dict) else None
    if not isinstance(candidates, list) or not candidates:
        details = "Response has no candidates"
        feedback = resp.get("promptFeedback") if isinstance(resp, dict) else None
        if isinstance(feedback, dict) and feedback.get("blockReason"):
            details = f"Prompt was blocked: {feedback['blockReason']}"
        logger.error("Invalid response format from Gemini API: %s", details)
        raise UpstreamFormatError(details=details)

    first = candidates[0] if isinstance(candidates[0], dict) else {}
    content = first.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None

    texts: List[str] = []
    for part in parts or []:
        if isinstance(part, dict) and isinstance(part.get("text"), str):
            texts.append(part["text"])

    if not texts:
        finish = first.get("finishReason")
        details = "First candidate has no text"
        if finish:
            details = f"{details} (finishReason={finish})"
        logger.error("Invalid response format from Gemini API: %s", details)
        raise UpstreamFormatError(details=details)

    return "".join(texts)
