"""Completion clients — the transport to the hosted completion service.

A client takes a model identifier and the composed prompt text and returns
the generated text, or raises ``CompletionServiceError`` whose message is
the failure detail the classifier inspects.

Gemini-specific behaviors:
  - Error bodies carry ``{"error": {"code", "message", "status"}}``; the detail
    is rendered as ``[<code> <status>] <message>`` so that NOT_FOUND,
    RESOURCE_EXHAUSTED, PERMISSION_DENIED etc. survive into classification
  - finishReason SAFETY / promptFeedback.blockReason → failure (no text)
  - The API key travels in the ``x-goog-api-key`` header, never in the URL
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

import httpx

from krishi_sakhi.advisor.errors import CompletionServiceError
from krishi_sakhi.core.config import GEMINI_API_URL
from krishi_sakhi.core.metrics import COMPLETION_DURATION

logger = logging.getLogger(__name__)


class BaseCompletionClient(ABC):
    """Base class for completion service clients."""

    @abstractmethod
    async def generate(self, model: str, prompt: str) -> str:
        """Return the generated text for ``prompt`` from ``model``."""
        ...


class GeminiCompletionClient(BaseCompletionClient):
    """Google Gemini ``generateContent`` client over httpx."""

    def __init__(self, api_key: str, timeout: float = 60.0, api_url_template: str = GEMINI_API_URL):
        self.api_key = api_key
        self.timeout = timeout
        self.api_url_template = api_url_template

    async def generate(self, model: str, prompt: str) -> str:
        url = self.api_url_template.format(model=model)
        payload = {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": prompt}],
                }
            ],
        }

        start = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(
                    url,
                    json=payload,
                    headers={
                        "x-goog-api-key": self.api_key,
                        "Content-Type": "application/json",
                    },
                )
        except httpx.TimeoutException as e:
            raise CompletionServiceError(
                f"Gemini timeout after {self.timeout}s", error_code="TIMEOUT"
            ) from e
        finally:
            COMPLETION_DURATION.labels(model=model).observe(time.monotonic() - start)

        if resp.status_code >= 400:
            raise self._error_from_response(resp)

        try:
            data = resp.json()
        except ValueError as e:
            raise CompletionServiceError(
                "Gemini returned a non-JSON body", status_code=resp.status_code
            ) from e

        return self._extract_text(data)

    @staticmethod
    def _error_from_response(resp: httpx.Response) -> CompletionServiceError:
        status = resp.reason_phrase
        message = ""
        try:
            body = resp.json()
        except ValueError:
            body = {}
        error = body.get("error", {}) if isinstance(body, dict) else {}
        if isinstance(error, dict):
            status = error.get("status") or status
            message = error.get("message", "")
        if not message:
            message = resp.text.strip()[:500]
        return CompletionServiceError(
            f"[{resp.status_code} {status}] {message}".rstrip(),
            status_code=resp.status_code,
            error_code=str(status),
        )

    @staticmethod
    def _extract_text(data: dict) -> str:
        candidates = data.get("candidates", [])
        if not candidates:
            block_reason = data.get("promptFeedback", {}).get("blockReason", "")
            if block_reason:
                raise CompletionServiceError(
                    f"Prompt was blocked due to {block_reason}", error_code=f"BLOCKED_{block_reason}"
                )
            raise CompletionServiceError("Gemini returned no candidates", error_code="EMPTY")

        candidate = candidates[0]
        finish_reason = candidate.get("finishReason", "")
        if finish_reason == "SAFETY":
            raise CompletionServiceError("Response was blocked due to SAFETY", error_code="SAFETY")

        parts = candidate.get("content", {}).get("parts", [])
        return "".join(p.get("text", "") for p in parts if "text" in p)
