"""Advisor Service — the single entry point of the orchestration layer.

Pipeline per call:
  1. Configuration check (missing credential → ConfigurationError, fail fast)
  2. Throttle Gate (REJECTED → THROTTLED outcome, nothing is sent)
  3. Language Detector
  4. Prompt Composer
  5. Completion Dispatcher (model fallback cascade)

Usage:
    advisor = AdvisorService(api_key="...", model_candidates=["gemini-2.0-flash"])

    if advisor.is_configured():
        result = await advisor.advise("My paddy leaves are turning yellow")

Module-level ``advise()`` / ``is_configured()`` use a lazily created
process-wide instance built from ``settings``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from krishi_sakhi.advisor.completion_client import BaseCompletionClient, GeminiCompletionClient
from krishi_sakhi.advisor.dispatcher import CompletionDispatcher
from krishi_sakhi.advisor.errors import ConfigurationError
from krishi_sakhi.advisor.language import detect
from krishi_sakhi.advisor.prompts import SYSTEM_PROMPT, compose
from krishi_sakhi.advisor.throttle import ThrottleGate
from krishi_sakhi.advisor.types import OutcomeKind, OutcomeResult, ThrottleDecision
from krishi_sakhi.core.config import GEMINI_API_URL, settings
from krishi_sakhi.core.metrics import ADVICE_OUTCOMES

logger = logging.getLogger(__name__)


class AdvisorService:
    """Owns the Throttle Gate, the dispatcher and the model candidate list."""

    def __init__(
        self,
        api_key: str,
        model_candidates: Sequence[str],
        min_interval_ms: int = 3000,
        timeout_seconds: float = 60.0,
        api_url_template: str = GEMINI_API_URL,
        client: BaseCompletionClient | None = None,
        throttle: ThrottleGate | None = None,
        base_instructions: str = SYSTEM_PROMPT,
    ):
        """
        Args:
            api_key: Completion service credential (empty → not configured)
            model_candidates: Ordered fallback list, cheapest/fastest first
            min_interval_ms: Minimum spacing between accepted calls
            timeout_seconds: Transport timeout for the default Gemini client
            api_url_template: ``generateContent`` URL with a ``{model}`` placeholder
            client: Override the completion client (tests, other transports)
            throttle: Override the gate, e.g. to share one across services
            base_instructions: System instruction block placed before the language rule
        """
        self.api_key = api_key
        self.model_candidates = tuple(model_candidates)
        self.base_instructions = base_instructions
        self.throttle = throttle or ThrottleGate(min_interval_ms=min_interval_ms)
        self.client = client or GeminiCompletionClient(
            api_key=api_key, timeout=timeout_seconds, api_url_template=api_url_template
        )
        self.dispatcher = CompletionDispatcher(self.client)

    def is_configured(self) -> bool:
        return bool(self.api_key.strip())

    async def advise(self, utterance: str) -> OutcomeResult:
        """Run one utterance through the full pipeline.

        Raises:
            ConfigurationError: no credential configured (checked before anything else)
        """
        if not self.is_configured():
            raise ConfigurationError("Gemini API key is not configured. Set GEMINI_API_KEY.")

        if self.throttle.try_acquire() == ThrottleDecision.REJECTED:
            ADVICE_OUTCOMES.labels(outcome=OutcomeKind.THROTTLED.value).inc()
            logger.info(
                "Advice throttled (retry in %.0fms)",
                self.throttle.remaining_ms(),
                extra={"outcome": OutcomeKind.THROTTLED.value},
            )
            return OutcomeResult.failure(OutcomeKind.THROTTLED)

        language = detect(utterance)
        request = compose(self.base_instructions, language, utterance)
        result = await self.dispatcher.dispatch(request, self.model_candidates)

        ADVICE_OUTCOMES.labels(outcome=result.kind.value).inc()
        logger.info(
            "Advice %s (language=%s, model=%s, attempts=%d)",
            result.kind.value,
            language.value,
            result.model or "-",
            len(result.attempted_models),
            extra={
                "outcome": result.kind.value,
                "model": result.model,
                "language": language.value,
                "attempts": len(result.attempted_models),
            },
        )
        return result


_advisor: AdvisorService | None = None


def get_advisor() -> AdvisorService:
    global _advisor
    if _advisor is None:
        _advisor = AdvisorService(
            api_key=settings.gemini_api_key,
            model_candidates=settings.model_candidates,
            min_interval_ms=settings.min_interval_ms,
            timeout_seconds=settings.request_timeout_seconds,
            api_url_template=settings.gemini_api_url,
        )
    return _advisor


def reset_advisor() -> None:
    """Drop the process-wide instance (settings changed, tests)."""
    global _advisor
    _advisor = None


def is_configured() -> bool:
    return get_advisor().is_configured()


async def advise(utterance: str) -> OutcomeResult:
    return await get_advisor().advise(utterance)
