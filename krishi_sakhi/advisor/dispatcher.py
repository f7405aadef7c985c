"""Completion Dispatcher — ordered fallback cascade across model candidates.

For each candidate, in order:
  1. Send the composed request text via the completion client
  2. Success → return its text verbatim, try nothing further
  3. Failure → classify the detail:
       MODEL_NOT_FOUND → move on to the next candidate
       anything else   → abort and return that outcome

Rate-limit, quota and auth failures are account-level, so they are never
retried against other candidates. An empty list, or a list exhausted by
not-found failures, yields ALL_MODELS_UNAVAILABLE.

No exception escapes ``dispatch``: every failure becomes an OutcomeResult.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from krishi_sakhi.advisor.classifier import classify, failure_detail
from krishi_sakhi.advisor.completion_client import BaseCompletionClient
from krishi_sakhi.advisor.types import (
    FAILURE_OUTCOMES,
    CompletionRequest,
    FailureKind,
    OutcomeKind,
    OutcomeResult,
)
from krishi_sakhi.core.metrics import MODEL_ATTEMPTS

logger = logging.getLogger(__name__)


class CompletionDispatcher:
    """Runs one CompletionRequest through the model fallback cascade."""

    def __init__(self, client: BaseCompletionClient):
        self.client = client

    async def dispatch(self, request: CompletionRequest, candidates: Sequence[str]) -> OutcomeResult:
        attempted: list[str] = []
        prompt = request.text

        for model in candidates:
            attempted.append(model)
            try:
                text = await self.client.generate(model, prompt)
            except Exception as e:
                detail = failure_detail(e)
                kind = classify(detail)
                MODEL_ATTEMPTS.labels(model=model, result=kind.value).inc()

                if kind == FailureKind.MODEL_NOT_FOUND:
                    logger.info("Model %s unavailable, falling back: %s", model, detail)
                    continue

                outcome = FAILURE_OUTCOMES[kind]
                if outcome == OutcomeKind.UNKNOWN_FAILURE:
                    logger.error("Unclassified completion failure on %s: %s", model, detail)
                else:
                    logger.warning(
                        "Completion aborted on %s (%s): %s",
                        model,
                        kind.value,
                        detail,
                        extra={"outcome": outcome.value, "model": model},
                    )
                return OutcomeResult.failure(
                    outcome,
                    detail=detail,
                    attempted_models=tuple(attempted),
                    language=request.language,
                )

            MODEL_ATTEMPTS.labels(model=model, result="success").inc()
            return OutcomeResult.success(
                text,
                model=model,
                attempted_models=tuple(attempted),
                language=request.language,
            )

        logger.warning("No model candidate available (tried %s)", ", ".join(attempted) or "none")
        return OutcomeResult.failure(
            OutcomeKind.ALL_MODELS_UNAVAILABLE,
            attempted_models=tuple(attempted),
            language=request.language,
        )
