"""Failure Classifier — maps upstream failure text onto FailureKind.

The completion service is an opaque dependency, so classification is a
case-insensitive substring match over the failure's textual detail,
checked in priority order:

  rate limit → quota → auth/key → model not found → unknown

Only MODEL_NOT_FOUND lets the dispatcher move on to the next candidate.
"""

from __future__ import annotations

import httpx

from krishi_sakhi.advisor.errors import CompletionServiceError
from krishi_sakhi.advisor.types import FailureKind

_RATE_LIMIT_MARKERS = ("rate limit", "rate-limit", "ratelimit", "too many requests")
_QUOTA_MARKERS = ("quota", "resource_exhausted", "resource has been exhausted")
_AUTH_MARKERS = (
    "api key",
    "api_key",
    "apikey",
    "unauthorized",
    "unauthenticated",
    "permission",
    "forbidden",
)
_NOT_FOUND_MARKERS = ("not found", "not_found")

# Order is the classification priority
_RULES: tuple[tuple[FailureKind, tuple[str, ...]], ...] = (
    (FailureKind.RATE_LIMITED, _RATE_LIMIT_MARKERS),
    (FailureKind.QUOTA_EXCEEDED, _QUOTA_MARKERS),
    (FailureKind.AUTH_FAILURE, _AUTH_MARKERS),
    (FailureKind.MODEL_NOT_FOUND, _NOT_FOUND_MARKERS),
)


def classify(detail: str) -> FailureKind:
    """Classify a failure detail string."""
    lowered = (detail or "").lower()
    for kind, markers in _RULES:
        if any(marker in lowered for marker in markers):
            return kind
    return FailureKind.UNKNOWN


def failure_detail(exc: BaseException) -> str:
    """Textual detail of any failure raised at the completion boundary."""
    if isinstance(exc, CompletionServiceError):
        return str(exc)
    if isinstance(exc, httpx.TimeoutException):
        return f"Completion request timed out: {exc}"
    if isinstance(exc, httpx.HTTPError):
        return f"Transport error ({type(exc).__name__}): {exc}"
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__
