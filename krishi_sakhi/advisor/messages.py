"""User-facing guidance for each outcome.

Messages are fixed strings: upstream failure detail is never echoed to the
end user.
"""

from __future__ import annotations

from krishi_sakhi.advisor.types import OutcomeKind, OutcomeResult

OUTCOME_MESSAGES: dict[OutcomeKind, str] = {
    OutcomeKind.THROTTLED: "Please wait a few seconds before sending another question.",
    OutcomeKind.RATE_LIMITED: "The advisor is receiving too many requests right now. Please wait a moment and try again.",
    OutcomeKind.QUOTA_EXCEEDED: "The advisor has reached its usage limit. Please try again later.",
    OutcomeKind.AUTH_FAILURE: "The advisor service credential was rejected. Please check the API key configuration.",
    OutcomeKind.ALL_MODELS_UNAVAILABLE: "The advisor service is currently unavailable. Please try again later.",
    OutcomeKind.UNKNOWN_FAILURE: "Something went wrong while fetching the advisor's response.",
}


def user_message(result: OutcomeResult) -> str:
    """Text to render for ``result``: the reply itself on success, guidance otherwise."""
    if result.ok:
        return result.text
    return OUTCOME_MESSAGES[result.kind]
