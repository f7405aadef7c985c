"""Core types for the advisor orchestration layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class LanguageTag(str, Enum):
    """Script-derived language of an utterance."""

    MALAYALAM = "Malayalam"
    HINDI = "Hindi"
    TAMIL = "Tamil"
    ENGLISH = "English"
    UNSPECIFIED = "Unspecified"

    @property
    def display_name(self) -> str:
        """Name used inside the language directive sent to the model."""
        if self is LanguageTag.UNSPECIFIED:
            return "the user's language"
        return self.value


class ThrottleDecision(str, Enum):
    """Result of a Throttle Gate acquisition."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"


class FailureKind(str, Enum):
    """Classified upstream failure. Only MODEL_NOT_FOUND lets the cascade continue."""

    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"
    AUTH_FAILURE = "auth_failure"
    MODEL_NOT_FOUND = "model_not_found"
    UNKNOWN = "unknown"


class OutcomeKind(str, Enum):
    """Final outcome of one advise() call."""

    SUCCESS = "success"
    THROTTLED = "throttled"
    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"
    AUTH_FAILURE = "auth_failure"
    ALL_MODELS_UNAVAILABLE = "all_models_unavailable"
    UNKNOWN_FAILURE = "unknown_failure"


# Aborting failure kinds → final outcome (MODEL_NOT_FOUND never maps directly)
FAILURE_OUTCOMES: dict[FailureKind, OutcomeKind] = {
    FailureKind.RATE_LIMITED: OutcomeKind.RATE_LIMITED,
    FailureKind.QUOTA_EXCEEDED: OutcomeKind.QUOTA_EXCEEDED,
    FailureKind.AUTH_FAILURE: OutcomeKind.AUTH_FAILURE,
    FailureKind.UNKNOWN: OutcomeKind.UNKNOWN_FAILURE,
}


# ---------------------------------------------------------------------------
# Completion Request (input to the dispatcher)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CompletionRequest:
    """The composed payload for one accepted advise() call.

    Plain text, not a structured protocol: the three blocks are joined
    into a single prompt by ``text``.
    """

    system_instruction: str
    language_directive: str
    utterance: str
    language: LanguageTag = LanguageTag.UNSPECIFIED

    @property
    def text(self) -> str:
        return f"{self.system_instruction}\n\n{self.language_directive}\n\nUser: {self.utterance}"


# ---------------------------------------------------------------------------
# Outcome Result (the only value returned to callers)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OutcomeResult:
    """Tagged result of a full orchestration call.

    ``detail`` is kept for diagnostic logging only; it is never part of
    ``to_dict()`` and must not be shown to end users.
    """

    kind: OutcomeKind
    text: str = ""
    detail: str = ""
    model: str = ""  # Model that produced a successful reply
    attempted_models: tuple[str, ...] = field(default_factory=tuple)
    language: LanguageTag | None = None

    @property
    def ok(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    @classmethod
    def success(
        cls,
        text: str,
        model: str = "",
        attempted_models: tuple[str, ...] = (),
        language: LanguageTag | None = None,
    ) -> OutcomeResult:
        return cls(
            kind=OutcomeKind.SUCCESS,
            text=text,
            model=model,
            attempted_models=attempted_models,
            language=language,
        )

    @classmethod
    def failure(
        cls,
        kind: OutcomeKind,
        detail: str = "",
        attempted_models: tuple[str, ...] = (),
        language: LanguageTag | None = None,
    ) -> OutcomeResult:
        if kind == OutcomeKind.SUCCESS:
            raise ValueError("failure() requires a non-success outcome kind")
        return cls(kind=kind, detail=detail, attempted_models=attempted_models, language=language)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict (without diagnostic detail)."""
        return {
            "outcome": self.kind.value,
            "ok": self.ok,
            "text": self.text,
            "model": self.model,
            "attempted_models": list(self.attempted_models),
            "language": self.language.value if self.language else None,
        }
