"""Pydantic schemas for the advice API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class AdviceRequest(BaseModel):
    """A single farmer utterance."""

    utterance: str = Field(min_length=1, max_length=4000, description="Question in any supported language")

    @field_validator("utterance")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("utterance must not be blank")
        return value


class AdviceResponse(BaseModel):
    """Rendered outcome of one advise() call."""

    outcome: str
    ok: bool
    text: str = Field("", description="Advisor reply (empty unless ok)")
    message: str = Field(description="Reply on success, user-facing guidance otherwise")
    language: str | None = None
    model: str = ""


class AdvisorStatus(BaseModel):
    configured: bool
    models: list[str]
    min_interval_ms: int
