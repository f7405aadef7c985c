"""Prompt Composer — persona instructions + strict-language rule + utterance."""

from __future__ import annotations

from krishi_sakhi.advisor.types import CompletionRequest, LanguageTag

SYSTEM_PROMPT = """You are Krishi Sakhi, an intelligent farming advisor for Kerala smallholders. You are multilingual.

CRITICAL: Always respond in the EXACT SAME LANGUAGE that the user writes in. If the user writes in English, respond in English. If the user writes in Malayalam, respond in Malayalam. If the user writes in Hindi, respond in Hindi. If the user writes in Tamil, respond in Tamil. NEVER mix languages in your response.

For any farming management advice, provide:

Short, actionable steps

A confidence score (0–100%)

One relevant follow-up question if necessary

Maintain a friendly, knowledgeable personality in every language. Never switch to another language unless the user does."""


def language_directive(tag: LanguageTag) -> str:
    """Strict-language rule for ``tag``; follows (never locks) a later language switch."""
    lang = tag.display_name
    return (
        f"STRICT LANGUAGE RULE: The user's language is {lang}. "
        f"You must respond ONLY in {lang}. Do not translate or mix languages. "
        "If the user switches language later, follow the new language."
    )


def compose(base_instructions: str, tag: LanguageTag, utterance: str) -> CompletionRequest:
    """Build the request for one accepted call. The utterance is passed through verbatim."""
    return CompletionRequest(
        system_instruction=base_instructions,
        language_directive=language_directive(tag),
        utterance=utterance,
        language=tag,
    )
