"""Language Detector — script-range classification of an utterance.

Scripts are tested in a fixed priority order and the first block with any
matching character wins. Mixed-script text therefore resolves to the
higher-priority script even when another script dominates.
"""

from __future__ import annotations

import re

from krishi_sakhi.advisor.types import LanguageTag

# Priority order matters: first match wins
_SCRIPT_RANGES: tuple[tuple[LanguageTag, re.Pattern[str]], ...] = (
    (LanguageTag.MALAYALAM, re.compile(r"[\u0D00-\u0D7F]")),
    (LanguageTag.HINDI, re.compile(r"[\u0900-\u097F]")),  # Devanagari
    (LanguageTag.TAMIL, re.compile(r"[\u0B80-\u0BFF]")),
    (LanguageTag.ENGLISH, re.compile(r"[A-Za-z]")),  # Latin
)


def detect(text: str) -> LanguageTag:
    """Classify ``text`` by script. Never raises; unknown scripts → UNSPECIFIED."""
    for tag, pattern in _SCRIPT_RANGES:
        if pattern.search(text):
            return tag
    return LanguageTag.UNSPECIFIED
