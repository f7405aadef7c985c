"""
run_advisor.py — interactive smoke test of the Krishi Sakhi advisor

Reads questions from stdin and sends each through the full orchestration
layer (throttle → language detection → prompt → Gemini model fallback),
printing the reply or the user-facing guidance for failure outcomes.

Usage:
    GEMINI_API_KEY=... python run_advisor.py
    python run_advisor.py "എന്റെ നെല്ലിന് എന്ത് രോഗമാണ്?"
"""

import asyncio
import logging
import sys

from krishi_sakhi.advisor.errors import ConfigurationError
from krishi_sakhi.advisor.messages import user_message
from krishi_sakhi.advisor.service import advise, get_advisor, is_configured

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s: %(message)s",
)
logger = logging.getLogger("run_advisor")


async def ask(utterance: str) -> None:
    result = await advise(utterance)
    lang = result.language.value if result.language else "-"
    print(f"\n[{result.kind.value} | language={lang} | model={result.model or '-'}]")
    print(user_message(result))
    if result.detail:
        logger.info("Diagnostic detail: %s", result.detail)


async def main() -> int:
    if not is_configured():
        logger.error("GEMINI_API_KEY is not set (env or .env)")
        return 1

    logger.info("Models: %s", ", ".join(get_advisor().model_candidates))

    if len(sys.argv) > 1:
        await ask(" ".join(sys.argv[1:]))
        return 0

    print("Krishi Sakhi — ask a farming question (empty line to quit)")
    while True:
        try:
            line = input("\n> ")
        except EOFError:
            break
        if not line.strip():
            break
        try:
            await ask(line)
        except ConfigurationError as e:
            logger.error("%s", e)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
