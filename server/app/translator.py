# server/app/translator.py
import logging
from typing import Any, Dict

from app.llm_client import LLMProvider
from app.prompts import TranslationVariant

logger = logging.getLogger("subtext-translator")


class TranslateHandler:
    """Builds the prompt for one text, makes one provider call and parses the answer."""

    def __init__(self, provider: LLMProvider, variant: TranslationVariant):
        self.provider = provider
        self.variant = variant

    async def translate(self, text: str) -> Dict[str, Any]:
        prompt = self.variant.build_prompt(text)
        logger.info("Translating %d chars (variant=%s)", len(text), self.variant.name)

        generated = await self.provider.complete(prompt, self.variant.generation_config)
        logger.info("Provider returned %d chars", len(generated))

        return self.variant.parse(generated)
