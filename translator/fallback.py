from __future__ import annotations

import asyncio
from typing import List, Sequence

from loguru import logger

from config import SETTINGS, PipelineSettings
from utils.rate_limit import SlidingWindowRateLimiter

from .base import BaseTranslator
from .cancellation import CancellationToken
from .errors import RateLimitedError, TranslationError


class FallbackRetrier:
    """Translates a batch one string at a time when the combined call can't be trusted.

    Always yields exactly one result per input; a string that cannot be
    translated comes back unchanged.
    """

    def __init__(
        self,
        translator: BaseTranslator,
        rate_limiter: SlidingWindowRateLimiter,
        settings: PipelineSettings | None = None,
    ) -> None:
        self.translator = translator
        self.rate_limiter = rate_limiter
        self.settings = settings or SETTINGS.pipeline

    async def translate_each(
        self,
        texts: Sequence[str],
        source_lang: str,
        target_lang: str,
        token: CancellationToken,
    ) -> List[str]:
        paced = len(texts) > self.settings.fallback_pacing_threshold
        results: List[str] = []
        for text in texts:
            results.append(await self._translate_one(text, source_lang, target_lang, token))
            if paced:
                await token.sleep(self.settings.fallback_pacing_delay)
        translated = sum(1 for src, dst in zip(texts, results) if src != dst)
        logger.debug("Fallback translated {}/{} texts individually", translated, len(texts))
        return results

    async def _translate_one(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        token: CancellationToken,
    ) -> str:
        await self.rate_limiter.wait_for_admission(token)
        self.rate_limiter.record()
        try:
            return await self.translator.translate_text(text, source_lang, target_lang)
        except asyncio.CancelledError:
            raise
        except RateLimitedError:
            logger.warning("Rate limited during fallback, keeping original text")
            await token.sleep(self.settings.rate_limit_delay)
        except TranslationError as exc:
            logger.debug("Fallback translation failed, keeping original text: {}", exc)
        return text
