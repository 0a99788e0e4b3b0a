from __future__ import annotations

from typing import Callable, List, Sequence

from loguru import logger

from config import SETTINGS, PipelineSettings, RetryPolicy
from utils.batching import build_batches
from utils.text import deduplicate_texts

from .base import BaseTranslator
from .cancellation import CancellationToken
from .dispatcher import BatchDispatcher
from .session import PipelineSession


ProgressCallback = Callable[[int, int], None]


class TranslationOrchestrator:
    def __init__(
        self,
        translator: BaseTranslator,
        session: PipelineSession | None = None,
        *,
        settings: PipelineSettings | None = None,
        retry_policy: RetryPolicy | None = None,
        source_lang: str | None = None,
    ) -> None:
        self.translator = translator
        self.session = session or PipelineSession()
        self.settings = settings or SETTINGS.pipeline
        self.source_lang = source_lang or SETTINGS.default_source_lang
        self.dispatcher = BatchDispatcher(
            translator,
            self.session.rate_limiter,
            self.settings,
            retry_policy or SETTINGS.retry,
        )

    @property
    def cache(self):
        return self.session.cache

    async def translate_batch(
        self,
        texts: Sequence[str],
        target_lang: str,
        *,
        source_lang: str | None = None,
        token: CancellationToken | None = None,
        progress_cb: ProgressCallback | None = None,
    ) -> List[str]:
        """Translate ``texts`` into ``target_lang`` keeping length and order.

        Raises ``TranslationCancelled`` if ``token`` fires; every other failure
        degrades to the original text for the affected positions.
        """
        if not texts:
            return []
        token = token or CancellationToken()
        source = source_lang or self.source_lang
        dedup = deduplicate_texts(texts)
        unique = dedup.unique_texts

        resolved: List[str | None] = [None] * len(unique)
        pending_texts: List[str] = []
        pending_indices: List[int] = []
        for idx, text in enumerate(unique):
            cached = self.cache.get(target_lang, text)
            if cached is not None:
                resolved[idx] = cached
            else:
                pending_texts.append(text)
                pending_indices.append(idx)

        total = len(unique)
        if progress_cb:
            progress_cb(total - len(pending_texts), total)
        if not pending_texts:
            return dedup.expand(resolved)

        batches = build_batches(pending_texts, pending_indices, max_size=self.settings.max_batch_size)
        logger.info(
            "Translating {} texts in {} batches (parallel: {})",
            len(pending_texts),
            len(batches),
            self.settings.max_concurrent,
        )
        results = await self.dispatcher.dispatch(batches, source, target_lang, token)
        token.raise_if_cancelled()

        completed = total - len(pending_texts)
        for batch, translations in zip(batches, results):
            for idx, translated in zip(batch.indices, translations):
                resolved[idx] = translated
                self.cache.put(target_lang, unique[idx], translated)
            completed += len(batch)
            if progress_cb:
                progress_cb(completed, total)

        return dedup.expand(resolved)
