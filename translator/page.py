from __future__ import annotations

import asyncio
import time
from typing import List, Sequence

from bs4 import Tag
from loguru import logger

from parser.html_parser import HTMLDocument

from .cancellation import CancellationToken
from .errors import TranslationCancelled
from .orchestrator import ProgressCallback, TranslationOrchestrator


class PageTranslator:
    """Translates whole pages, one active invocation at a time.

    Starting a new ``translate_page`` (or ``translate_texts``) cancels the one
    still in flight; the superseded call raises ``TranslationCancelled`` and
    its results are never written.
    """

    def __init__(self, orchestrator: TranslationOrchestrator, *, source_lang: str | None = None) -> None:
        self.orchestrator = orchestrator
        self.source_lang = source_lang or orchestrator.source_lang
        self.current_lang = self.source_lang
        self._token: CancellationToken | None = None

    def cancel(self) -> None:
        if self._token is not None:
            self._token.cancel()

    def _replace_token(self) -> CancellationToken:
        self.cancel()
        self._token = CancellationToken()
        return self._token

    async def _run(
        self,
        texts: Sequence[str],
        target_lang: str,
        token: CancellationToken,
        progress_cb: ProgressCallback | None = None,
    ) -> List[str]:
        task = asyncio.ensure_future(
            self.orchestrator.translate_batch(
                texts,
                target_lang,
                source_lang=self.source_lang,
                token=token,
                progress_cb=progress_cb,
            )
        )
        token.bind(task)
        try:
            result = await task
        except asyncio.CancelledError:
            if token.cancelled:
                raise TranslationCancelled("Translation was superseded") from None
            raise
        token.raise_if_cancelled()
        return result

    async def translate_texts(
        self,
        texts: Sequence[str],
        target_lang: str,
        *,
        progress_cb: ProgressCallback | None = None,
    ) -> List[str]:
        token = self._replace_token()
        return await self._run(texts, target_lang, token, progress_cb)

    async def translate_page(
        self,
        document: HTMLDocument,
        target_lang: str,
        *,
        progress_cb: ProgressCallback | None = None,
    ) -> bool:
        """Translate every slot of ``document`` into ``target_lang``.

        Returns False when the page is already in that language and nothing
        is in flight. Asking for the source language restores the original text.
        """
        in_flight = self._token is not None and self._token.pending
        if target_lang == self.current_lang and not in_flight:
            return False
        token = self._replace_token()
        start = time.perf_counter()
        if target_lang == self.source_lang:
            document.restore()
        else:
            slots = document.collect()
            texts = list(document.iter_texts(slots))
            logger.info("Total texts to translate: {}", len(texts))
            translated = await self._run(texts, target_lang, token, progress_cb)
            document.apply(slots, translated)
        self.current_lang = target_lang
        logger.info("Translation completed in {:.2f}s", time.perf_counter() - start)
        return True

    async def translate_subtree(self, document: HTMLDocument, root: Tag, target_lang: str | None = None) -> int:
        """Translate content that appeared after the page was translated.

        Shares the active page token, so a later ``translate_page`` aborts it.
        Returns the number of slots written.
        """
        lang = target_lang or self.current_lang
        if lang == self.source_lang:
            return 0
        slots = document.collect(root)
        if not slots:
            return 0
        token = self._token
        if token is None or token.cancelled:
            token = self._replace_token()
        translated = await self._run(list(document.iter_texts(slots)), lang, token)
        document.apply(slots, translated)
        return len(slots)
