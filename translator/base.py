from __future__ import annotations

from abc import ABC, abstractmethod


class BaseTranslator(ABC):
    name: str = "base"

    def __init__(self, *, timeout: float = 20.0, proxy: str | None = None) -> None:
        self.timeout = timeout
        self.proxy = proxy

    @abstractmethod
    async def translate_text(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate one payload (possibly several texts joined by a delimiter).

        Raises a ``TranslationError`` subclass on any failure.
        """

    async def close(self) -> None:
        return None
