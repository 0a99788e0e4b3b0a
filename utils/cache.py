from __future__ import annotations

from typing import Dict


def make_cache_key(text: str, target: str) -> str:
    return f"{target}::{text}"


class ResponseCache:
    """Translations obtained during this session, keyed by (target language, exact text).

    Entries never expire. Everything lives on one event loop so no locking is done.
    """

    def __init__(self) -> None:
        self._store: Dict[str, str] = {}

    def get(self, lang: str, text: str) -> str | None:
        return self._store.get(make_cache_key(text, lang))

    def put(self, lang: str, text: str, translation: str) -> None:
        self._store[make_cache_key(text, lang)] = translation

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, key: tuple[str, str]) -> bool:
        lang, text = key
        return make_cache_key(text, lang) in self._store

    def __len__(self) -> int:
        return len(self._store)
