"""
Google Translate web endpoint client.

Talks to the keyless ``translate_a/single`` endpoint. One call translates one
payload; batching, rate limiting and retries live in the pipeline.
"""
from __future__ import annotations

import asyncio
import logging
import urllib.parse
from typing import Any, Optional

import aiohttp

from config import SETTINGS
from .base import BaseTranslator
from .errors import RateLimitedError, ResponseFormatError, TranslationHTTPError, TransportError


class GoogleTranslator(BaseTranslator):
    name = "google"

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        client: str | None = None,
        timeout: float = 20.0,
        proxy: str | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__(timeout=timeout, proxy=proxy)
        self.endpoint = endpoint or SETTINGS.endpoint.url
        self.client = client or SETTINGS.endpoint.client
        self._session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None
        self.logger = logging.getLogger(self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session with connection pooling."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(limit=32, ttl_dns_cache=300)
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(connector=connector, timeout=timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session if this client created it."""
        if self._session and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    def build_url(self, text: str, source_lang: str, target_lang: str) -> str:
        params = {
            "client": self.client,
            "sl": source_lang,
            "tl": target_lang,
            "dt": "t",
            "q": text,
        }
        query = urllib.parse.urlencode(params, safe="")
        return f"{self.endpoint}?{query}"

    @staticmethod
    def parse_response(data: Any) -> str:
        """Join the first field of every segment in ``data[0]``."""
        segments = data[0] if isinstance(data, list) and data else None
        if not isinstance(segments, list):
            raise ResponseFormatError("Response carries no translation segments")
        parts = []
        for segment in segments:
            if isinstance(segment, list) and segment and isinstance(segment[0], str):
                parts.append(segment[0])
        return "".join(parts)

    async def translate_text(self, text: str, source_lang: str, target_lang: str) -> str:
        url = self.build_url(text, source_lang, target_lang)
        session = await self._get_session()
        try:
            async with session.get(url, proxy=self.proxy) as resp:
                if resp.status == 429:
                    raise RateLimitedError("Google: Too many requests")
                if resp.status != 200:
                    body = await resp.text()
                    raise TranslationHTTPError(resp.status, body)
                data = await resp.json(content_type=None)
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as exc:
            raise TransportError(f"Google connection error: {exc}") from exc
        except aiohttp.ClientResponseError as exc:
            raise TranslationHTTPError(exc.status, exc.message) from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"Google client error: {exc}") from exc
        except ValueError as exc:
            raise ResponseFormatError(f"Google returned invalid JSON: {exc}") from exc

        translated = self.parse_response(data)
        self.logger.debug("Translated %d chars to %s", len(text), target_lang)
        return translated
