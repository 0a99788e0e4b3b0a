import asyncio
import urllib.parse

import aiohttp
import pytest

from translator.errors import (
    RateLimitedError,
    ResponseFormatError,
    TranslationHTTPError,
    TransportError,
)
from translator.google import GoogleTranslator


class FakeResponse:
    def __init__(self, status=200, payload=None, body=""):
        self.status = status
        self.payload = payload
        self.body = body

    async def json(self, content_type=None):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    async def text(self):
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    closed = False

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, proxy=None):
        self.requests.append((url, proxy))
        if self.error is not None:
            raise self.error
        return self.response


def translate(session, text="Halo dunia", **kwargs):
    translator = GoogleTranslator(endpoint="https://example.test/translate_a/single", session=session, **kwargs)
    return asyncio.run(translator.translate_text(text, "id", "en"))


class TestParseResponse:
    def test_joins_segment_text(self):
        data = [[["Hello ", "Halo ", None], ["world", "dunia", None]], None, "id"]

        assert GoogleTranslator.parse_response(data) == "Hello world"

    def test_skips_segments_without_text(self):
        data = [[["Hello", "Halo"], [None, None, "transliteration"]]]

        assert GoogleTranslator.parse_response(data) == "Hello"

    def test_rejects_payload_without_segments(self):
        with pytest.raises(ResponseFormatError):
            GoogleTranslator.parse_response({"error": "nope"})
        with pytest.raises(ResponseFormatError):
            GoogleTranslator.parse_response([None])


class TestBuildUrl:
    def test_query_parameters(self):
        translator = GoogleTranslator(endpoint="https://example.test/single")
        url = translator.build_url("a\n___\nb & c", "id", "en")
        query = urllib.parse.parse_qs(urllib.parse.urlparse(url).query)

        assert query["client"] == ["gtx"]
        assert query["sl"] == ["id"]
        assert query["tl"] == ["en"]
        assert query["dt"] == ["t"]
        assert query["q"] == ["a\n___\nb & c"]


class TestTranslateText:
    def test_success(self):
        session = FakeSession(FakeResponse(payload=[[["Hello world", "Halo dunia"]]]))

        assert translate(session, proxy="http://proxy.test") == "Hello world"
        assert session.requests[0][1] == "http://proxy.test"

    def test_rate_limited(self):
        session = FakeSession(FakeResponse(status=429))

        with pytest.raises(RateLimitedError):
            translate(session)

    def test_http_error(self):
        session = FakeSession(FakeResponse(status=503, body="unavailable"))

        with pytest.raises(TranslationHTTPError) as excinfo:
            translate(session)
        assert excinfo.value.status == 503

    def test_connection_error_is_transport(self):
        session = FakeSession(error=aiohttp.ClientConnectionError("reset"))

        with pytest.raises(TransportError):
            translate(session)

    def test_timeout_is_transport(self):
        session = FakeSession(error=asyncio.TimeoutError())

        with pytest.raises(TransportError):
            translate(session)

    def test_invalid_json(self):
        session = FakeSession(FakeResponse(payload=ValueError("Expecting value")))

        with pytest.raises(ResponseFormatError):
            translate(session)

    def test_close_leaves_injected_session_open(self):
        session = FakeSession()
        translator = GoogleTranslator(session=session)

        asyncio.run(translator.close())

        assert session.closed is False

    def test_truncated_payload_is_transport(self):
        session = FakeSession(FakeResponse(payload=aiohttp.ClientPayloadError("Response payload is not completed")))

        with pytest.raises(TransportError):
            translate(session)


class TestPipelineWithClient:
    def test_client_error_degrades_to_original_text(self, make_orchestrator):
        session = FakeSession(FakeResponse(payload=aiohttp.ClientPayloadError("Response payload is not completed")))
        translator = GoogleTranslator(session=session)

        result = asyncio.run(make_orchestrator(translator).translate_batch(["a", "b"], "en"))

        assert result == ["a", "b"]
        # one combined call, then one per string
        assert len(session.requests) == 3
