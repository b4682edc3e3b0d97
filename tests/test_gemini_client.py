"""Tests for the Gemini client and reply extraction."""
import asyncio
import json
import logging
import time

import httpx
import pytest

from src.api.errors import UpstreamContractError, UpstreamTransportError
from src.services.gemini import (
    ExtractedReply,
    GeminiClient,
    MissingReply,
    build_payload,
    extract_reply,
)
from tests.conftest import TEST_API_KEY, TEST_API_URL, FakeGemini, gemini_reply


class TestBuildPayload:
    def test_context_precedes_message(self):
        payload = build_payload("CONTEXT", "question")

        assert payload == {
            "contents": [
                {"role": "user", "parts": [{"text": "CONTEXT"}]},
                {"role": "user", "parts": [{"text": "question"}]},
            ]
        }


class TestExtractReply:
    def test_first_candidate_first_part(self):
        payload = {
            "candidates": [
                {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
                {"content": {"parts": [{"text": "other candidate"}]}},
            ]
        }

        assert extract_reply(payload) == ExtractedReply(text="first")

    @pytest.mark.parametrize(
        "payload,reason",
        [
            ({}, "candidates"),
            ({"candidates": None}, "candidates"),
            ({"candidates": []}, "candidates"),
            ({"candidates": [{}]}, "content"),
            ({"candidates": [{"content": {}}]}, "parts"),
            ({"candidates": [{"content": {"parts": []}}]}, "parts"),
            ({"candidates": [{"content": {"parts": [{}]}}]}, "text"),
            ({"candidates": [{"content": {"parts": [{"text": ""}]}}]}, "text"),
            ({"candidates": "nope"}, "malformed"),
            ([1, 2, 3], "malformed"),
            (None, "malformed"),
        ],
    )
    def test_missing_levels(self, payload, reason):
        assert extract_reply(payload) == MissingReply(reason=reason)

    def test_prompt_feedback_only(self):
        payload = {"promptFeedback": {"blockReason": "SAFETY"}}

        result = extract_reply(payload)

        assert isinstance(result, MissingReply)
        assert result.reason == "candidates"


class TestGeminiClient:
    @pytest.mark.asyncio
    async def test_returns_raw_payload(self):
        fake = FakeGemini(lambda request: httpx.Response(200, json=gemini_reply("hi")))

        payload = await fake.client().generate_content("CONTEXT", "question")

        assert payload == gemini_reply("hi")
        request = fake.calls[0]
        assert str(request.url).startswith(TEST_API_URL)
        assert request.url.params["key"] == TEST_API_KEY
        assert json.loads(request.content) == build_payload("CONTEXT", "question")

    @pytest.mark.asyncio
    async def test_timeout_is_passed_per_request(self):
        seen = {}

        def handler(request):
            seen.update(request.extensions["timeout"])
            return httpx.Response(200, json=gemini_reply("hi"))

        fake = FakeGemini(handler)
        client = GeminiClient(
            httpx.AsyncClient(transport=httpx.MockTransport(fake)),
            api_url=TEST_API_URL,
            api_key=TEST_API_KEY,
            timeout=12.5,
        )

        await client.generate_content("CONTEXT", "question")

        assert seen["read"] == 12.5

    @pytest.mark.asyncio
    async def test_error_status_carries_body(self):
        fake = FakeGemini(lambda request: httpx.Response(400, json={"error": {"code": 400}}))

        with pytest.raises(UpstreamTransportError) as exc_info:
            await fake.client().generate_content("CONTEXT", "question")

        assert exc_info.value.upstream_status == 400
        assert exc_info.value.details == {"error": {"code": 400}}

    @pytest.mark.asyncio
    async def test_error_status_with_text_body(self):
        fake = FakeGemini(lambda request: httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(UpstreamTransportError) as exc_info:
            await fake.client().generate_content("CONTEXT", "question")

        assert exc_info.value.upstream_status == 502
        assert exc_info.value.details == "Bad Gateway"

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("connect timed out", request=request)

        fake = FakeGemini(handler)

        with pytest.raises(UpstreamTransportError) as exc_info:
            await fake.client().generate_content("CONTEXT", "question")

        assert exc_info.value.upstream_status is None
        assert len(fake.calls) == 1

    @pytest.mark.asyncio
    async def test_transport_error_message_is_redacted(self):
        def handler(request):
            raise httpx.ConnectError(f"cannot reach {request.url}", request=request)

        fake = FakeGemini(handler)

        with pytest.raises(UpstreamTransportError) as exc_info:
            await fake.client().generate_content("CONTEXT", "question")

        assert TEST_API_KEY not in exc_info.value.details
        assert "***" in exc_info.value.details

    @pytest.mark.asyncio
    async def test_non_json_success_is_contract_error(self):
        fake = FakeGemini(lambda request: httpx.Response(200, text="not json"))

        with pytest.raises(UpstreamContractError) as exc_info:
            await fake.client().generate_content("CONTEXT", "question")

        assert exc_info.value.reason == "malformed"
        assert exc_info.value.full_response == "not json"


class TestGeminiClientTotalTimeout:
    @pytest.mark.asyncio
    async def test_slow_upstream_is_cut_off_at_timeout(self):
        body = json.dumps(gemini_reply("slow answer")).encode()
        handlers = []

        async def dribble(reader, writer):
            handlers.append(asyncio.current_task())
            await reader.readuntil(b"\r\n\r\n")
            writer.write(
                b"HTTP/1.1 200 OK\r\nContent-Type: application/json\r\n"
                b"Content-Length: %d\r\n\r\n" % len(body)
            )
            # Each gap stays under the read timeout
            for byte in body:
                writer.write(bytes([byte]))
                await writer.drain()
                await asyncio.sleep(0.1)
            writer.close()

        server = await asyncio.start_server(dribble, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        try:
            async with httpx.AsyncClient() as http_client:
                client = GeminiClient(
                    http_client,
                    api_url=f"http://127.0.0.1:{port}/v1/models/test:generateContent",
                    api_key=TEST_API_KEY,
                    timeout=0.5,
                )
                started = time.monotonic()
                with pytest.raises(UpstreamTransportError) as exc_info:
                    await client.generate_content("CONTEXT", "question")
                elapsed = time.monotonic() - started
        finally:
            for task in handlers:
                task.cancel()
            server.close()

        assert elapsed < 3
        assert "timed out" in exc_info.value.details
        assert exc_info.value.upstream_status is None


class TestGeminiClientLogging:
    @pytest.mark.asyncio
    async def test_error_status_log_is_redacted(self, caplog):
        fake = FakeGemini(lambda request: httpx.Response(502, text=f"upstream rejected {request.url}"))

        with caplog.at_level(logging.ERROR):
            with pytest.raises(UpstreamTransportError) as exc_info:
                await fake.client().generate_content("CONTEXT", "question")

        assert "HTTP 502" in caplog.text
        assert TEST_API_KEY not in caplog.text
        assert TEST_API_KEY not in exc_info.value.details
