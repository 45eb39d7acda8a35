"""Tests for the conversational fallback client."""

from __future__ import annotations

import json

import httpx
import pytest

from smartgreenhouse.services.fallback_service import (
    FallbackQuotaExceeded,
    FallbackService,
    FallbackServiceError,
)

pytestmark = pytest.mark.anyio

API_URL = "https://openrouter.test/api/v1/chat/completions"


def _service(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return FallbackService(api_url=API_URL, api_key="sk-test", model="openai/gpt-4o", max_tokens=1000, client=client)


async def test_request_shape_and_content():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "Halo juga!"}}]})

    service = _service(handler)
    assert await service.complete("Halo Bot") == "Halo juga!"
    await service.close()

    assert seen["url"] == API_URL
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"] == {
        "model": "openai/gpt-4o",
        "messages": [{"role": "user", "content": "Halo Bot"}],
        "max_tokens": 1000,
    }


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": None}]},
        {"choices": [{"message": {"content": None}}]},
        {"choices": "nope"},
        ["not", "a", "dict"],
    ],
)
async def test_partial_responses_yield_none(payload):
    service = _service(lambda request: httpx.Response(200, json=payload))
    assert await service.complete("hi") is None


async def test_payment_required_is_quota_failure():
    service = _service(lambda request: httpx.Response(402, json={"error": "insufficient credits"}))
    with pytest.raises(FallbackQuotaExceeded):
        await service.complete("hi")


@pytest.mark.parametrize("status", [400, 401, 429, 500, 503])
async def test_other_statuses_are_generic_failures(status):
    service = _service(lambda request: httpx.Response(status))
    with pytest.raises(FallbackServiceError) as excinfo:
        await service.complete("hi")
    assert not isinstance(excinfo.value, FallbackQuotaExceeded)


async def test_transport_error_is_generic_failure():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    service = _service(handler)
    with pytest.raises(FallbackServiceError):
        await service.complete("hi")


async def test_malformed_json_is_generic_failure():
    service = _service(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    with pytest.raises(FallbackServiceError):
        await service.complete("hi")


async def test_malformed_api_url_is_generic_failure():
    service = FallbackService(api_url="http://[::1", api_key="sk-test")
    with pytest.raises(FallbackServiceError):
        await service.complete("apa kabar")
    await service.close()
