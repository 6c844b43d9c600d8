"""Tests for the configuration service client."""

import httpx
import pytest

from dstest.client.run_client import TestRunClient
from dstest.exceptions import ConfigurationError, TestRunNotFoundError, UpstreamFetchError

from .helpers import SERVICE_DOCUMENT

BASE_URL = "http://config.test/dstestapi/testruns/"
RUN_ID = SERVICE_DOCUMENT["_id"]


def make_client(handler) -> TestRunClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TestRunClient(base_url=BASE_URL, max_retries=2, retry_delay=0, client=http_client)


async def test_fetches_and_parses_run():
    requested = []
    
    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, json=SERVICE_DOCUMENT)
    
    async with make_client(handler) as client:
        run = await client.get_test_run(RUN_ID)
    
    assert requested == [BASE_URL + RUN_ID]
    assert run.name == "Tom Run 1"
    assert len(run.test_suite.test_cases) == 1


async def test_not_found_is_not_retried():
    calls = []
    
    def handler(request):
        calls.append(request)
        return httpx.Response(404, json={"detail": "not found"})
    
    async with make_client(handler) as client:
        with pytest.raises(TestRunNotFoundError):
            await client.get_test_run(RUN_ID)
    
    assert len(calls) == 1


async def test_client_errors_are_not_retried():
    calls = []
    
    def handler(request):
        calls.append(request)
        return httpx.Response(401)
    
    async with make_client(handler) as client:
        with pytest.raises(UpstreamFetchError, match="401"):
            await client.get_test_run(RUN_ID)
    
    assert len(calls) == 1


async def test_server_errors_are_retried():
    responses = iter([httpx.Response(503), httpx.Response(200, json=SERVICE_DOCUMENT)])
    
    async with make_client(lambda request: next(responses)) as client:
        run = await client.get_test_run(RUN_ID)
    
    assert run.id == RUN_ID


async def test_gives_up_after_max_retries():
    calls = []
    
    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)
    
    async with make_client(handler) as client:
        with pytest.raises(UpstreamFetchError, match="connection refused"):
            await client.get_test_run(RUN_ID)
    
    assert len(calls) == 3


async def test_invalid_document_is_a_fetch_failure():
    async with make_client(lambda request: httpx.Response(200, text="<html>oops</html>")) as client:
        with pytest.raises(UpstreamFetchError):
            await client.get_test_run(RUN_ID)
    
    async with make_client(lambda request: httpx.Response(200, json={"name": "no suite"})) as client:
        with pytest.raises(UpstreamFetchError):
            await client.get_test_run(RUN_ID)


async def test_requires_context_manager():
    client = TestRunClient(base_url=BASE_URL)
    with pytest.raises(RuntimeError):
        await client.get_test_run(RUN_ID)


async def test_requires_run_id():
    async with make_client(lambda request: httpx.Response(200, json=SERVICE_DOCUMENT)) as client:
        with pytest.raises(UpstreamFetchError):
            await client.get_test_run("")


def test_rejects_non_http_endpoint():
    with pytest.raises(ConfigurationError):
        TestRunClient(base_url="ftp://config.test/testruns/")
