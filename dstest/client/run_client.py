"""
Test run client for the DSTest configuration service.

Fetches a fully hydrated test run (suite, test cases and predicates) by id,
retrying transient failures with exponential backoff.
"""

import asyncio
from typing import Optional

import httpx

from dstest import __version__
from dstest.config import settings
from dstest.constants import USER_AGENT
from dstest.core.models import TestRun
from dstest.exceptions import ConfigurationError, TestRunNotFoundError, UpstreamFetchError
from dstest.logger import get_logger

logger = get_logger(__name__)


class TestRunClient:
    """
    Async client for the test run endpoint.
    
    Use as an async context manager. An ``httpx.AsyncClient`` may be injected,
    in which case the caller keeps ownership of it.
    """
    
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        max_retries: Optional[int] = None,
        retry_delay: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the client.
        
        Args:
            base_url: Test run endpoint, run ids are appended (defaults to settings)
            timeout: HTTP timeout in seconds (defaults to settings)
            max_retries: Maximum retry attempts (defaults to settings)
            retry_delay: Base delay between retries (defaults to settings)
            client: Pre-built HTTP client, mainly for tests
            
        Raises:
            ConfigurationError: If the endpoint is not an http(s) URL
        """
        self.base_url = base_url or settings.runs_api_url
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(f"Test run endpoint must be an http(s) URL: {self.base_url}")
        if not self.base_url.endswith("/"):
            self.base_url += "/"
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.max_retries = max_retries if max_retries is not None else settings.http_max_retries
        self.retry_delay = retry_delay if retry_delay is not None else settings.http_retry_delay
        
        self._client = client
        self._owns_client = client is None
    
    async def __aenter__(self) -> "TestRunClient":
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "User-Agent": f"{USER_AGENT}/{__version__}",
                    "Accept": "application/json"
                },
                follow_redirects=True
            )
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
    
    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None
    
    async def _fetch_with_retry(self, url: str) -> httpx.Response:
        """
        GET ``url``, retrying timeouts, transport errors and 5xx responses.
        
        Raises:
            TestRunNotFoundError: If the service answers 404
            UpstreamFetchError: If the final attempt fails or returns non-200
        """
        last_exception: Optional[UpstreamFetchError] = None
        
        for attempt in range(self.max_retries + 1):
            try:
                logger.debug(f"Fetching test run from {url} (attempt {attempt + 1}/{self.max_retries + 1})")
                response = await self._client.get(url)
            except httpx.TimeoutException as e:
                last_exception = UpstreamFetchError(f"Request timeout: {e}")
            except httpx.RequestError as e:
                last_exception = UpstreamFetchError(f"Request error: {e}")
            else:
                if response.status_code == 404:
                    raise TestRunNotFoundError(f"Test run not found: {url}")
                if response.status_code == 200:
                    return response
                
                last_exception = UpstreamFetchError(
                    f"Unexpected status {response.status_code} fetching {url}"
                )
                if response.status_code < 500:
                    raise last_exception
            
            if attempt < self.max_retries:
                delay = self.retry_delay * (2 ** attempt)  # Exponential backoff
                logger.warning(
                    f"Request failed, retrying in {delay}s: {url} (attempt {attempt + 1}, error: {last_exception})"
                )
                await asyncio.sleep(delay)
        
        raise last_exception
    
    async def get_test_run(self, run_id: str) -> TestRun:
        """
        Fetch a hydrated test run by id.
        
        Args:
            run_id: Identifier of the test run
            
        Returns:
            TestRun: Run with its suite, test cases and predicates resolved
            
        Raises:
            UpstreamFetchError: If the run cannot be fetched or decoded
        """
        if not run_id:
            raise UpstreamFetchError("A test run id is required")
        if self._client is None:
            raise RuntimeError("TestRunClient must be used as async context manager")
        
        url = f"{self.base_url}{run_id}"
        response = await self._fetch_with_retry(url)
        
        try:
            test_run = TestRun.model_validate(response.json())
        except ValueError as e:
            # Covers both JSON decoding and pydantic validation failures
            raise UpstreamFetchError(f"Invalid test run document from {url}: {e}") from e
        
        logger.info(
            f"Fetched test run '{test_run.name}' ({test_run.id}) with "
            f"{len(test_run.test_suite.test_cases)} test cases"
        )
        return test_run


async def fetch_test_run(run_id: str) -> TestRun:
    """
    Convenience function to fetch a test run with default settings.
    
    Args:
        run_id: Identifier of the test run
        
    Returns:
        TestRun: The hydrated test run
    """
    async with TestRunClient() as client:
        return await client.get_test_run(run_id)
