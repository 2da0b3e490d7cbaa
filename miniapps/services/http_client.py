"""HTTP client service for the static fixture server."""

import asyncio
from typing import Any

import httpx
import structlog

log = structlog.stdlib.get_logger()


class HttpClientService:
    """Async HTTP client bound to the static file server, with optional retries."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        max_retries: int = 0,
        base_delay: float = 0.5,
        max_delay: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            base_url: Root URL that fixture paths such as ``/videos.json`` resolve against
            timeout: Request timeout in seconds
            max_retries: Retry attempts after the first one (0 disables retrying)
            base_delay: Base delay for exponential backoff in seconds
            max_delay: Maximum delay between retries in seconds
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
        """
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay

        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers={
                "Accept": "application/json",
                "User-Agent": "miniapps/0.1",
            },
            follow_redirects=True,
            transport=transport,
        )

        log.info(
            "HTTP client service initialized",
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
        )

    async def get(
        self,
        path: str,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make a GET request, retrying transient failures.

        Args:
            path: Path or URL to request, relative to ``base_url``
            headers: Optional additional headers

        Returns:
            HTTP response object with a success status

        Raises:
            httpx.HTTPStatusError: On a non-success status once retries are exhausted
            httpx.RequestError: On transport failure once retries are exhausted
        """
        for attempt in range(self.max_retries + 1):
            try:
                log.debug(
                    "Making HTTP GET request",
                    path=path,
                    attempt=attempt + 1,
                    max_attempts=self.max_retries + 1,
                )

                response = await self._client.get(path, headers=headers)
                response.raise_for_status()

                log.info(
                    "HTTP GET request successful",
                    path=path,
                    status_code=response.status_code,
                    content_length=len(response.content),
                )
                return response

            except (httpx.HTTPStatusError, httpx.RequestError) as e:
                log.warning(
                    "HTTP GET request failed",
                    path=path,
                    attempt=attempt + 1,
                    error=str(e),
                    error_type=type(e).__name__,
                )

                # Client errors are final, except rate limiting
                if isinstance(e, httpx.HTTPStatusError):
                    status_code = e.response.status_code
                    if 400 <= status_code < 500 and status_code != 429:
                        raise

                if attempt == self.max_retries:
                    raise

                delay = min(self.base_delay * (2 ** attempt), self.max_delay)
                log.info("Retrying after delay", delay=delay)
                await asyncio.sleep(delay)

        # This should never be reached, but satisfy type checker
        raise RuntimeError("Unexpected end of retry loop")

    async def get_json(self, path: str) -> Any:
        """GET ``path`` and decode the body as JSON.

        Raises:
            httpx.HTTPError: If the request fails
            json.JSONDecodeError: If the body is not valid JSON
        """
        response = await self.get(path)
        return response.json()

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.info("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        await self.close()
