"""Tests for the HTTP client service."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from miniapps.services import HttpClientService


BASE_URL = "http://fixtures.test"


def make_client(handler, **kwargs) -> HttpClientService:
    return HttpClientService(BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


class TestGet:
    """GET requests against the fixture server."""

    @pytest.mark.asyncio
    async def test_resolves_paths_against_base_url(self) -> None:
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json=[])

        async with make_client(handler) as client:
            response = await client.get("/all_games.json")

        assert response.status_code == 200
        assert seen == ["http://fixtures.test/all_games.json"]

    @pytest.mark.asyncio
    async def test_get_json_decodes_body(self) -> None:
        body = [{"id": "a", "url": "u", "platform": "youtube"}]

        async with make_client(lambda request: httpx.Response(200, json=body)) as client:
            assert await client.get_json("/videos.json") == body

    @pytest.mark.asyncio
    async def test_get_json_raises_on_invalid_body(self) -> None:
        async with make_client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(ValueError):
                await client.get_json("/videos.json")

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(404)

        async with make_client(handler, max_retries=3, base_delay=0.0) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.get("/all_movies.json")

        assert calls == 1

    @pytest.mark.asyncio
    async def test_server_error_is_retried(self) -> None:
        responses = [httpx.Response(503), httpx.Response(200, json=[1])]

        async with make_client(lambda request: responses.pop(0), max_retries=1, base_delay=0.0) as client:
            with patch("miniapps.services.http_client.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
                assert await client.get_json("/all_games.json") == [1]

        mock_sleep.assert_awaited_once_with(0.0)

    @pytest.mark.asyncio
    async def test_no_retries_by_default(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            raise httpx.ConnectError("refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get("/videos.json")

        assert calls == 1

    @pytest.mark.asyncio
    async def test_failures_are_logged_with_details(self) -> None:
        async with make_client(lambda request: httpx.Response(500)) as client:
            with patch("miniapps.services.http_client.log") as mock_logger:
                with pytest.raises(httpx.HTTPStatusError):
                    await client.get("/all_games.json")

        assert mock_logger.warning.called
        _, kwargs = mock_logger.warning.call_args
        assert kwargs["path"] == "/all_games.json"
        assert kwargs["error_type"] == "HTTPStatusError"
