import httpx
import pytest

from chatkeeper.errors import FetchError
from chatkeeper.services.fetcher import ExternalFetcher


def _fetcher(handler):
    return ExternalFetcher(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_fetch_returns_body_text():
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, text="payload")

    fetcher = _fetcher(handler)
    assert await fetcher.fetch("https://api.test/data") == "payload"
    assert seen == ["https://api.test/data"]
    await fetcher.aclose()


@pytest.mark.asyncio
async def test_non_success_status_is_fetch_error():
    fetcher = _fetcher(lambda request: httpx.Response(503, text="down"))
    with pytest.raises(FetchError) as excinfo:
        await fetcher.fetch("https://api.test/data")
    assert "503" in str(excinfo.value)
    await fetcher.aclose()


@pytest.mark.asyncio
async def test_transport_error_is_fetch_error():
    def handler(request):
        raise httpx.ConnectError("name resolution failed", request=request)

    fetcher = _fetcher(handler)
    with pytest.raises(FetchError) as excinfo:
        await fetcher.fetch("https://api.test/data")
    assert "ConnectError" in str(excinfo.value)
    assert excinfo.value.url == "https://api.test/data"
    await fetcher.aclose()


@pytest.mark.asyncio
async def test_no_retry_on_failure():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500)

    fetcher = _fetcher(handler)
    with pytest.raises(FetchError):
        await fetcher.fetch("https://api.test/data")
    assert len(calls) == 1
    await fetcher.aclose()


@pytest.mark.asyncio
async def test_malformed_url_is_fetch_error():
    fetcher = _fetcher(lambda request: httpx.Response(200, text="unreachable"))
    with pytest.raises(FetchError) as excinfo:
        await fetcher.fetch("http://[::1")
    assert "InvalidURL" in str(excinfo.value)
    await fetcher.aclose()
