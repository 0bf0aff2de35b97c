import asyncio

import httpx

from sitestatus.status_check.models import Site
from sitestatus.status_check.prober import StatusProber


def _check(handler, url="https://example.com/"):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await StatusProber(client, timeout=1.0).check(Site(url=url))

    return asyncio.run(run())


def test_ok_response_marks_site_up():
    site = _check(lambda request: httpx.Response(200, text="hello"))

    assert site.up is True
    assert site.url == "https://example.com/"


def test_redirect_to_ok_marks_site_up():
    def handler(request):
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "https://example.com/new"})
        return httpx.Response(200)

    assert _check(handler, url="https://example.com/old").up is True


def test_non_ok_status_marks_site_down():
    for status in (204, 404, 500, 503):
        assert _check(lambda request, s=status: httpx.Response(s)).up is False


def test_connection_error_marks_site_down():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    assert _check(handler).up is False


def test_timeout_marks_site_down():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    assert _check(handler).up is False


def test_check_does_not_mutate_input_site():
    original = Site(url="https://example.com/")

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200))) as client:
            return await StatusProber(client).check(original)

    checked = asyncio.run(run())

    assert checked.up is True
    assert original.up is False


def test_probe_timeout_is_sent_with_request():
    def handler(request):
        assert request.extensions["timeout"]["read"] == 1.0
        assert request.extensions["timeout"]["connect"] == 1.0
        return httpx.Response(200)

    assert _check(handler).up is True
