import asyncio
import gzip

import brotli
import httpx
import pytest

from sitestatus.exceptions import FetchError, ParseError
from sitestatus.status_check.core.sitemap_parser import parse_urlset
from sitestatus.status_check.sitemap_fetcher import SitemapFetcher

SITEMAP_URL = "https://example.com/sitemap.xml"

URLSET_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://example.com/</loc><lastmod>2024-01-01</lastmod></url>
  <url><loc> https://example.com/about/ </loc></url>
  <url><loc>https://example.com/blog/?page=2&amp;tag=go</loc></url>
</urlset>"""


def _fetch(handler, url=SITEMAP_URL):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await SitemapFetcher(client).fetch(url)

    return asyncio.run(run())


def test_fetch_returns_sites_in_document_order():
    sites = _fetch(lambda request: httpx.Response(200, content=URLSET_XML))

    assert [s.url for s in sites] == [
        "https://example.com/",
        "https://example.com/about/",
        "https://example.com/blog/?page=2&tag=go",
    ]
    assert all(s.up is False for s in sites)


def test_fetch_accepts_un_namespaced_sitemap():
    body = b"<urlset><url><loc>http://a.test/</loc></url><url><loc>http://b.test/</loc></url></urlset>"

    sites = _fetch(lambda request: httpx.Response(200, content=body))

    assert [s.url for s in sites] == ["http://a.test/", "http://b.test/"]


def test_fetch_decompresses_gzip_sitemap():
    sites = _fetch(lambda request: httpx.Response(200, content=gzip.compress(URLSET_XML)),
                   url="https://example.com/sitemap.xml.gz")

    assert len(sites) == 3


def test_fetch_empty_urlset():
    sites = _fetch(lambda request: httpx.Response(200, content=b"<urlset></urlset>"))

    assert sites == []


def test_fetch_malformed_xml_raises_parse_error():
    body = b"<urlset><url><loc>http://bad.test</loc></url>"

    with pytest.raises(ParseError):
        _fetch(lambda request: httpx.Response(200, content=body))


def test_fetch_wrong_root_raises_parse_error():
    body = b"""<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
      <sitemap><loc>https://example.com/sitemap-1.xml</loc></sitemap>
    </sitemapindex>"""

    with pytest.raises(ParseError):
        _fetch(lambda request: httpx.Response(200, content=body))


def test_fetch_html_body_raises_parse_error():
    with pytest.raises(ParseError):
        _fetch(lambda request: httpx.Response(200, content=b"<html><body>Not found</body>"))


def test_fetch_error_status_raises_fetch_error():
    with pytest.raises(FetchError):
        _fetch(lambda request: httpx.Response(503, content=b"down"))


def test_fetch_transport_failure_raises_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError):
        _fetch(handler)


def test_parse_urlset_skips_entries_without_loc():
    body = b"<urlset><url><lastmod>2024-01-01</lastmod></url><url><loc>  </loc></url>" \
           b"<url><loc>https://ok.test/</loc></url></urlset>"

    assert parse_urlset(body, "inline") == ["https://ok.test/"]


def test_parse_urlset_rejects_empty_body():
    with pytest.raises(ParseError):
        parse_urlset(b"   ", "inline")


def test_fetch_decompresses_brotli_sitemap():
    sites = _fetch(lambda request: httpx.Response(200, content=brotli.compress(URLSET_XML)))

    assert [s.url for s in sites][0] == "https://example.com/"
    assert len(sites) == 3


def test_fetch_binary_garbage_raises_parse_error():
    with pytest.raises(ParseError):
        _fetch(lambda request: httpx.Response(200, content=b"\x00\x9f\x12 definitely not a sitemap"))


def test_fetch_corrupt_gzip_raises_parse_error():
    with pytest.raises(ParseError):
        _fetch(lambda request: httpx.Response(200, content=b"\x1f\x8b" + b"\x00" * 16))
