import os
import time
import unittest
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("ANALYTICS_ENABLED", "0")

import httpx

from profiler.core.errors import ServiceNotConfiguredError
from profiler.schemas.research import FetchUrlResponse
from profiler.services import research_service
from profiler.services.research_service import html_to_text
from profiler.services.url_security import host_is_private_or_local, normalize_public_url

PAGE = (
    "<html><head><title>Essay</title><script>track()</script></head>"
    "<body><nav>menu</nav><article><p>Hello world</p></article><footer>legal</footer></body></html>"
)


def _settings(**overrides):
    values = {
        "fetch_url_timeout_s": 5.0,
        "fetch_url_max_chars": 50000,
        "google_api_key": "g-key",
        "google_cse_id": "cse-id",
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class UrlSecurityTests(unittest.TestCase):
    def test_private_hosts(self):
        self.assertTrue(host_is_private_or_local("localhost"))
        self.assertTrue(host_is_private_or_local("10.0.0.5"))
        self.assertTrue(host_is_private_or_local("printer.local"))
        self.assertFalse(host_is_private_or_local("8.8.8.8"))

    def test_normalize_public_url(self):
        self.assertEqual(normalize_public_url("Example.com/a?b=1"), ("https://example.com/a?b=1", "example.com"))
        with self.assertRaises(ValueError):
            normalize_public_url("ftp://example.com/file")
        with self.assertRaises(ValueError):
            normalize_public_url("   ")


class FetchUrlTests(unittest.IsolatedAsyncioTestCase):
    def test_html_to_text_drops_chrome(self):
        title, text = html_to_text(PAGE)
        self.assertEqual(title, "Essay")
        self.assertEqual(text, "Hello world")

    async def test_private_url_is_rejected(self):
        with self.assertRaises(ValueError):
            await research_service.fetch_url_content("http://127.0.0.1/admin")

    async def _fetch(self, handler, url="https://example.com/post", **settings_overrides):
        real_client = httpx.AsyncClient

        def client_factory(**kwargs):
            return real_client(transport=httpx.MockTransport(handler), **kwargs)

        with patch.object(research_service, "host_is_private_or_local", return_value=False), patch.object(
            research_service, "settings", _settings(**settings_overrides)
        ), patch.object(research_service.httpx, "AsyncClient", side_effect=client_factory):
            return await research_service.fetch_url_content(url)

    async def test_fetch_html_page(self):
        def handler(request):
            return httpx.Response(200, text=PAGE, headers={"content-type": "text/html; charset=utf-8"})

        result = await self._fetch(handler)
        self.assertTrue(result.success)
        self.assertEqual(result.title, "Essay")
        self.assertEqual(result.content, "Hello world")
        self.assertFalse(result.truncated)

    async def test_fetch_truncates(self):
        def handler(request):
            return httpx.Response(200, text=PAGE, headers={"content-type": "text/html"})

        result = await self._fetch(handler, fetch_url_max_chars=5)
        self.assertEqual(result.content, "Hello")
        self.assertTrue(result.truncated)

    async def test_http_error_status(self):
        def handler(request):
            return httpx.Response(404, text="missing", headers={"content-type": "text/plain"})

        with self.assertRaises(ValueError):
            await self._fetch(handler)

    async def test_binary_content_is_rejected(self):
        def handler(request):
            return httpx.Response(200, content=b"\x00\x01", headers={"content-type": "application/octet-stream"})

        with self.assertRaises(ValueError):
            await self._fetch(handler)

    async def test_prefetch_drops_failures(self):
        page = FetchUrlResponse(success=True, url="https://a.example/", content="A", characters=1)
        fetch = AsyncMock(side_effect=[page, ValueError("blocked")])
        with patch.object(research_service, "fetch_url_content", fetch):
            pages = await research_service.prefetch_urls(["https://a.example", "http://localhost"])
        self.assertEqual(len(pages), 1)
        self.assertEqual(fetch.await_count, 2)

    async def test_prefetch_resolves_hosts_concurrently(self):
        def slow_host_check(hostname):
            time.sleep(0.3)
            return False

        def handler(request):
            return httpx.Response(200, text=PAGE, headers={"content-type": "text/html"})

        real_client = httpx.AsyncClient

        def client_factory(**kwargs):
            return real_client(transport=httpx.MockTransport(handler), **kwargs)

        urls = ["https://a.example/1", "https://b.example/2", "https://c.example/3"]
        with patch.object(research_service, "host_is_private_or_local", side_effect=slow_host_check), patch.object(
            research_service, "settings", _settings()
        ), patch.object(research_service.httpx, "AsyncClient", side_effect=client_factory):
            started = time.perf_counter()
            pages = await research_service.prefetch_urls(urls)
            elapsed = time.perf_counter() - started

        self.assertEqual(len(pages), 3)
        self.assertLess(elapsed, 0.75)


class SearchTests(unittest.IsolatedAsyncioTestCase):
    async def test_search_requires_configuration(self):
        with patch.object(research_service, "settings", _settings(google_api_key=None)):
            with self.assertRaises(ServiceNotConfiguredError):
                await research_service.search_google("kant")

    async def test_search_maps_items(self):
        data = {
            "items": [
                {"title": "Kant", "link": "https://plato.example/kant", "snippet": "Critique"},
                {"title": "no link"},
            ]
        }
        with patch.object(research_service, "settings", _settings()), patch.object(
            research_service, "_run_search", return_value=data
        ) as run_search:
            result = await research_service.search_google("kant", 3)

        run_search.assert_called_once_with("kant", 3)
        self.assertTrue(result.success)
        self.assertEqual(len(result.results), 1)
        self.assertEqual(result.results[0].link, "https://plato.example/kant")
        self.assertEqual(result.pages, [])


if __name__ == "__main__":
    unittest.main()
