from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Any, Iterable

import httpx
from bs4 import BeautifulSoup
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from profiler.core.config import settings
from profiler.core.errors import ServiceNotConfiguredError
from profiler.schemas.research import FetchUrlResponse, SearchResponse, SearchResult
from profiler.services.url_security import host_is_private_or_local, normalize_public_url

logger = logging.getLogger(__name__)

FETCH_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}

_NOISE_TAGS = ("script", "style", "noscript", "nav", "footer", "header", "aside", "form", "svg")


def _search_service():
    return build("customsearch", "v1", developerKey=settings.google_api_key, cache_discovery=False)


def _run_search(query: str, num_results: int) -> dict[str, Any]:
    return _search_service().cse().list(q=query, cx=settings.google_cse_id, num=num_results).execute()


async def search_google(query: str, num_results: int = 5, *, prefetch: bool = False) -> SearchResponse:
    if not (settings.google_api_key and settings.google_cse_id):
        raise ServiceNotConfiguredError("Web search is not configured.")

    try:
        data = await asyncio.to_thread(_run_search, query, num_results)
    except HttpError as exc:
        logger.warning(json.dumps({"event": "google_search_failed", "status": getattr(exc, "status_code", None)}))
        raise ServiceNotConfiguredError("Web search is temporarily unavailable.") from exc

    results = [
        SearchResult(
            title=str(item.get("title") or ""),
            link=str(item.get("link") or ""),
            snippet=str(item.get("snippet") or ""),
        )
        for item in data.get("items") or []
        if item.get("link")
    ]
    logger.info(json.dumps({"event": "google_search", "results": len(results)}))
    pages = await prefetch_urls(result.link for result in results) if prefetch else []
    return SearchResponse(success=True, results=results, pages=pages)


def html_to_text(page_html: str) -> tuple[str, str]:
    soup = BeautifulSoup(page_html or "", "html.parser")
    title = soup.title.get_text(" ", strip=True) if soup.title else ""
    for tag in soup(_NOISE_TAGS):
        tag.decompose()
    root = soup.find("article") or soup.find("main") or soup.body or soup
    text = root.get_text("\n", strip=True)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return title[:300], text.strip()


async def fetch_url_content(url: str) -> FetchUrlResponse:
    normalized_url, hostname = normalize_public_url(url)
    if await asyncio.to_thread(host_is_private_or_local, hostname):
        raise ValueError("Private or local URLs are not allowed.")

    async with httpx.AsyncClient(
        timeout=settings.fetch_url_timeout_s,
        follow_redirects=True,
        headers=FETCH_HEADERS,
    ) as client:
        try:
            response = await client.get(normalized_url)
        except httpx.HTTPError as exc:
            raise ValueError("Unable to fetch this URL.") from exc

    final_host = (response.url.host or "").lower()
    if final_host and final_host != hostname and await asyncio.to_thread(host_is_private_or_local, final_host):
        raise ValueError("Private or local URLs are not allowed.")
    if response.status_code >= 400:
        raise ValueError(f"URL returned HTTP {response.status_code}.")

    content_type = response.headers.get("content-type", "").lower()
    if "html" in content_type or not content_type:
        title, text = html_to_text(response.text)
    elif content_type.startswith("text/"):
        title, text = "", response.text.strip()
    else:
        raise ValueError(f"Unsupported content type '{content_type.split(';')[0]}'.")

    max_chars = max(1, settings.fetch_url_max_chars)
    truncated = len(text) > max_chars
    if truncated:
        text = text[:max_chars]
    if not text:
        raise ValueError("No readable text found at this URL.")

    return FetchUrlResponse(
        success=True,
        url=str(response.url),
        title=title,
        content=text,
        characters=len(text),
        truncated=truncated,
    )


async def prefetch_urls(urls: Iterable[str]) -> list[FetchUrlResponse]:
    """Fetch several URLs concurrently; failures are dropped and result order is not guaranteed."""
    outcomes = await asyncio.gather(*(fetch_url_content(url) for url in urls), return_exceptions=True)
    fetched: list[FetchUrlResponse] = []
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            logger.info(json.dumps({"event": "prefetch_failed", "error": type(outcome).__name__}))
            continue
        fetched.append(outcome)
    return fetched
