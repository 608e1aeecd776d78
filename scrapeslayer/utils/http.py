"""HTTP utilities for the static renderer."""

from __future__ import annotations

from typing import Any

import httpx

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/125.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml",
    "Accept-Language": "en-US,en;q=0.9",
}


def build_client(*, timeout: float = 30.0, **kwargs: Any) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers=DEFAULT_HEADERS,
        **kwargs,
    )


async def fetch_text(
    client: httpx.AsyncClient,
    url: str,
    *,
    headers: dict[str, str] | None = None,
) -> tuple[str, str]:
    """GET *url* and return ``(body, final_url)`` after redirects."""
    resp = await client.get(url, headers=headers)
    resp.raise_for_status()
    return resp.text, str(resp.url)
