"""Page renderers: a shared session that hands out short-lived browsing contexts."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from scrapeslayer.config import Config
from scrapeslayer.dom import DomSnapshot
from scrapeslayer.errors import NavigationError, NotInitializedError
from scrapeslayer.utils.http import build_client, fetch_text

logger = logging.getLogger(__name__)

_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-extensions",
    "--disable-gpu",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
]


class RenderContext(ABC):
    """One browsing context (a single tab) used for exactly one scrape."""

    @abstractmethod
    async def goto(self, url: str) -> None:
        """Navigate and wait for the page to settle."""
        ...

    @abstractmethod
    async def wait_for(self, selector: str, timeout: float) -> None:
        """Wait up to *timeout* seconds for *selector* to appear."""
        ...

    @abstractmethod
    async def snapshot(self) -> DomSnapshot:
        ...

    @abstractmethod
    async def close(self) -> None:
        ...


class Renderer(ABC):
    """A long-lived rendering session."""

    @abstractmethod
    async def start(self) -> None:
        ...

    @abstractmethod
    async def new_context(self) -> RenderContext:
        ...

    @abstractmethod
    async def close(self) -> None:
        ...

    @asynccontextmanager
    async def open_context(self) -> AsyncIterator[RenderContext]:
        """Yield a fresh context and close it on every exit path."""
        context = await self.new_context()
        try:
            yield context
        finally:
            await context.close()


# ----------------------------------------------------------------------
# Playwright (headless Chromium)
# ----------------------------------------------------------------------


class _PlaywrightContext(RenderContext):
    def __init__(self, context: BrowserContext, page: Page) -> None:
        self._context = context
        self._page = page

    async def goto(self, url: str) -> None:
        logger.debug("Loading %s", url)
        try:
            await self._page.goto(url, wait_until="networkidle")
        except PlaywrightTimeoutError as exc:
            raise NavigationError(f"Timed out loading {url}: {exc}") from exc
        except PlaywrightError as exc:
            raise NavigationError(f"Failed to load {url}: {exc}") from exc

    async def wait_for(self, selector: str, timeout: float) -> None:
        try:
            await self._page.wait_for_selector(selector, timeout=timeout * 1000)
        except PlaywrightTimeoutError as exc:
            raise NavigationError(
                f"Timed out after {timeout:g}s waiting for {selector}"
            ) from exc
        except PlaywrightError as exc:
            raise NavigationError(str(exc)) from exc

    async def snapshot(self) -> DomSnapshot:
        return DomSnapshot(await self._page.content(), self._page.url)

    async def close(self) -> None:
        await self._context.close()


class PlaywrightRenderer(Renderer):
    """Render pages, JavaScript included, in a shared headless Chromium."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def start(self) -> None:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self._config.headless,
            executable_path=self._config.browser_executable,
            args=_LAUNCH_ARGS,
        )

    async def new_context(self) -> RenderContext:
        if self._browser is None:
            raise NotInitializedError("Browser not initialized. Call start() first.")
        context = await self._browser.new_context()
        page = await context.new_page()
        page.set_default_navigation_timeout(self._config.navigation_timeout * 1000)
        return _PlaywrightContext(context, page)

    async def close(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None


# ----------------------------------------------------------------------
# Static HTTP (no JavaScript)
# ----------------------------------------------------------------------


class _HttpContext(RenderContext):
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client
        self._snapshot: DomSnapshot | None = None

    async def goto(self, url: str) -> None:
        logger.debug("Fetching %s", url)
        try:
            html, final_url = await fetch_text(self._client, url)
        except httpx.TimeoutException as exc:
            raise NavigationError(f"Timed out loading {url}") from exc
        except httpx.HTTPError as exc:
            raise NavigationError(f"Failed to load {url}: {exc}") from exc
        self._snapshot = DomSnapshot(html, final_url)

    async def wait_for(self, selector: str, timeout: float) -> None:
        # Static HTML never changes after the fetch; the element is there or not.
        if self._require_snapshot().select_one(selector) is None:
            raise NavigationError(f"Element {selector} not found on page")

    async def snapshot(self) -> DomSnapshot:
        return self._require_snapshot()

    async def close(self) -> None:
        self._snapshot = None

    def _require_snapshot(self) -> DomSnapshot:
        if self._snapshot is None:
            raise NavigationError("No page loaded")
        return self._snapshot


class HttpRenderer(Renderer):
    """Fetch raw HTML over httpx; for pages that render server-side."""

    def __init__(self, config: Config, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = client
        self._owns_client = client is None

    async def start(self) -> None:
        if self._client is None:
            self._client = build_client(timeout=self._config.navigation_timeout)

    async def new_context(self) -> RenderContext:
        if self._client is None:
            raise NotInitializedError("HTTP client not initialized. Call start() first.")
        return _HttpContext(self._client)

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


def build_renderer(config: Config) -> Renderer:
    if config.renderer == "browser":
        return PlaywrightRenderer(config)
    if config.renderer == "http":
        return HttpRenderer(config)
    raise ValueError(f"Unknown renderer: {config.renderer}. Available: browser, http")
