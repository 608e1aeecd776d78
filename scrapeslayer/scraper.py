"""Creator scraper: normalise, render, wait for readiness, extract."""

from __future__ import annotations

import logging
from enum import Enum
from types import TracebackType

from scrapeslayer.config import Config
from scrapeslayer.errors import (
    ExtractionError,
    InvalidInputError,
    NavigationError,
    NotInitializedError,
)
from scrapeslayer.models import ScrapingResult, TwitchCreatorData, YouTubeCreatorData
from scrapeslayer.platforms import DEFAULT_PLATFORM, BasePlatform, get_all_platforms, get_platform
from scrapeslayer.renderer import RenderContext, Renderer
from scrapeslayer.router import LinkRouter

logger = logging.getLogger(__name__)


class ScraperState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    IN_FLIGHT = "in_flight"
    CLOSED = "closed"


def _build_router() -> LinkRouter:
    router = LinkRouter()
    for platform in get_all_platforms():
        router.register(platform)
    return router


def describe_error(exc: BaseException) -> str:
    return str(exc) or "Unknown error occurred"


class CreatorScraper:
    """Scrape creator about pages through one long-lived renderer session.

    With ``platform`` left unset, each input is routed by its host and bare
    usernames go to Twitch. Every scrape opens its own browsing context and
    closes it before returning; the session itself lives from
    :meth:`initialize` to :meth:`close`.
    """

    def __init__(
        self,
        renderer: Renderer,
        *,
        platform: BasePlatform | None = None,
        config: Config | None = None,
    ) -> None:
        self._renderer = renderer
        self._platform = platform
        self._config = config or Config()
        self._router = _build_router()
        self._state = ScraperState.UNINITIALIZED

    @property
    def state(self) -> ScraperState:
        return self._state

    async def initialize(self) -> None:
        if self._state is ScraperState.CLOSED:
            raise NotInitializedError("Scraper has been closed.")
        if self._state is not ScraperState.UNINITIALIZED:
            return
        await self._renderer.start()
        self._state = ScraperState.READY

    async def close(self) -> None:
        if self._state is not ScraperState.CLOSED:
            await self._renderer.close()
        self._state = ScraperState.CLOSED

    async def __aenter__(self) -> CreatorScraper:
        await self.initialize()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def platform_for(self, value: str) -> BasePlatform:
        if self._platform is not None:
            return self._platform
        return self._router.resolve(value) or get_platform(DEFAULT_PLATFORM)

    async def scrape_creator(self, value: str) -> ScrapingResult:
        """Scrape one creator. Per-item failures come back as failed results."""
        if self._state is not ScraperState.READY:
            raise NotInitializedError("Browser not initialized. Call initialize() first.")

        platform = self.platform_for(value)
        try:
            url = platform.normalize_url(value)
        except InvalidInputError as exc:
            return ScrapingResult.failed(describe_error(exc), value)

        self._state = ScraperState.IN_FLIGHT
        try:
            data = await self._scrape_page(platform, url)
        except Exception as exc:
            logger.debug("Scrape of %s failed", url, exc_info=True)
            return ScrapingResult.failed(describe_error(exc), value)
        finally:
            self._state = ScraperState.READY

        return ScrapingResult.ok(data, url)

    async def _scrape_page(
        self, platform: BasePlatform, url: str
    ) -> TwitchCreatorData | YouTubeCreatorData:
        async with self._renderer.open_context() as context:
            await context.goto(url)
            await self._wait_until_ready(context, platform)
            snapshot = await context.snapshot()
            try:
                return platform.extract(snapshot)
            except Exception as exc:
                raise ExtractionError(
                    f"Failed to extract creator data from {url}: {describe_error(exc)}"
                ) from exc

    async def _wait_until_ready(self, context: RenderContext, platform: BasePlatform) -> None:
        try:
            await context.wait_for(platform.ready_selector, self._config.ready_timeout)
        except NavigationError:
            logger.debug(
                "%s not found, falling back to %s",
                platform.ready_selector,
                platform.fallback_selector,
            )
            await context.wait_for(platform.fallback_selector, self._config.fallback_timeout)
