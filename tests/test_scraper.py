"""Tests for the creator scraper lifecycle and failure handling."""

from __future__ import annotations

import pytest

from conftest import (
    TWITCH_HTML,
    TWITCH_URL,
    YOUTUBE_HTML,
    YOUTUBE_URL,
    FakeRenderer,
    minimal_twitch_page,
)
from scrapeslayer.errors import NavigationError, NotInitializedError
from scrapeslayer.platforms import TwitchPlatform, YouTubePlatform
from scrapeslayer.scraper import CreatorScraper, ScraperState, describe_error

TWITCH_READY = TwitchPlatform.ready_selector
TWITCH_FALLBACK = TwitchPlatform.fallback_selector


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_scrape_before_initialize(self) -> None:
        scraper = CreatorScraper(FakeRenderer())
        with pytest.raises(NotInitializedError):
            await scraper.scrape_creator("shroud")

    @pytest.mark.asyncio
    async def test_scrape_after_close(self) -> None:
        renderer = FakeRenderer({TWITCH_URL: TWITCH_HTML})
        scraper = CreatorScraper(renderer)
        await scraper.initialize()
        await scraper.close()
        assert renderer.closed
        assert scraper.state is ScraperState.CLOSED
        with pytest.raises(NotInitializedError):
            await scraper.scrape_creator("shroud")

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self) -> None:
        renderer = FakeRenderer()
        scraper = CreatorScraper(renderer)
        await scraper.initialize()
        await scraper.initialize()
        assert renderer.started
        assert scraper.state is ScraperState.READY

    @pytest.mark.asyncio
    async def test_context_manager(self) -> None:
        renderer = FakeRenderer({TWITCH_URL: TWITCH_HTML})
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator("shroud")
            assert result.success
        assert renderer.closed


class TestScrapeCreator:
    @pytest.mark.asyncio
    async def test_success(self) -> None:
        renderer = FakeRenderer({TWITCH_URL: TWITCH_HTML})
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator("shroud")

        assert result.success is True
        assert result.error is None
        assert result.url == TWITCH_URL
        assert result.data is not None
        assert result.data.display_name == "Shroud"
        assert renderer.waits == [TWITCH_READY]
        assert renderer.opened_contexts == renderer.closed_contexts == 1

    @pytest.mark.asyncio
    async def test_ready_selector_missing_uses_fallback(self) -> None:
        page = "<html><body><main><h1>Quiet</h1></main></body></html>"
        renderer = FakeRenderer({"https://www.twitch.tv/quiet/about": page})
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator("quiet")

        assert result.success
        assert result.data is not None
        assert result.data.display_name == "Quiet"
        assert renderer.waits == [TWITCH_READY, TWITCH_FALLBACK]

    @pytest.mark.asyncio
    async def test_no_ready_element_at_all(self) -> None:
        page = "<html><body><div>nothing</div></body></html>"
        renderer = FakeRenderer({"https://www.twitch.tv/ghost/about": page})
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator("ghost")

        assert result.success is False
        assert result.data is None
        assert result.url == "ghost"
        assert "main" in (result.error or "")
        assert renderer.opened_contexts == renderer.closed_contexts == 1

    @pytest.mark.asyncio
    async def test_navigation_timeout(self) -> None:
        renderer = FakeRenderer()
        url = "https://www.twitch.tv/offline_user"
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator(url)

        assert result.success is False
        assert result.url == url
        assert result.error == "Timed out loading https://www.twitch.tv/offline_user/about"
        assert renderer.closed_contexts == 1

    @pytest.mark.asyncio
    async def test_navigation_error_message_is_kept(self) -> None:
        renderer = FakeRenderer({TWITCH_URL: NavigationError("net::ERR_NAME_NOT_RESOLVED")})
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator("shroud")
        assert result.error == "net::ERR_NAME_NOT_RESOLVED"

    @pytest.mark.asyncio
    async def test_invalid_input_skips_navigation(self) -> None:
        renderer = FakeRenderer()
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator("https://example.com/user")
            assert scraper.state is ScraperState.READY

        assert result.success is False
        assert result.url == "https://example.com/user"
        assert result.error == (
            "Invalid input: https://example.com/user. Expected username or twitch.tv URL."
        )
        assert renderer.visited == []
        assert renderer.opened_contexts == 0

    @pytest.mark.asyncio
    async def test_unparseable_url_is_a_failed_result(self) -> None:
        renderer = FakeRenderer()
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator("https://[twitch.tv/shroud")

        assert result.success is False
        assert result.url == "https://[twitch.tv/shroud"
        assert result.error is not None
        assert result.error.startswith("Invalid input: https://[twitch.tv/shroud.")
        assert renderer.visited == []

    @pytest.mark.asyncio
    async def test_malformed_href_does_not_fail_the_page(self) -> None:
        page = TWITCH_HTML.replace("</main>", '<a href="http://[oops">bad</a></main>')
        renderer = FakeRenderer({TWITCH_URL: page})
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator("shroud")

        assert result.success is True
        assert result.data is not None
        assert [link.url for link in result.data.social_media_links] == [
            "https://twitter.com/shroud",
            "https://www.youtube.com/shroud",
            "https://discord.gg/shroud",
        ]

    @pytest.mark.asyncio
    async def test_extraction_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def boom(self, snapshot):
            raise KeyError("panel")

        monkeypatch.setattr(TwitchPlatform, "extract", boom)
        renderer = FakeRenderer({TWITCH_URL: TWITCH_HTML})
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator("shroud")

        assert result.success is False
        assert result.error is not None
        assert result.error.startswith(f"Failed to extract creator data from {TWITCH_URL}")
        assert renderer.closed_contexts == 1

    @pytest.mark.asyncio
    async def test_state_returns_to_ready_after_failure(self) -> None:
        async with CreatorScraper(FakeRenderer()) as scraper:
            await scraper.scrape_creator("nobody")
            assert scraper.state is ScraperState.READY

    @pytest.mark.asyncio
    async def test_sequential_scrapes_get_fresh_contexts(self) -> None:
        renderer = FakeRenderer({
            "https://www.twitch.tv/alice/about": minimal_twitch_page("Alice"),
            "https://www.twitch.tv/bob/about": minimal_twitch_page("Bob"),
        })
        async with CreatorScraper(renderer) as scraper:
            first = await scraper.scrape_creator("alice")
            second = await scraper.scrape_creator("bob")

        assert first.data is not None and first.data.display_name == "Alice"
        assert second.data is not None and second.data.display_name == "Bob"
        assert renderer.opened_contexts == renderer.closed_contexts == 2


class TestRouting:
    @pytest.mark.asyncio
    async def test_auto_routes_youtube_urls(self) -> None:
        renderer = FakeRenderer({YOUTUBE_URL: YOUTUBE_HTML})
        async with CreatorScraper(renderer) as scraper:
            result = await scraper.scrape_creator("www.youtube.com/@mkbhd")

        assert result.success
        assert result.url == YOUTUBE_URL
        assert result.data is not None
        assert result.data.platform == "youtube"
        assert renderer.waits == [YouTubePlatform.ready_selector]

    @pytest.mark.asyncio
    async def test_fixed_platform_treats_names_as_handles(self) -> None:
        renderer = FakeRenderer({YOUTUBE_URL: YOUTUBE_HTML})
        async with CreatorScraper(renderer, platform=YouTubePlatform()) as scraper:
            result = await scraper.scrape_creator("mkbhd")
        assert result.url == YOUTUBE_URL

    def test_platform_for(self) -> None:
        scraper = CreatorScraper(FakeRenderer())
        assert scraper.platform_for("shroud").name == "twitch"
        assert scraper.platform_for("https://m.youtube.com/@x").name == "youtube"
        assert scraper.platform_for("https://example.com/x").name == "twitch"


def test_describe_error() -> None:
    assert describe_error(RuntimeError("boom")) == "boom"
    assert describe_error(RuntimeError()) == "Unknown error occurred"
