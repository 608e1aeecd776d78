"""Sequential batch processing over a single creator scraper."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from scrapeslayer.errors import InputFileError
from scrapeslayer.models import BatchResult, ScrapingResult
from scrapeslayer.scraper import CreatorScraper, describe_error

logger = logging.getLogger(__name__)


class Pacing(ABC):
    """Policy for how long to pause between two consecutive scrapes."""

    @abstractmethod
    async def wait_between(self) -> None:
        ...


class FixedDelay(Pacing):
    def __init__(self, seconds: float = 1.0) -> None:
        self.seconds = seconds

    async def wait_between(self) -> None:
        await asyncio.sleep(self.seconds)


class NoDelay(Pacing):
    async def wait_between(self) -> None:
        return None


def parse_lines(content: str) -> list[str]:
    """One identifier per line; blank lines and ``#`` comments are skipped."""
    return [
        line.strip()
        for line in content.splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]


def parse_list(text: str) -> list[str]:
    """Comma separated identifiers, trimmed, empty entries dropped."""
    return [item.strip() for item in text.split(",") if item.strip()]


class BatchProcessor:
    """Run a :class:`CreatorScraper` over many inputs, one at a time.

    Items are never scraped concurrently: the pause between requests keeps
    the request rate low enough not to trip the sites' bot defences.
    """

    def __init__(self, scraper: CreatorScraper, pacing: Pacing | None = None) -> None:
        self._scraper = scraper
        self._pacing = pacing or FixedDelay()

    async def process_file(self, path: str | Path) -> BatchResult:
        try:
            content = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InputFileError(f"Failed to read file {path}: {exc}") from exc
        return await self.process_batch(parse_lines(content))

    async def process_string(self, text: str) -> BatchResult:
        return await self.process_batch(parse_list(text))

    async def process_batch(self, inputs: Sequence[str]) -> BatchResult:
        results: list[ScrapingResult] = []
        total = len(inputs)

        logger.info("Processing %d creators...", total)

        for i, value in enumerate(inputs, 1):
            logger.info("[%d/%d] Processing: %s", i, total, value)
            try:
                result = await self._scraper.scrape_creator(value)
            except Exception as exc:
                result = ScrapingResult.failed(describe_error(exc), value)
                logger.warning("✗ Error processing: %s - %s", value, result.error)
            else:
                if result.success and result.data is not None:
                    logger.info("✓ Successfully scraped: %s", result.data.display_name or value)
                else:
                    logger.warning("✗ Failed to scrape: %s - %s", value, result.error)

            results.append(result)

            if i < total:
                await self._pacing.wait_between()

        batch = BatchResult.from_results(results)
        logger.info(
            "Completed: %d successful, %d failed",
            batch.summary.successful,
            batch.summary.failed,
        )
        return batch
