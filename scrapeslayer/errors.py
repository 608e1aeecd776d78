"""Exception hierarchy for scrapeslayer."""

from __future__ import annotations


class ScrapeSlayerError(Exception):
    """Base class for every error raised by scrapeslayer."""


class InvalidInputError(ScrapeSlayerError, ValueError):
    """A creator identifier could not be mapped to an about-page URL."""

    def __init__(self, value: str, expected_host: str) -> None:
        self.value = value
        self.expected_host = expected_host
        super().__init__(
            f"Invalid input: {value}. Expected username or {expected_host} URL."
        )


class NotInitializedError(ScrapeSlayerError, RuntimeError):
    """A scrape was attempted before initialize() or after close()."""


class NavigationError(ScrapeSlayerError):
    """The renderer could not load or stabilise a page (timeouts included)."""


class ExtractionError(ScrapeSlayerError):
    """Field extraction failed on an already-rendered page."""


class InputFileError(ScrapeSlayerError, OSError):
    """A batch input file could not be read."""
