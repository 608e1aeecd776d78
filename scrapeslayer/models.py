"""Core data models for scrapeslayer."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class OutputFormat(str, Enum):
    JSON = "json"
    MARKDOWN = "markdown"


class LinkPlatform(str, Enum):
    """Known destinations for outbound creator links."""

    YOUTUBE = "youtube"
    TWITTER = "twitter"
    INSTAGRAM = "instagram"
    TIKTOK = "tiktok"
    DISCORD = "discord"
    STEAM = "steam"
    GITHUB = "github"
    TWITCH = "twitch"
    FACEBOOK = "facebook"
    OTHER = "other"


class _Record(BaseModel):
    """Frozen model serialised with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SocialMediaLink(_Record):
    """One classified outbound link."""

    platform: LinkPlatform
    url: str
    label: str | None = None


class TwitchCreatorData(_Record):
    """Creator record extracted from a Twitch about page."""

    platform: Literal["twitch"] = "twitch"
    username: str
    display_name: str
    followers: str = ""
    description: str = ""
    social_media_links: list[SocialMediaLink] = Field(default_factory=list)
    additional_links: list[SocialMediaLink] = Field(default_factory=list)
    email: str | None = None
    team: str | None = None
    verified: bool = False


class YouTubeCreatorData(_Record):
    """Creator record extracted from a YouTube channel about page."""

    platform: Literal["youtube"] = "youtube"
    username: str
    display_name: str
    subscribers: str = ""
    video_count: str = ""
    view_count: str = ""
    join_date: str = ""
    country: str | None = None
    description: str = ""
    social_media_links: list[SocialMediaLink] = Field(default_factory=list)
    additional_links: list[SocialMediaLink] = Field(default_factory=list)
    email: str | None = None
    verified: bool = False


CreatorData = Annotated[
    Union[TwitchCreatorData, YouTubeCreatorData],
    Field(discriminator="platform"),
]


class ScrapingResult(_Record):
    """Outcome of scraping a single creator.

    ``url`` is the normalised about-page URL on success and the raw,
    unmodified input on failure.
    """

    success: bool
    data: CreatorData | None = None
    error: str | None = None
    url: str

    @model_validator(mode="after")
    def _check_outcome(self) -> ScrapingResult:
        if self.success and (self.data is None or self.error is not None):
            raise ValueError("successful result requires data and no error")
        if not self.success and (self.error is None or self.data is not None):
            raise ValueError("failed result requires an error and no data")
        return self

    @classmethod
    def ok(cls, data: TwitchCreatorData | YouTubeCreatorData, url: str) -> ScrapingResult:
        return cls(success=True, data=data, url=url)

    @classmethod
    def failed(cls, error: str, url: str) -> ScrapingResult:
        return cls(success=False, error=error, url=url)


class BatchSummary(_Record):
    total: int
    successful: int
    failed: int


class BatchResult(_Record):
    """Ordered per-item results plus success/failure counts."""

    results: list[ScrapingResult] = Field(default_factory=list)
    summary: BatchSummary

    @model_validator(mode="after")
    def _check_summary(self) -> BatchResult:
        summary = self.summary
        successful = sum(1 for r in self.results if r.success)
        if summary.total != len(self.results):
            raise ValueError("summary.total must equal the number of results")
        if summary.successful + summary.failed != summary.total:
            raise ValueError("successful + failed must equal total")
        if summary.successful != successful:
            raise ValueError("summary.successful does not match the results")
        return self

    @classmethod
    def from_results(cls, results: list[ScrapingResult]) -> BatchResult:
        successful = sum(1 for r in results if r.success)
        return cls(
            results=results,
            summary=BatchSummary(
                total=len(results),
                successful=successful,
                failed=len(results) - successful,
            ),
        )
