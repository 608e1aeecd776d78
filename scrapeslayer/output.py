"""Report formatting and output utilities."""

from __future__ import annotations

from pathlib import Path

from scrapeslayer.models import (
    BatchResult,
    OutputFormat,
    ScrapingResult,
    SocialMediaLink,
    TwitchCreatorData,
    YouTubeCreatorData,
)
from scrapeslayer.platforms import get_platform

_PLATFORM_NAMES = {
    "youtube": "YouTube",
    "twitter": "Twitter",
    "instagram": "Instagram",
    "tiktok": "TikTok",
    "discord": "Discord",
    "steam": "Steam",
    "github": "GitHub",
    "twitch": "Twitch",
    "facebook": "Facebook",
}


def platform_label(platform: str) -> str:
    """Display name for a link platform (``tiktok`` -> ``TikTok``)."""
    value = getattr(platform, "value", platform)
    return _PLATFORM_NAMES.get(value) or value[:1].upper() + value[1:]


def format_json(result: ScrapingResult | BatchResult) -> str:
    return result.model_dump_json(by_alias=True, exclude_none=True, indent=2)


def format_markdown(result: ScrapingResult | BatchResult) -> str:
    if isinstance(result, BatchResult):
        return _format_batch(result)
    return _format_single(result)


def format_result(result: ScrapingResult | BatchResult, fmt: OutputFormat | str) -> str:
    if OutputFormat(fmt) is OutputFormat.JSON:
        return format_json(result)
    return format_markdown(result)


# ----------------------------------------------------------------------
# Markdown
# ----------------------------------------------------------------------


def _metric_lines(data: TwitchCreatorData | YouTubeCreatorData) -> list[str]:
    if isinstance(data, YouTubeCreatorData):
        metrics = [
            ("Subscribers", data.subscribers),
            ("Videos", data.video_count),
            ("Total Views", data.view_count),
            ("Joined", data.join_date),
            ("Country", data.country),
        ]
    else:
        metrics = [
            ("Followers", data.followers),
            ("Team", data.team),
        ]
    return [f"**{label}**: {value}\n" for label, value in metrics if value]


def _social_line(link: SocialMediaLink) -> str:
    name = platform_label(link.platform)
    return f"- **{name}**: [{link.label or name}]({link.url})\n"


def _format_single(result: ScrapingResult) -> str:
    if not result.success or result.data is None:
        return f"# Error\n\n**URL**: {result.url}\n**Error**: {result.error}\n"

    data = result.data
    platform = get_platform(data.platform)
    kind = "Channel" if data.platform == "youtube" else "Partner"

    md = f"# {data.display_name}\n\n"
    if data.verified:
        md += f"**Status**: Verified {kind} ✓\n"
    md += "".join(_metric_lines(data))
    if data.description:
        md += f"**Description**: {data.description}\n"
    md += f"\n**{platform.display_name}**: {platform.profile_url(data.username)}\n\n"

    if data.social_media_links:
        md += "## Social Media Links\n\n"
        md += "".join(_social_line(link) for link in data.social_media_links)
        md += "\n"

    if data.additional_links:
        md += "## Additional Links\n\n"
        for link in data.additional_links:
            md += f"- [{link.label or link.url}]({link.url})\n"
        md += "\n"

    if data.email:
        md += f"## Contact\n\n**Email**: {data.email}\n\n"

    return md


def _format_batch(batch: BatchResult) -> str:
    summary = batch.summary
    md = "# Creator Social Media Report\n\n"
    md += "## Summary\n\n"
    md += f"- **Total Creators**: {summary.total}\n"
    md += f"- **Successfully Scraped**: {summary.successful}\n"
    md += f"- **Failed**: {summary.failed}\n\n"

    if summary.failed > 0:
        md += "## Failed Scrapes\n\n"
        for failed in batch.results:
            if not failed.success:
                md += f"- **{failed.url}**: {failed.error}\n"
        md += "\n"

    succeeded = [r for r in batch.results if r.success and r.data is not None]
    if succeeded:
        md += "## Creator Details\n\n"
        md += "---\n\n".join(_format_single(r) for r in succeeded)

    return md


# ----------------------------------------------------------------------
# Sink
# ----------------------------------------------------------------------


def write_report(text: str, path: str | Path) -> Path:
    """Write *text* to *path* as UTF-8, creating parent directories."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    return out
