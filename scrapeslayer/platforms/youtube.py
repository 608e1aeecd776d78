"""YouTube channel about-page extraction."""

from __future__ import annotations

import re

from scrapeslayer import probes
from scrapeslayer.dom import DomSnapshot
from scrapeslayer.links import LinkPolicy
from scrapeslayer.models import LinkPlatform, YouTubeCreatorData
from scrapeslayer.platforms.base import BasePlatform

_COUNT_PHRASE_RE = re.compile(r"\b(subscribers?|videos?|views?|followers?)\b", re.IGNORECASE)
_JOINED_RE = re.compile(r"Joined\s+(.+)")

# Country names as YouTube prints them in the channel details panel.
_COUNTRIES = frozenset({
    "Argentina", "Australia", "Austria", "Bangladesh", "Belgium", "Brazil",
    "Bulgaria", "Canada", "Chile", "China", "Colombia", "Croatia",
    "Czechia", "Denmark", "Egypt", "Finland", "France", "Germany", "Greece",
    "Hong Kong", "Hungary", "India", "Indonesia", "Ireland", "Israel",
    "Italy", "Japan", "Kenya", "Malaysia", "Mexico", "Morocco",
    "Netherlands", "New Zealand", "Nigeria", "Norway", "Pakistan", "Peru",
    "Philippines", "Poland", "Portugal", "Romania", "Russia",
    "Saudi Arabia", "Serbia", "Singapore", "Slovakia", "South Africa",
    "South Korea", "Spain", "Sweden", "Switzerland", "Taiwan", "Thailand",
    "Turkey", "Ukraine", "United Arab Emirates", "United Kingdom",
    "United States", "Vietnam",
})


def _joined(text: str) -> str | None:
    m = _JOINED_RE.search(text)
    return m.group(1).strip() if m else None


_DISPLAY_NAME = [
    probes.selector_text(
        "#channel-name #text",
        "ytd-channel-name yt-formatted-string",
        "yt-dynamic-text-view-model h1",
        "h1",
        "yt-formatted-string.ytd-channel-name",
    ),
]

_SUBSCRIBERS = [
    probes.selector_text("#subscriber-count"),
    probes.cue_scan("subscribers", probes.count_before("subscribers")),
]

_DESCRIPTION = [
    probes.selector_text(
        "#description-container yt-attributed-string",
        "#description-container",
        "ytd-about-channel-renderer #description",
    ),
    probes.meta_content("description", "og:description"),
    probes.selector_text("p"),
    probes.bounded_text(20, 500, exclude=_COUNT_PHRASE_RE),
]

_VIDEO_COUNT = [probes.cue_scan("videos", probes.count_before("videos"))]
_VIEW_COUNT = [probes.cue_scan("views", probes.count_before("views"))]
_JOIN_DATE = [probes.cue_scan("Joined", _joined, case_sensitive=True)]
_COUNTRY = [probes.exact_text(_COUNTRIES)]

_EMAIL = [probes.email_in_text(exclude=("noreply", "youtube.com"))]

_VERIFIED = [
    probes.has_element(".badge-style-type-verified"),
    probes.has_element(
        'img[alt*="Verified"], img[title*="Verified"], [aria-label*="Verified"]'
    ),
    probes.text_contains("verified"),
]


class YouTubePlatform(BasePlatform):
    """Video creators on youtube.com."""

    name = "youtube"
    display_name = "YouTube"
    host = "www.youtube.com"
    url_patterns: list[str] = ["youtube.com/*", "*.youtube.com/*"]
    ready_selector = "#page-header, #channel-header, ytd-about-channel-renderer"
    fallback_selector = "ytd-app"
    link_policy = LinkPolicy(
        self_hosts=("youtube.com", "youtu.be"),
        social=frozenset({
            LinkPlatform.TWITTER,
            LinkPlatform.INSTAGRAM,
            LinkPlatform.TIKTOK,
            LinkPlatform.DISCORD,
            LinkPlatform.STEAM,
            LinkPlatform.TWITCH,
            LinkPlatform.FACEBOOK,
        }),
        excluded_hosts=("accounts.google.com", "accounts.youtube.com"),
        redirect_host="youtube.com",
    )

    def profile_path(self, username: str) -> str:
        return f"@{username.removeprefix('@')}"

    def extract(self, snapshot: DomSnapshot) -> YouTubeCreatorData:
        username = probes.username_from_url(snapshot.url, strip_at=True)
        links = self.classify_links(snapshot)
        subscribers = probes.first_match(snapshot, _SUBSCRIBERS) or ""

        return YouTubeCreatorData(
            username=username,
            display_name=probes.first_match(snapshot, _DISPLAY_NAME) or username,
            subscribers=probes.compact_number(subscribers) or subscribers,
            video_count=probes.first_match(snapshot, _VIDEO_COUNT) or "",
            view_count=probes.first_match(snapshot, _VIEW_COUNT) or "",
            join_date=probes.first_match(snapshot, _JOIN_DATE) or "",
            country=probes.first_match(snapshot, _COUNTRY),
            description=probes.first_match(snapshot, _DESCRIPTION) or "",
            social_media_links=links.social,
            additional_links=links.additional,
            email=probes.first_match(snapshot, _EMAIL),
            verified=probes.any_signal(snapshot, _VERIFIED),
        )
