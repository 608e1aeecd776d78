"""Twitch channel about-page extraction."""

from __future__ import annotations

from scrapeslayer import probes
from scrapeslayer.dom import DomSnapshot
from scrapeslayer.links import LinkPolicy
from scrapeslayer.models import LinkPlatform, TwitchCreatorData
from scrapeslayer.platforms.base import BasePlatform

_DISPLAY_NAME = [
    probes.selector_text("h1", '[data-a-target="channel-display-name"]'),
]

_FOLLOWERS = [
    probes.selector_text('[data-test-selector="followers-count"]'),
    probes.cue_scan("followers", probes.count_before("followers")),
]

_DESCRIPTION = [
    probes.selector_text('[data-test-selector="about-panel"] p'),
    probes.meta_content("description", "og:description"),
    probes.selector_text("p"),
]

_EMAIL = [probes.email_in_text()]

_VERIFIED = [
    probes.has_element('[data-test-selector="verified-badge"]'),
    probes.has_element(
        'img[alt*="Verified"], img[title*="Verified"], [aria-label*="Verified"]'
    ),
    probes.text_contains("Verified Partner"),
]

_TEAM = [probes.selector_text('a[href*="/team/"]')]


class TwitchPlatform(BasePlatform):
    """Live-streaming creators on twitch.tv."""

    name = "twitch"
    display_name = "Twitch"
    host = "www.twitch.tv"
    url_patterns: list[str] = ["twitch.tv/*", "*.twitch.tv/*"]
    ready_selector = '[data-test-selector="about-panel"]'
    fallback_selector = "main"
    link_policy = LinkPolicy(
        self_hosts=("twitch.tv",),
        social=frozenset({
            LinkPlatform.YOUTUBE,
            LinkPlatform.TWITTER,
            LinkPlatform.INSTAGRAM,
            LinkPlatform.TIKTOK,
            LinkPlatform.DISCORD,
            LinkPlatform.STEAM,
        }),
    )

    def profile_path(self, username: str) -> str:
        return username

    def extract(self, snapshot: DomSnapshot) -> TwitchCreatorData:
        username = probes.username_from_url(snapshot.url)
        links = self.classify_links(snapshot)
        followers = probes.first_match(snapshot, _FOLLOWERS) or ""

        return TwitchCreatorData(
            username=username,
            display_name=probes.first_match(snapshot, _DISPLAY_NAME) or username,
            followers=probes.compact_number(followers) or followers,
            description=probes.first_match(snapshot, _DESCRIPTION) or "",
            social_media_links=links.social,
            additional_links=links.additional,
            email=probes.first_match(snapshot, _EMAIL),
            team=probes.first_match(snapshot, _TEAM),
            verified=probes.any_signal(snapshot, _VERIFIED),
        )
