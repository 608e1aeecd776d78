"""Classification of outbound creator links into social and additional sets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple
from urllib.parse import parse_qs, urlsplit

from scrapeslayer.dom import Anchor
from scrapeslayer.models import LinkPlatform, SocialMediaLink

# Ordered; the first marker matching a link's host decides its platform.
_HOST_MARKERS: list[tuple[str, LinkPlatform]] = [
    ("youtube.com", LinkPlatform.YOUTUBE),
    ("youtu.be", LinkPlatform.YOUTUBE),
    ("twitter.com", LinkPlatform.TWITTER),
    ("x.com", LinkPlatform.TWITTER),
    ("instagram.com", LinkPlatform.INSTAGRAM),
    ("tiktok.com", LinkPlatform.TIKTOK),
    ("discord.gg", LinkPlatform.DISCORD),
    ("discord.com", LinkPlatform.DISCORD),
    ("steamcommunity.com", LinkPlatform.STEAM),
    ("github.com", LinkPlatform.GITHUB),
    ("twitch.tv", LinkPlatform.TWITCH),
    ("facebook.com", LinkPlatform.FACEBOOK),
    ("fb.com", LinkPlatform.FACEBOOK),
]


@dataclass(frozen=True)
class LinkPolicy:
    """How one source platform treats the links found on its pages."""

    self_hosts: tuple[str, ...]
    social: frozenset[LinkPlatform]
    excluded_hosts: tuple[str, ...] = ()
    redirect_host: str | None = None


class LinkPartition(NamedTuple):
    social: list[SocialMediaLink]
    additional: list[SocialMediaLink]


def host_of(url: str) -> str:
    try:
        return (urlsplit(url).hostname or "").lower()
    except ValueError:
        return ""


def host_matches(host: str, marker: str) -> bool:
    return host == marker or host.endswith(f".{marker}")


def detect_platform(url: str) -> LinkPlatform:
    host = host_of(url)
    for marker, platform in _HOST_MARKERS:
        if host_matches(host, marker):
            return platform
    return LinkPlatform.OTHER


def effective_url(href: str, policy: LinkPolicy) -> str:
    """Unwrap redirect links (``/redirect?q=<target>``) into their target."""
    if policy.redirect_host is None:
        return href
    try:
        parts = urlsplit(href)
    except ValueError:
        return ""
    host = (parts.hostname or "").lower()
    if host_matches(host, policy.redirect_host) and parts.path.rstrip("/") == "/redirect":
        targets = parse_qs(parts.query).get("q")
        return targets[0].strip() if targets else ""
    return href


def _is_web_url(url: str) -> bool:
    try:
        return urlsplit(url).scheme in ("http", "https")
    except ValueError:
        return False


def classify_links(anchors: Iterable[Anchor], policy: LinkPolicy) -> LinkPartition:
    """Split *anchors* into social and additional links.

    Self-links of the source platform are dropped, as are repeated URLs, so a
    URL lands in at most one of the two lists. Input order is preserved.
    """
    social: list[SocialMediaLink] = []
    additional: list[SocialMediaLink] = []
    seen: set[str] = set()

    for anchor in anchors:
        url = effective_url(anchor.href, policy)
        if not url or url in seen:
            continue
        host = host_of(url)
        if any(host_matches(host, h) for h in policy.self_hosts):
            continue

        link = SocialMediaLink(
            platform=detect_platform(url),
            url=url,
            label=anchor.text or None,
        )
        if link.platform in policy.social:
            social.append(link)
        elif _is_web_url(url) and not any(
            host_matches(host, h) for h in policy.excluded_hosts
        ):
            additional.append(link)
        else:
            continue
        seen.add(url)

    return LinkPartition(social=social, additional=additional)
