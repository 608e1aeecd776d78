"""Registry of supported creator platforms."""

from __future__ import annotations

from scrapeslayer.platforms.base import BasePlatform
from scrapeslayer.platforms.twitch import TwitchPlatform
from scrapeslayer.platforms.youtube import YouTubePlatform

_PLATFORMS: dict[str, BasePlatform] = {
    p.name: p for p in [TwitchPlatform(), YouTubePlatform()]
}

DEFAULT_PLATFORM = "twitch"


def get_all_platforms() -> list[BasePlatform]:
    return list(_PLATFORMS.values())


def get_platform(name: str) -> BasePlatform:
    """Look up a platform by name (case-insensitive)."""
    try:
        return _PLATFORMS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown platform: {name}. Available: {', '.join(_PLATFORMS)}"
        ) from None


__all__: list[str] = [
    "BasePlatform",
    "DEFAULT_PLATFORM",
    "TwitchPlatform",
    "YouTubePlatform",
    "get_all_platforms",
    "get_platform",
]
