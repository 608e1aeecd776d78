"""Platform router: dispatch creator identifiers to the platform that owns them."""

from __future__ import annotations

from scrapeslayer.platforms import DEFAULT_PLATFORM, BasePlatform, get_platform


class LinkRouter:
    """Registry of platforms; routes an identifier to the matching one."""

    def __init__(self, default: str | None = DEFAULT_PLATFORM) -> None:
        self._platforms: list[BasePlatform] = []
        self._default = get_platform(default) if default else None

    def register(self, platform: BasePlatform) -> None:
        self._platforms.append(platform)

    def resolve(self, value: str) -> BasePlatform | None:
        """Platform owning *value*; bare usernames go to the default platform."""
        if "/" not in value.strip():
            return self._default
        for platform in self._platforms:
            if platform.can_handle(value.strip()):
                return platform
        return None

