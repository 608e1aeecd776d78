"""Configuration management for scrapeslayer."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _default_executable() -> str | None:
    explicit = os.getenv("SCRAPESLAYER_BROWSER")
    if explicit:
        return explicit
    # Container images that pre-install browsers ship the system Chromium.
    if os.getenv("PLAYWRIGHT_BROWSERS_PATH"):
        return "/usr/bin/chromium-browser"
    return None


@dataclass(frozen=True)
class Config:
    """Global configuration. Timeouts and delays are in seconds."""

    headless: bool = True
    navigation_timeout: float = 30.0
    ready_timeout: float = 10.0
    fallback_timeout: float = 5.0
    batch_delay: float = 1.0
    browser_executable: str | None = None
    renderer: str = "browser"

    @classmethod
    def from_env(cls) -> Config:
        return cls(
            headless=_env_flag("SCRAPESLAYER_HEADLESS", True),
            navigation_timeout=float(os.getenv("SCRAPESLAYER_NAV_TIMEOUT", "30")),
            ready_timeout=float(os.getenv("SCRAPESLAYER_READY_TIMEOUT", "10")),
            fallback_timeout=float(os.getenv("SCRAPESLAYER_FALLBACK_TIMEOUT", "5")),
            batch_delay=float(os.getenv("SCRAPESLAYER_BATCH_DELAY", "1.0")),
            browser_executable=_default_executable(),
            renderer=os.getenv("SCRAPESLAYER_RENDERER", "browser"),
        )
