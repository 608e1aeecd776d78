"""Base platform interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from urllib.parse import urlsplit, urlunsplit

from scrapeslayer.dom import DomSnapshot
from scrapeslayer.errors import InvalidInputError
from scrapeslayer.links import LinkPartition, LinkPolicy, classify_links, host_matches
from scrapeslayer.models import TwitchCreatorData, YouTubeCreatorData


class BasePlatform(ABC):
    """All supported creator platforms implement this interface."""

    name: str = ""
    display_name: str = ""
    host: str = ""
    url_patterns: list[str] = []
    ready_selector: str = "main"
    fallback_selector: str = "body"
    link_policy: LinkPolicy

    @abstractmethod
    def profile_path(self, username: str) -> str:
        """Path of a creator's channel page, without the leading slash."""
        ...

    @abstractmethod
    def extract(self, snapshot: DomSnapshot) -> TwitchCreatorData | YouTubeCreatorData:
        """Build a creator record from a rendered about page."""
        ...

    @property
    def host_marker(self) -> str:
        return self.host.removeprefix("www.")

    def can_handle(self, url: str) -> bool:
        """Check if this platform owns the given URL."""
        from fnmatch import fnmatch

        try:
            parsed = urlsplit(url if "://" in url else f"https://{url}")
        except ValueError:
            return False
        host_path = f"{parsed.netloc}{parsed.path}"
        return any(fnmatch(host_path, p) for p in self.url_patterns)

    def profile_url(self, username: str) -> str:
        return f"https://{self.host}/{self.profile_path(username)}"

    def normalize_url(self, value: str) -> str:
        """Map a bare username or a channel URL to its ``/about`` page."""
        text = value.strip()
        if not text:
            raise InvalidInputError(value, self.host_marker)
        if "/" not in text:
            return f"{self.profile_url(text)}/about"

        if "://" not in text:
            text = f"https://{text}"
        try:
            parts = urlsplit(text)
        except ValueError:
            raise InvalidInputError(value, self.host_marker) from None
        if not host_matches((parts.hostname or "").lower(), self.host_marker):
            raise InvalidInputError(value, self.host_marker)

        path = parts.path.rstrip("/")
        if path.lower().endswith("/about"):
            path = path[: -len("/about")].rstrip("/")
        if not path:
            raise InvalidInputError(value, self.host_marker)
        return urlunsplit((parts.scheme, parts.netloc, f"{path}/about", "", ""))

    def classify_links(self, snapshot: DomSnapshot) -> LinkPartition:
        return classify_links(snapshot.anchors(), self.link_policy)
