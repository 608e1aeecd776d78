"""Shared fixtures: synthetic about pages and an in-memory renderer."""

from __future__ import annotations

import pytest

from scrapeslayer.dom import DomSnapshot
from scrapeslayer.errors import NavigationError
from scrapeslayer.renderer import RenderContext, Renderer

TWITCH_URL = "https://www.twitch.tv/shroud/about"
YOUTUBE_URL = "https://www.youtube.com/@mkbhd/about"

TWITCH_HTML = """\
<html>
<head><meta name="description" content="Watch shroud live on Twitch"></head>
<body>
<main>
  <h1>Shroud</h1>
  <div data-test-selector="about-panel">
    <p>Former CS pro, now streaming everything.</p>
    <span data-test-selector="followers-count">10.9M followers</span>
    <img alt="Verified Partner badge" src="/badge.png">
    <a href="https://twitter.com/shroud">Twitter</a>
    <a href="https://www.youtube.com/shroud">YouTube</a>
    <a href="https://discord.gg/shroud">Discord</a>
    <a href="https://www.twitch.tv/directory">Browse</a>
    <a href="/team/sentinels">Sentinels</a>
    <a href="https://shop.example.com/merch">Merch Store</a>
    <a href="https://twitter.com/shroud">Twitter again</a>
    <a href="mailto:biz@shroud.gg">Email</a>
    <p>Business inquiries: biz@shroud.gg</p>
  </div>
</main>
</body>
</html>
"""

# No counter element, no heading, no panel: every field falls back.
TWITCH_SPARSE_HTML = """\
<html>
<head><meta name="description" content="Chill streams every weekday"></head>
<body>
<main>
  <div class="stats"><span>1,234</span> <span>followers</span></div>
  <a href="https://github.com/quietdev">github.com/quietdev</a>
</main>
</body>
</html>
"""

YOUTUBE_HTML = """\
<html>
<head><meta property="og:description" content="OG description"></head>
<body>
<ytd-app>
  <div id="page-header">
    <div id="channel-name"><div id="text">Marques Brownlee</div></div>
    <span aria-label="Verified">&#10003;</span>
    <span id="subscriber-count">19.6M subscribers</span>
  </div>
  <div id="description-container">
    <yt-attributed-string>MKBHD: Quality Tech Videos</yt-attributed-string>
  </div>
  <table>
    <tr><td>1,642 videos</td></tr>
    <tr><td>4,123,456,789 views</td></tr>
    <tr><td>Joined Mar 21, 2008</td></tr>
    <tr><td>United States</td></tr>
  </table>
  <div id="links">
    <a href="https://www.youtube.com/redirect?event=channel&amp;q=https%3A%2F%2Fdiscord.gg%2Fabc">discord.gg/abc</a>
    <a href="https://www.youtube.com/redirect?q=https%3A%2F%2Ftwitter.com%2FMKBHD">Twitter</a>
    <a href="https://www.youtube.com/@mkbhd/videos">Videos</a>
    <a href="https://accounts.google.com/ServiceLogin">Sign in</a>
    <a href="https://www.youtube.com/redirect?q=https%3A%2F%2Fshop.mkbhd.com">Shop</a>
  </div>
  <p>Contact: noreply@youtube.com or mkbhd@studio.com</p>
</ytd-app>
</body>
</html>
"""

YOUTUBE_SPARSE_HTML = """\
<html>
<body>
<ytd-app>
  <div><span>Channel</span></div>
  <div>This channel reviews mechanical keyboards.</div>
  <div>2.1K subscribers</div>
</ytd-app>
</body>
</html>
"""


def minimal_twitch_page(name: str) -> str:
    return (
        "<html><body><main>"
        f'<div data-test-selector="about-panel"><h1>{name}</h1></div>'
        "</main></body></html>"
    )


class FakeContext(RenderContext):
    def __init__(self, renderer: FakeRenderer) -> None:
        self._renderer = renderer
        self._snapshot: DomSnapshot | None = None

    async def goto(self, url: str) -> None:
        self._renderer.visited.append(url)
        page = self._renderer.pages.get(url)
        if isinstance(page, Exception):
            raise page
        if page is None:
            raise NavigationError(f"Timed out loading {url}")
        self._snapshot = DomSnapshot(page, url)

    async def wait_for(self, selector: str, timeout: float) -> None:
        self._renderer.waits.append(selector)
        assert self._snapshot is not None
        if self._snapshot.select_one(selector) is None:
            raise NavigationError(f"Timed out after {timeout:g}s waiting for {selector}")

    async def snapshot(self) -> DomSnapshot:
        assert self._snapshot is not None
        return self._snapshot

    async def close(self) -> None:
        self._renderer.closed_contexts += 1


class FakeRenderer(Renderer):
    """Serves canned HTML keyed by URL; an Exception value is raised on goto."""

    def __init__(self, pages: dict[str, str | Exception] | None = None) -> None:
        self.pages: dict[str, str | Exception] = dict(pages or {})
        self.started = False
        self.closed = False
        self.visited: list[str] = []
        self.waits: list[str] = []
        self.opened_contexts = 0
        self.closed_contexts = 0

    async def start(self) -> None:
        self.started = True

    async def new_context(self) -> RenderContext:
        self.opened_contexts += 1
        return FakeContext(self)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def twitch_snapshot() -> DomSnapshot:
    return DomSnapshot(TWITCH_HTML, TWITCH_URL)


@pytest.fixture
def youtube_snapshot() -> DomSnapshot:
    return DomSnapshot(YOUTUBE_HTML, YOUTUBE_URL)
