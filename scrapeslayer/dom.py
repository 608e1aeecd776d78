"""Read-only view over a rendered page."""

from __future__ import annotations

from functools import cached_property
from typing import Iterator, NamedTuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

_INVISIBLE_TAGS = frozenset({"script", "style", "noscript", "template", "head", "title"})


class Anchor(NamedTuple):
    """An ``<a>`` element reduced to its resolved href and visible text."""

    href: str
    text: str


class DomSnapshot:
    """A fully rendered DOM, queried with CSS selectors.

    Built from the HTML a renderer produced together with the URL the page
    finally settled on, so relative hrefs resolve the way a browser would.
    """

    def __init__(self, html: str, url: str) -> None:
        self.html = html
        self.url = url
        self._soup = BeautifulSoup(html, "html.parser")

    def select_one(self, selector: str) -> Tag | None:
        return self._soup.select_one(selector)

    def select(self, selector: str) -> list[Tag]:
        return list(self._soup.select(selector))

    def text_of(self, selector: str) -> str:
        """Trimmed text of the first element matching *selector*, or ``""``."""
        element = self.select_one(selector)
        return element.get_text(" ", strip=True) if element else ""

    def attr(self, selector: str, name: str) -> str:
        """Trimmed attribute *name* of the first match of *selector*, or ``""``."""
        element = self.select_one(selector)
        if element is None:
            return ""
        value = element.get(name)
        if isinstance(value, list):
            value = " ".join(value)
        return (value or "").strip()

    def meta(self, name: str) -> str:
        """Content of a ``<meta>`` tag keyed by ``name`` or ``property``."""
        return self.attr(f'meta[name="{name}"], meta[property="{name}"]', "content")

    def strings(self) -> Iterator[NavigableString]:
        """Visible text nodes in document order."""
        for node in self._soup.find_all(string=True):
            if isinstance(node, PreformattedString):
                continue
            if node.parent is not None and node.parent.name in _INVISIBLE_TAGS:
                continue
            if node.strip():
                yield node

    @cached_property
    def text_nodes(self) -> list[str]:
        return [str(node).strip() for node in self.strings()]

    @cached_property
    def page_text(self) -> str:
        return "\n".join(self.text_nodes)

    def anchors(self) -> list[Anchor]:
        result: list[Anchor] = []
        for element in self._soup.select("a[href]"):
            href = element.get("href")
            if not isinstance(href, str) or not href.strip():
                continue
            try:
                resolved = urljoin(self.url, href.strip())
            except ValueError:
                continue
            result.append(Anchor(href=resolved, text=element.get_text(" ", strip=True)))
        return result
