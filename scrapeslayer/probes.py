"""Small, composable field probes run against a :class:`DomSnapshot`.

A probe is a callable ``(snapshot) -> value | None``. Fields are extracted by
running an ordered list of probes and keeping the first non-empty value, so
ties are settled by list order.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional, TypeVar
from urllib.parse import urlsplit

from bs4.element import NavigableString

from scrapeslayer.dom import DomSnapshot

T = TypeVar("T")

Probe = Callable[[DomSnapshot], Optional[T]]

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_NUMBER_RE = re.compile(r"(\d[\d,.]*)\s?([KkMmBb])?(?![A-Za-z])")


def first_match(snapshot: DomSnapshot, probes: Iterable[Probe[T]]) -> T | None:
    """Run *probes* in order and return the first truthy result."""
    for probe in probes:
        value = probe(snapshot)
        if value:
            return value
    return None


def any_signal(snapshot: DomSnapshot, probes: Iterable[Probe[bool]]) -> bool:
    return first_match(snapshot, probes) is not None


# ----------------------------------------------------------------------
# Text helpers
# ----------------------------------------------------------------------


def compact_number(text: str) -> str | None:
    """Return the leading count token of *text* (``"1.2M"``, ``"12345"``)."""
    m = _NUMBER_RE.search(text)
    if not m:
        return None
    digits = m.group(1).replace(",", "").rstrip(".")
    return f"{digits}{(m.group(2) or '').upper()}" if digits else None


def count_before(cue: str) -> Callable[[str], str | None]:
    """Build a parser for ``<number> <cue>`` phrases such as ``1.2M followers``.

    Falls back to the leading number of the text when the number does not
    sit directly in front of the cue.
    """
    anchored = re.compile(
        rf"(\d[\d,.]*\s?[KMB]?)\s*{re.escape(cue)}\b", re.IGNORECASE
    )

    def parse(text: str) -> str | None:
        m = anchored.search(text)
        if m:
            return compact_number(m.group(1))
        return compact_number(text)

    return parse


def username_from_url(url: str, *, strip_at: bool = False) -> str:
    """Last path segment of *url* once a trailing ``about`` segment is dropped."""
    segments = [s for s in urlsplit(url).path.split("/") if s]
    if segments and segments[-1].lower() == "about":
        segments.pop()
    username = segments[-1] if segments else ""
    if strip_at:
        username = username.removeprefix("@")
    return username


# ----------------------------------------------------------------------
# Probe factories
# ----------------------------------------------------------------------


def selector_text(*selectors: str) -> Probe[str]:
    """Text of the first listed selector that yields non-empty text."""

    def probe(snapshot: DomSnapshot) -> str | None:
        for selector in selectors:
            text = snapshot.text_of(selector)
            if text:
                return text
        return None

    return probe


def meta_content(*names: str) -> Probe[str]:
    def probe(snapshot: DomSnapshot) -> str | None:
        for name in names:
            content = snapshot.meta(name)
            if content:
                return content
        return None

    return probe


def _enclosing_text(node: NavigableString, own: str) -> str:
    element = node.parent
    while element is not None:
        text = element.get_text(" ", strip=True)
        if text != own:
            return text
        element = element.parent
    return ""


def cue_scan(
    cue: str,
    parse: Callable[[str], str | None],
    *,
    case_sensitive: bool = False,
) -> Probe[str]:
    """Scan text nodes containing *cue* and parse the first usable one.

    A node holding nothing but the cue word is a label whose number sits in a
    sibling; for those the nearest enclosing element with more text is parsed.
    """
    needle = cue if case_sensitive else cue.lower()

    def probe(snapshot: DomSnapshot) -> str | None:
        for node in snapshot.strings():
            text = str(node).strip()
            haystack = text if case_sensitive else text.lower()
            if needle not in haystack:
                continue
            value = parse(text)
            if not value and haystack == needle:
                value = parse(_enclosing_text(node, text))
            if value:
                return value
        return None

    return probe


def exact_text(values: Iterable[str]) -> Probe[str]:
    """First text node equal to one of *values*."""
    choices = frozenset(values)

    def probe(snapshot: DomSnapshot) -> str | None:
        for text in snapshot.text_nodes:
            if text in choices:
                return text
        return None

    return probe


def bounded_text(
    min_len: int,
    max_len: int,
    *,
    exclude: re.Pattern[str] | None = None,
) -> Probe[str]:
    """First text node with ``min_len <= len < max_len`` not matching *exclude*."""

    def probe(snapshot: DomSnapshot) -> str | None:
        for text in snapshot.text_nodes:
            if not min_len <= len(text) < max_len:
                continue
            if exclude is not None and exclude.search(text):
                continue
            return text
        return None

    return probe


def email_in_text(*, exclude: Iterable[str] = ()) -> Probe[str]:
    blocked = tuple(s.lower() for s in exclude)

    def probe(snapshot: DomSnapshot) -> str | None:
        for m in EMAIL_RE.finditer(snapshot.page_text):
            candidate = m.group(0)
            if any(b in candidate.lower() for b in blocked):
                continue
            return candidate
        return None

    return probe


# ----------------------------------------------------------------------
# Boolean signals
# ----------------------------------------------------------------------


def has_element(selector: str) -> Probe[bool]:
    def probe(snapshot: DomSnapshot) -> bool | None:
        return True if snapshot.select_one(selector) is not None else None

    return probe


def text_contains(literal: str) -> Probe[bool]:
    def probe(snapshot: DomSnapshot) -> bool | None:
        return True if literal in snapshot.page_text else None

    return probe
