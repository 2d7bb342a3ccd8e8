from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, List, Optional, Union

from bs4 import BeautifulSoup, Tag

HtmlSource = Union[str, Callable[[], str]]

_FONT_WEIGHT_RE = re.compile(r"font-weight\s*:\s*([^;]+)", re.IGNORECASE)


class SoupNode:
    def __init__(self, tag: Tag):
        self._tag = tag

    def __repr__(self) -> str:
        return f"SoupNode(<{self._tag.name}>)"

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 returns multi-valued attributes (class, rel) as lists.
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def has_class(self, name: str) -> bool:
        return name in (self._tag.get("class") or [])

    def select(self, css: str) -> List["SoupNode"]:
        return [SoupNode(t) for t in self._tag.select(css)]

    def select_one(self, css: str) -> Optional["SoupNode"]:
        found = self._tag.select_one(css)
        return SoupNode(found) if found is not None else None

    def text(self) -> str:
        return self._tag.get_text()

    def font_weight(self) -> Optional[str]:
        # No layout engine here, so only the inline declaration is visible.
        style = self._tag.get("style") or ""
        match = _FONT_WEIGHT_RE.search(style)
        return match.group(1).strip() if match else None


class SoupDocument:
    """
    Mailbox document backed by BeautifulSoup.

    The source is either a fixed HTML string or a callable returning the
    current HTML. A callable source is re-read on every refresh(), which lets a
    page that is still streaming in be polled like a live view.
    """

    def __init__(self, source: HtmlSource, *, parser: str = "html.parser"):
        self._source = source
        self._parser = parser
        self._soup = self._parse()

    @classmethod
    def from_file(cls, path: Path, *, parser: str = "html.parser") -> "SoupDocument":
        return cls(path.read_text(encoding="utf-8", errors="replace"), parser=parser)

    def _parse(self) -> BeautifulSoup:
        html = self._source() if callable(self._source) else self._source
        return BeautifulSoup(html or "", self._parser)

    def refresh(self) -> None:
        if callable(self._source):
            self._soup = self._parse()

    def select(self, css: str) -> List[SoupNode]:
        return [SoupNode(t) for t in self._soup.select(css)]

    def select_one(self, css: str) -> Optional[SoupNode]:
        found = self._soup.select_one(css)
        return SoupNode(found) if found is not None else None
