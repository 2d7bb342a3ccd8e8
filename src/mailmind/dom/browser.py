from __future__ import annotations

from typing import List, Optional

from playwright.sync_api import ElementHandle, Page

_COMPUTED_WEIGHT_JS = "el => window.getComputedStyle(el).fontWeight"
_HAS_CLASS_JS = "(el, name) => el.classList.contains(name)"


class BrowserNode:
    """ElementHandle wrapper. Handles can go stale while Gmail re-renders."""

    def __init__(self, handle: ElementHandle):
        self._handle = handle

    def __repr__(self) -> str:
        return f"BrowserNode({self._handle!r})"

    def attr(self, name: str) -> Optional[str]:
        return self._handle.get_attribute(name)

    def has_class(self, name: str) -> bool:
        return bool(self._handle.evaluate(_HAS_CLASS_JS, name))

    def select(self, css: str) -> List["BrowserNode"]:
        return [BrowserNode(h) for h in self._handle.query_selector_all(css)]

    def select_one(self, css: str) -> Optional["BrowserNode"]:
        found = self._handle.query_selector(css)
        return BrowserNode(found) if found is not None else None

    def text(self) -> str:
        return self._handle.text_content() or ""

    def font_weight(self) -> Optional[str]:
        return self._handle.evaluate(_COMPUTED_WEIGHT_JS)


class BrowserDocument:
    """Live Gmail tab driven through Playwright's sync API."""

    def __init__(self, page: Page):
        self._page = page

    def refresh(self) -> None:
        # The page is live; every query already sees the current DOM.
        return None

    def select(self, css: str) -> List[BrowserNode]:
        return [BrowserNode(h) for h in self._page.query_selector_all(css)]

    def select_one(self, css: str) -> Optional[BrowserNode]:
        found = self._page.query_selector(css)
        return BrowserNode(found) if found is not None else None

    def sleep(self, seconds: float) -> None:
        # Let the page keep processing events while the engine waits.
        self._page.wait_for_timeout(seconds * 1000)
