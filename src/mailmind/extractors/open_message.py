from __future__ import annotations

from typing import Optional

from mailmind.dom.document import Document, safe_select_one, safe_text

# Body containers of the conversation currently open in the reading pane.
OPEN_MESSAGE_SELECTORS = (
    ".ii.gt .a3s.aiL",
    ".a3s.aiL",
    "[data-message-id] .a3s",
    '.ii.gt div[dir="ltr"]',
    ".hx .ii.gt div",
)


def extract_open_message(doc: Document) -> Optional[str]:
    """Text of the open message body, or None when no conversation is open."""
    for selector in OPEN_MESSAGE_SELECTORS:
        el = safe_select_one(doc, selector)
        if el is None:
            continue
        text = safe_text(el).strip()
        if text:
            return text
    return None
