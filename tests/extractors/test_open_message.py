from __future__ import annotations

from mailmind.dom.soup import SoupDocument
from mailmind.extractors.open_message import extract_open_message


def test_extract_open_message_returns_first_non_empty_body() -> None:
    doc = SoupDocument(
        '<div class="ii gt"><div class="a3s aiL">   </div></div>'
        '<div data-message-id="m1"><div class="a3s"> Can we move the call to 3pm? </div></div>'
    )
    assert extract_open_message(doc) == "Can we move the call to 3pm?"


def test_extract_open_message_without_open_conversation() -> None:
    doc = SoupDocument('<div role="main"><table class="F"></table></div>')
    assert extract_open_message(doc) is None
