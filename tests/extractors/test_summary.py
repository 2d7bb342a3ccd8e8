from __future__ import annotations

from mailmind.extractors.summary import clean_preview, summarize


def test_clean_preview_strips_separator_and_ellipsis() -> None:
    assert clean_preview(" - Hello there. See you soon…") == "Hello there. See you soon"
    assert clean_preview("Status update...") == "Status update"


def test_summarize_splits_preview_into_sentences() -> None:
    assert summarize(" - Hello there. See you soon…") == ["Hello there.", "See you soon"]


def test_summarize_uses_body_when_preview_is_short() -> None:
    bullets = summarize("Quick note", "The deploy is done! Please verify staging.", max_bullets=3)
    assert bullets == ["Quick note", "The deploy is done!", "Please verify staging."]


def test_summarize_empty_input() -> None:
    assert summarize("", "") == []
