from __future__ import annotations

from mailmind.extractors.text import clean_time_text, is_valid_time_text


def test_clean_time_text_normalizes_special_spaces() -> None:
    assert clean_time_text("  10:30 AM ") == "10:30 AM"
    assert clean_time_text("Sep 6,\n\t2025") == "Sep 6, 2025"
    assert clean_time_text(None) == ""


def test_valid_time_text_needs_clock_or_date_token() -> None:
    assert is_valid_time_text("10:30 AM")
    assert is_valid_time_text("Sep 6")
    assert is_valid_time_text("Yesterday")
    assert is_valid_time_text("9/6/2025")
    assert not is_valid_time_text("42")
    assert not is_valid_time_text("Archive")
    assert not is_valid_time_text("1")
    assert not is_valid_time_text("")
