from __future__ import annotations

from typing import List, Optional

from mailmind.dom.soup import SoupDocument
from mailmind.extractors.fields import (
    extract_preview,
    extract_record,
    extract_sender,
    extract_subject,
    extract_time,
    extract_unread,
)
from mailmind.models import MessageRecord


def _row(html: str, selector: str = "tr"):
    doc = SoupDocument(f"<table><tbody>{html}</tbody></table>")
    node = doc.select_one(selector)
    assert node is not None
    return node


def test_extract_record_populates_all_fields() -> None:
    row = _row(
        '<tr class="zA zE">'
        '<td class="yX"><span class="yP" email="a@b.com" name="Alice">Alice</span></td>'
        '<td><span class="bog">Hi</span><span class="y2">Hello</span></td>'
        '<td class="xW"><span>10:30 AM</span></td>'
        "</tr>"
    )

    record = extract_record(row)

    assert record == MessageRecord(
        sender="a@b.com",
        subject="Hi",
        preview="Hello",
        time_text="10:30 AM",
        is_unread=True,
    )


def test_rows_without_sender_subject_and_preview_are_discarded() -> None:
    row = _row('<tr><td class="xW"><span>10:30 AM</span></td><td>----------</td></tr>')
    assert extract_record(row) is None


def test_preview_alone_keeps_the_record() -> None:
    row = _row('<tr><td><span class="y2"> - </span></td></tr>')
    record = extract_record(row)
    assert record is not None
    assert record.preview == "-"
    assert record.sender == ""
    assert record.subject == ""
    assert record.time_text == ""


def test_sender_prefers_attributes_then_text_then_row_email() -> None:
    assert extract_sender(_row('<tr><td><span class="yP" name="Bob Smith">Bob</span></td></tr>')) == "Bob Smith"
    assert extract_sender(_row('<tr><td><span class="yW" title="Carol">C.</span></td></tr>')) == "Carol"
    assert extract_sender(_row('<tr><td><span class="yW">  Dave  </span></td></tr>')) == "Dave"
    assert extract_sender(_row("<tr><td>Reply from eve.x@mail.example.org soon</td></tr>")) == "eve.x@mail.example.org"
    assert extract_sender(_row("<tr><td>nobody</td></tr>")) == ""


def test_subject_and_preview_skip_empty_candidates() -> None:
    row = _row(
        '<tr><td><span class="bog">  </span></td>'
        '<td><span class="y6"><span>Quarterly numbers</span></span>'
        '<span class="y2"></span><span class="snippetText">See attached</span></td></tr>'
    )
    assert extract_subject(row) == "Quarterly numbers"
    assert extract_preview(row) == "See attached"


def test_time_prefers_title_over_text() -> None:
    row = _row('<tr><td class="xW"><span title="Sat, Sep 6, 2025, 10:30 AM">10:30 AM</span></td></tr>')
    assert extract_time(row) == "Sat, Sep 6, 2025, 10:30 AM"


def test_time_skips_titles_that_are_not_timestamps() -> None:
    row = _row('<tr><td class="xW"><span title="Archive">Sep 6</span></td></tr>')
    assert extract_time(row) == "Sep 6"


def test_time_falls_back_to_last_match_in_aria_label() -> None:
    row = _row('<tr aria-label="Bob, lunch at 9:00 AM, received 10:30 AM"><td>Bob</td></tr>')
    assert extract_time(row) == "10:30 AM"


def test_time_label_patterns_are_tried_in_order() -> None:
    row = _row('<tr aria-label="Bob, Lunch plans, Sep 5, yesterday"><td>Bob</td></tr>')
    assert extract_time(row) == "Sep 5"


def test_time_falls_back_to_clock_in_row_text() -> None:
    row = _row('<tr><td><span class="bog">Hi</span> 4:05 PM</td></tr>')
    assert extract_time(row) == "4:05 PM"


def test_time_is_empty_when_nothing_matches() -> None:
    row = _row('<tr><td><span class="bog">Hi</span> no time</td></tr>')
    assert extract_time(row) == ""


def test_time_logs_its_source() -> None:
    lines: List[str] = []
    row = _row('<tr><td class="xW"><span>10:30 AM</span></td></tr>')
    extract_time(row, lines.append)
    assert lines and lines[0].startswith("[time] Found via text")


def test_unread_indicators() -> None:
    assert extract_unread(_row('<tr class="zA zE"><td>x</td></tr>'))
    assert extract_unread(_row('<tr><td><span class="zE">x</span></td></tr>'))
    assert extract_unread(_row('<tr><td style="font-weight: bold">x</td></tr>'))
    assert extract_unread(_row('<tr><td style="color:red;font-weight:bold">x</td></tr>'))
    assert extract_unread(_row('<tr style="font-weight: 700"><td>x</td></tr>'))
    assert extract_unread(_row('<tr aria-label="UNREAD, Bob"><td>x</td></tr>'))
    assert not extract_unread(_row('<tr class="zA yO" style="font-weight: normal"><td>x</td></tr>'))


class BrokenNode:
    """Node whose host calls fail, like a handle detached mid-scan."""

    def __init__(self, label: Optional[str] = None):
        self._label = label

    def attr(self, name: str) -> Optional[str]:
        if name == "aria-label" and self._label is not None:
            return self._label
        raise RuntimeError("stale element")

    def has_class(self, name: str) -> bool:
        raise RuntimeError("stale element")

    def select(self, css: str) -> list:
        raise RuntimeError("stale element")

    def select_one(self, css: str):
        raise RuntimeError("stale element")

    def text(self) -> str:
        raise RuntimeError("stale element")

    def font_weight(self) -> Optional[str]:
        raise RuntimeError("stale element")


def test_failing_unread_indicator_does_not_hide_others() -> None:
    assert extract_unread(BrokenNode(label="unread message")) is True
    assert extract_unread(BrokenNode()) is False


def test_stale_row_yields_no_record_without_raising() -> None:
    assert extract_record(BrokenNode()) is None
