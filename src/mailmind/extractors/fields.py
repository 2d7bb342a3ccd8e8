from __future__ import annotations

import re
from typing import Callable, Optional, Sequence, TypeVar

from mailmind.dom.document import (
    Node,
    is_bold_weight,
    safe_attr,
    safe_select_one,
    safe_text,
)
from mailmind.extractors.text import clean_time_text, is_valid_time_text
from mailmind.models import MessageRecord

Log = Optional[Callable[[str], None]]
T = TypeVar("T")

SENDER_SELECTORS = (
    "[email]",
    ".yW",
    ".yP",
    "[name]",
    ".go span[email]",
    ".bA4 span",
    ".a4W span",
    ".yX span",
)
# Attribute order matters: explicit address before display name.
SENDER_ATTRIBUTES = ("email", "name", "title")
EMAIL_RE = re.compile(r"[\w.-]+@[\w.-]+\.\w+")

SUBJECT_SELECTORS = (
    ".bog",
    "[data-thread-perm-id] .y6 span",
    ".y6 span",
    ".y6",
    ".aYS",
    ".Zt",
    ".a4W .ao9",
    ".bqe span",
)

PREVIEW_SELECTORS = (
    ".y2",
    ".bog + span",
    ".y6 + .y2",
    ".aYS + .y2",
    ".Zt + span",
    ".snippetText",
)

TIME_SELECTORS = (
    "time",
    "td.xW span",
    ".xW span",
    ".xY span",
    '[title*=":"]',
    ".xz",
    ".g3 span",
    ".byg span",
    "span[title]",
    ".xY",
    ".xW",
)

_MONTHS = "Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"

# Scanned against the row's aria-label; the label usually ends with the time,
# so the last match of the first productive pattern is used.
LABEL_TIME_PATTERNS = (
    re.compile(r"(\d{1,2}:\d{2}\s*(?:AM|PM|am|pm))"),
    re.compile(rf"\b((?:{_MONTHS})\s+\d{{1,2}}(?:,\s*\d{{4}})?)\b"),
    re.compile(rf"\b(\d{{1,2}}\s+(?:{_MONTHS})(?:\s+\d{{4}})?)\b"),
    re.compile(r"\b(yesterday)\b", re.IGNORECASE),
    re.compile(r"\b(today)\b", re.IGNORECASE),
    re.compile(r"(\d{1,2}/\d{1,2}/\d{2,4})"),
)
ROW_CLOCK_RE = re.compile(r"\b(\d{1,2}:\d{2}\s*(?:AM|PM|am|pm))\b")

UNREAD_CLASSES = ("zE",)
BOLD_STYLE_SELECTOR = '[style*="font-weight: bold"], [style*="font-weight:bold"]'


def _first_text(row: Node, selectors: Sequence[str]) -> str:
    for selector in selectors:
        el = safe_select_one(row, selector)
        if el is None:
            continue
        text = safe_text(el).strip()
        if text:
            return text
    return ""


def extract_sender(row: Node) -> str:
    for selector in SENDER_SELECTORS:
        el = safe_select_one(row, selector)
        if el is None:
            continue
        for name in SENDER_ATTRIBUTES:
            value = safe_attr(el, name).strip()
            if value:
                return value
        text = safe_text(el).strip()
        if text:
            return text

    match = EMAIL_RE.search(safe_text(row))
    return match.group(0) if match else ""


def extract_subject(row: Node) -> str:
    return _first_text(row, SUBJECT_SELECTORS)


def extract_preview(row: Node) -> str:
    return _first_text(row, PREVIEW_SELECTORS)


def _time_from_label(label: str) -> str:
    for pattern in LABEL_TIME_PATTERNS:
        matches = pattern.findall(label)
        if matches:
            candidate = clean_time_text(matches[-1])
            if is_valid_time_text(candidate):
                return candidate
    return ""


def extract_time(row: Node, log: Log = None) -> str:
    for selector in TIME_SELECTORS:
        el = safe_select_one(row, selector)
        if el is None:
            continue
        # The title tooltip often carries the full timestamp; prefer it.
        for source, raw in (("title", safe_attr(el, "title")), ("text", safe_text(el))):
            candidate = clean_time_text(raw)
            if candidate and is_valid_time_text(candidate):
                if log:
                    log(f"[time] Found via {source} of {selector}: {candidate}")
                return candidate

    label = safe_attr(row, "aria-label")
    if label:
        candidate = _time_from_label(label)
        if candidate:
            if log:
                log(f"[time] Found via aria-label: {candidate}")
            return candidate

    match = ROW_CLOCK_RE.search(safe_text(row))
    if match:
        if log:
            log(f"[time] Found in row text: {match.group(1)}")
        return clean_time_text(match.group(1))

    if log:
        log("[time] No time found for row")
    return ""


def _has_unread_class(row: Node) -> bool:
    for name in UNREAD_CLASSES:
        if row.has_class(name) or row.select_one(f".{name}") is not None:
            return True
    return False


def _has_bold_descendant(row: Node) -> bool:
    return row.select_one(BOLD_STYLE_SELECTOR) is not None


def _row_is_bold(row: Node) -> bool:
    return is_bold_weight(row.font_weight())


def _label_says_unread(row: Node) -> bool:
    return "unread" in (row.attr("aria-label") or "").lower()


UNREAD_INDICATORS: Sequence[Callable[[Node], bool]] = (
    _has_unread_class,
    _has_bold_descendant,
    _row_is_bold,
    _label_says_unread,
)


def extract_unread(row: Node) -> bool:
    for indicator in UNREAD_INDICATORS:
        try:
            if indicator(row):
                return True
        except Exception:
            # One broken indicator must not hide the others.
            continue
    return False


def _guarded(field: str, fn: Callable[[], T], default: T, log: Log) -> T:
    try:
        return fn()
    except Exception as exc:
        if log:
            log(f"[row] Failed to extract {field}: {type(exc).__name__}: {exc}")
        return default


def extract_record(row: Node, log: Log = None) -> Optional[MessageRecord]:
    """
    Pull the five message fields out of one row.
    Returns None when the row carries no sender, subject or preview.
    """
    record = MessageRecord(
        sender=_guarded("sender", lambda: extract_sender(row), "", log),
        subject=_guarded("subject", lambda: extract_subject(row), "", log),
        preview=_guarded("preview", lambda: extract_preview(row), "", log),
        time_text=_guarded("time", lambda: extract_time(row, log), "", log),
        is_unread=_guarded("unread", lambda: extract_unread(row), False, log),
    )
    if record.is_noise():
        return None

    if log:
        log(
            f"[row] sender={record.sender[:20]!r} subject={record.subject[:30]!r} "
            f"time={record.time_text!r} unread={record.is_unread}"
        )
    return record
