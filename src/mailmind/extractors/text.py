from __future__ import annotations

import re

_CLOCK_RE = re.compile(r"\d{1,2}:\d{2}")
_DATE_TOKEN_RE = re.compile(
    r"(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec|today|yesterday|\d{1,2}/\d{1,2})",
    flags=re.IGNORECASE,
)


def clean_time_text(text: str | None) -> str:
    """Map NBSP / narrow NBSP to spaces, collapse whitespace, trim."""
    cleaned = (text or "").replace("\u00a0", " ").replace("\u202f", " ")
    return re.sub(r"\s+", " ", cleaned).strip()


def is_valid_time_text(text: str | None) -> bool:
    """True if the text plausibly is a timestamp (a clock time or a date token)."""
    if not text or len(text) < 2:
        return False
    return bool(_CLOCK_RE.search(text) or _DATE_TOKEN_RE.search(text))
