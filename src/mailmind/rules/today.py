from __future__ import annotations

import re
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from dateutil import parser as date_parser

from mailmind.extractors.text import clean_time_text

# A rule answers True/False when it recognises the text, None to pass it on.
TodayRule = Callable[[str, str, datetime], Optional[bool]]

MONTHS_SHORT = ("jan", "feb", "mar", "apr", "may", "jun",
                "jul", "aug", "sep", "oct", "nov", "dec")
MONTHS_LONG = ("january", "february", "march", "april", "may", "june", "july",
               "august", "september", "october", "november", "december")

_BARE_CLOCK_RE = re.compile(r"^\d{1,2}:\d{2}\s*(?:am|pm)?$", re.IGNORECASE)
_DAY_RE = re.compile(r"\b(\d{1,2})\b")
_SLASH_RE = re.compile(r"\b(\d{1,2})/(\d{1,2})(?:/(\d{2,4}))?\b")
_ISO_RE = re.compile(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b")

# Fields the parsed text does not supply come from here, so they never
# coincide with "now" by accident.
_PARSE_DEFAULT = datetime(1900, 1, 1)


def _yesterday(text: str, lower: str, now: datetime) -> Optional[bool]:
    return False if "yesterday" in lower else None


def _today(text: str, lower: str, now: datetime) -> Optional[bool]:
    return True if "today" in lower else None


def _bare_clock(text: str, lower: str, now: datetime) -> Optional[bool]:
    # The inbox shows only a time of day for messages received today.
    return True if _BARE_CLOCK_RE.match(text) else None


def month_index(lower: str) -> int:
    """Zero-based month named in the text, or -1. Short names are checked first."""
    for names in (MONTHS_SHORT, MONTHS_LONG):
        for index, name in enumerate(names):
            if name in lower:
                return index
    return -1


def _month_and_day(text: str, lower: str, now: datetime) -> Optional[bool]:
    month = month_index(lower)
    if month == -1:
        return None
    day = _DAY_RE.search(lower)
    if not day:
        return None
    # Year is not compared: "Sep 6" carries none and means the current year.
    return int(day.group(1)) == now.day and month + 1 == now.month


def _normalize_year(raw: Optional[str], now: datetime) -> int:
    if not raw:
        return now.year
    year = int(raw)
    return 2000 + year if year < 100 else year


def _slash_date(text: str, lower: str, now: datetime) -> Optional[bool]:
    match = _SLASH_RE.search(lower)
    if not match:
        return None
    a, b = int(match.group(1)), int(match.group(2))
    year = _normalize_year(match.group(3), now)
    if year != now.year:
        return False
    month_first = a == now.month and b == now.day
    day_first = b == now.month and a == now.day
    return month_first or day_first


def _iso_date(text: str, lower: str, now: datetime) -> Optional[bool]:
    match = _ISO_RE.search(lower)
    if not match:
        return None
    year, month, day = (int(g) for g in match.groups())
    return (year, month, day) == (now.year, now.month, now.day)


def _parsed_date(text: str, lower: str, now: datetime) -> Optional[bool]:
    try:
        parsed = date_parser.parse(text, default=_PARSE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    return (parsed.year, parsed.month, parsed.day) == (now.year, now.month, now.day)


TODAY_RULES: List[Tuple[str, TodayRule]] = [
    ("yesterday", _yesterday),
    ("today", _today),
    ("bare_clock", _bare_clock),
    ("month_and_day", _month_and_day),
    ("slash_date", _slash_date),
    ("iso_date", _iso_date),
    ("parsed_date", _parsed_date),
]


def classify_time_text(
    time_text: str | None, now: Optional[datetime] = None
) -> Tuple[bool, Optional[str]]:
    """
    Decide whether time_text means "received today" relative to now.

    Returns (is_today, name of the deciding rule). Anything empty, unknown or
    broken is not today.
    """
    text = clean_time_text(time_text)
    if not text:
        return False, None

    ref = now or datetime.now()
    lower = text.lower()
    try:
        for name, rule in TODAY_RULES:
            verdict = rule(text, lower, ref)
            if verdict is not None:
                return verdict, name
    except Exception:
        return False, "error"
    return False, None


def is_today(time_text: str | None, now: Optional[datetime] = None) -> bool:
    return classify_time_text(time_text, now)[0]
